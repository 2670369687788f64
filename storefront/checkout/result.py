"""
Résultat étiqueté du builder: Ok(valeur) ou Err(kind, message).
Oblige l'appelant à traiter explicitement le chemin d'échec.
"""
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")

# module storefront.checkout.result
EMPTY_ORDER = "EmptyOrder"
MISSING_PRICE_REFERENCE = "MissingPriceReference"
INVALID_QUANTITY = "InvalidQuantity"

VALIDATION_ERROR_KINDS = (EMPTY_ORDER, MISSING_PRICE_REFERENCE, INVALID_QUANTITY)


class Ok(Generic[T]):
    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    def is_ok(self) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Ok) and other.value == self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


class Err:
    """
    Échec de validation.
    - kind: une des VALIDATION_ERROR_KINDS
    - scope: "variant" ou "warranty" pour MissingPriceReference
    """
    __slots__ = ("kind", "message", "scope")

    def __init__(self, kind: str, message: str, scope: Optional[str] = None):
        if kind not in VALIDATION_ERROR_KINDS:
            raise ValueError(f"Type d'erreur de validation inconnu: {kind}")
        self.kind = kind
        self.message = message
        self.scope = scope

    def is_ok(self) -> bool:
        return False

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Err)
            and other.kind == self.kind
            and other.message == self.message
            and other.scope == self.scope
        )

    def __repr__(self) -> str:
        return f"Err({self.kind!r}, {self.message!r}, scope={self.scope!r})"


Result = Union[Ok[T], Err]
