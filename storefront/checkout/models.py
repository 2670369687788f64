# module storefront.checkout.models
"""
Modèles du checkout (pydantic v2).
- Les noms JSON suivent le front (camelCase): stripePriceId, orderId, customerEmail.
- quantity reste brute (int ou texte): elle est revalidée par le builder.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CartVariant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    stripe_price_id: Optional[str] = Field(default=None, alias="stripePriceId")
    price: Optional[float] = None
    length: Optional[float] = None


class WarrantySelection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    policy_id: Optional[str] = Field(default=None, alias="policyId")
    months: Optional[int] = None
    stripe_price_id: Optional[str] = Field(default=None, alias="stripePriceId")
    additional_cost: Optional[float] = Field(default=None, alias="additionalCost")


class CartItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    name: Optional[str] = None
    variant: Optional[CartVariant] = None
    quantity: Any = None
    warranty: Optional[WarrantySelection] = None


class LineItem(BaseModel):
    """Ligne envoyée à Stripe: référence de prix + quantité."""
    model_config = ConfigDict(frozen=True)

    price: str
    quantity: int

    def to_stripe(self) -> Dict[str, Any]:
        return {"price": self.price, "quantity": self.quantity}


class CheckoutRequest(BaseModel):
    """
    Corps JSON de POST /api/v1/checkout/session.
    Les URLs de retour, pays et locale ne sont pas acceptés ici (configuration fixe).
    """
    model_config = ConfigDict(populate_by_name=True)

    items: List[CartItem] = Field(default_factory=list)
    order_id: str = Field(alias="orderId")
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")

    @field_validator("order_id", mode="before")
    @classmethod
    def _order_id_as_text(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("customer_email", mode="before")
    @classmethod
    def _blank_email_is_guest(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CheckoutSessionResult(BaseModel):
    id: str
    url: Optional[str] = None


class CheckoutResponse:
    """
    Réponse structurée du service: code HTTP + corps JSON.
    - 200 {id, url}: session créée
    - 400 {error}: validation (jamais retentée automatiquement)
    - 500 {error}: échec fournisseur (retentable)
    """

    def __init__(
        self,
        status_code: int,
        body: Dict[str, Any],
        result: Optional[CheckoutSessionResult] = None,
        kind: Optional[str] = None,
        error: Optional[BaseException] = None,
    ):
        self.status_code = status_code
        self.body = body
        self.result = result
        # kind: type d'erreur de validation (400); error: exception fournisseur (500)
        self.kind = kind
        self.error = error

    @property
    def status(self) -> str:
        if self.status_code == 200:
            return "created"
        if self.status_code == 400:
            return "bad_request"
        return "server_error"

    @property
    def ok(self) -> bool:
        return self.status_code == 200
