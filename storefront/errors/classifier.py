"""
Classification pure des échecs en AppError.
Aucun log ni persistance ici: c'est à l'appelant de le faire.
"""
import traceback
from typing import Any

import stripe

from .models import AppError, SEVERITY_HIGH, SEVERITY_MEDIUM, UNKNOWN_ERROR

# module storefront.errors.classifier
NETWORK_MARKERS = ("network", "timeout")

# Exceptions réseau dont le nom ne contient aucun des marqueurs
NETWORK_EXCEPTIONS = (ConnectionError, stripe.APIConnectionError)


def is_network_failure(error: BaseException) -> bool:
    """
    Vrai si le type ou le message de l'exception évoque le réseau ou un timeout
    (insensible à la casse), ou si c'est une erreur de connexion connue.
    """
    if isinstance(error, NETWORK_EXCEPTIONS):
        return True
    kind = type(error).__name__.lower()
    text = str(error).lower()
    return any(marker in kind or marker in text for marker in NETWORK_MARKERS)


def handle_error(error: Any) -> AppError:
    """
    Transforme n'importe quel échec en exactement une AppError.
    - AppError: retournée telle quelle (même objet).
    - Exception: high/retryable si réseau/timeout, sinon medium/non retryable.
    - Autre valeur: UNKNOWN_ERROR, high, non retryable, valeur d'origine en métadonnée.
    """
    if isinstance(error, AppError):
        return error

    if isinstance(error, BaseException):
        network = is_network_failure(error)
        metadata = {}
        if error.__traceback__ is not None:
            metadata["original_stack"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        return AppError(
            str(error) or type(error).__name__,
            code=type(error).__name__,
            metadata=metadata,
            severity=SEVERITY_HIGH if network else SEVERITY_MEDIUM,
            retryable=network,
        )

    return AppError(
        "An unexpected error occurred",
        code=UNKNOWN_ERROR,
        metadata={"original_error": error},
        severity=SEVERITY_HIGH,
        retryable=False,
    )
