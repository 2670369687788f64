"""
Module 'checkout' (feature-first): point d'entrée public.
Réunit le builder de line_items, la requête de session Stripe, l'adaptateur
Stripe, le repository BD et le traitement du webhook.
"""

from .models import (
    CartItem,
    CartVariant,
    WarrantySelection,
    LineItem,
    CheckoutRequest,
    CheckoutSessionResult,
    CheckoutResponse,
)
from .result import Ok, Err, EMPTY_ORDER, MISSING_PRICE_REFERENCE, INVALID_QUANTITY
from .line_items import build_line_items, parse_quantity
from .metadata import make_metadata, extract_order_id
from .stripe_client import StripeCheckoutProvider
from .session import CheckoutSessionService
from .flow import create_session_with_recovery
from .webhook import process_event

__all__ = [
    # models
    "CartItem",
    "CartVariant",
    "WarrantySelection",
    "LineItem",
    "CheckoutRequest",
    "CheckoutSessionResult",
    "CheckoutResponse",
    # result
    "Ok",
    "Err",
    "EMPTY_ORDER",
    "MISSING_PRICE_REFERENCE",
    "INVALID_QUANTITY",
    # builder
    "build_line_items",
    "parse_quantity",
    # metadata
    "make_metadata",
    "extract_order_id",
    # stripe / services
    "StripeCheckoutProvider",
    "CheckoutSessionService",
    "create_session_with_recovery",
    "process_event",
]
