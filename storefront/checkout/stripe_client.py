"""
Adaptateur Stripe: centralise les appels au SDK.
Injecté dans le service (pas de singleton global) pour que les tests puissent
substituer un faux fournisseur.
"""
from typing import Any, Dict, Optional

import stripe

from storefront.config import STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET

# module storefront.checkout.stripe_client
def as_dict(obj: Any) -> Dict[str, Any]:
    """
    Convertit un objet Stripe en dict.
    Selon la version du SDK, StripeObject hérite de dict ou expose to_dict().
    """
    if isinstance(obj, dict):
        return obj
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return dict(obj)

class StripeCheckoutProvider:
    def __init__(self, api_key: Optional[str] = None, webhook_secret: Optional[str] = None):
        self.api_key = api_key if api_key is not None else STRIPE_SECRET_KEY
        self.webhook_secret = webhook_secret if webhook_secret is not None else STRIPE_WEBHOOK_SECRET

    def create_session(self, **params: Any) -> Dict[str, Any]:
        """
        Crée une session Stripe Checkout.
        - params: payload complet (line_items, mode, success_url, cancel_url, metadata, ...)
        - Pas de clé d'idempotence: un retry peut créer une session en double.
        Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
        """
        session = stripe.checkout.Session.create(api_key=self.api_key or None, **params)
        return as_dict(session)

    def construct_event(self, payload: bytes, sig_header: str) -> Dict[str, Any]:
        """
        Valide la signature d'un webhook (Stripe-Signature + STRIPE_WEBHOOK_SECRET).
        Lève stripe.SignatureVerificationError ou ValueError si invalide.
        """
        event = stripe.Webhook.construct_event(payload, sig_header, self.webhook_secret or "")
        return as_dict(event)
