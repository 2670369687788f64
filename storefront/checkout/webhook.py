"""
Traitement des événements Stripe (webhook signé).
- checkout.session.completed: commande 'paid', session 'completed', transaction 'completed'
- payment_intent.succeeded: transaction 'succeeded'
- autres types: journalisés et ignorés
Les écritures sont best-effort: un échec est journalisé, le traitement continue.
"""
import logging
from typing import Any, Dict, Optional

from . import repository as default_repository
from .metadata import extract_order_id

logger = logging.getLogger(__name__)

# module storefront.checkout.webhook
def _amount(value: Any) -> Optional[float]:
    # Stripe exprime les montants en plus petite unité (centimes/haléřů)
    if value is None:
        return None
    try:
        return float(value) / 100
    except (TypeError, ValueError):
        return None


def handle_checkout_completed(session: Dict[str, Any], repository: Any = default_repository) -> bool:
    order_id = extract_order_id(session)
    if not order_id:
        logger.error("checkout.webhook no orderId in session metadata session_id=%s", session.get("id"))
        return False

    if not repository.update_order_status(order_id, "paid"):
        return False

    repository.complete_payment_session(session.get("id"))
    repository.insert_payment_transaction({
        "order_id": order_id,
        "stripe_payment_intent_id": session.get("payment_intent"),
        "amount": _amount(session.get("amount_total")),
        "currency": session.get("currency"),
        "status": "completed",
        "type": "payment",
        "metadata": {
            "session_id": session.get("id"),
            "payment_status": session.get("payment_status"),
            "customer_email": (session.get("customer_details") or {}).get("email"),
        },
    })
    return True


def handle_payment_intent_succeeded(intent: Dict[str, Any], repository: Any = default_repository) -> bool:
    row = repository.insert_payment_transaction({
        "stripe_payment_intent_id": intent.get("id"),
        "stripe_charge_id": intent.get("latest_charge"),
        "amount": _amount(intent.get("amount")),
        "currency": intent.get("currency"),
        "status": "succeeded",
        "type": "payment_intent",
        "metadata": intent.get("metadata"),
    })
    return bool(row)


def process_event(event: Dict[str, Any], repository: Any = default_repository) -> str:
    """
    Archive l'événement puis le route selon son type.
    Retourne "handled" ou "ignored".
    """
    event_type = (event or {}).get("type") or ""
    data = (event or {}).get("data") or {}
    logger.info("checkout.webhook received type=%s id=%s", event_type, event.get("id"))

    repository.store_stripe_event(event_id=event.get("id"), event_type=event_type, data=data)

    obj = data.get("object") or {}
    if event_type == "checkout.session.completed":
        handle_checkout_completed(obj, repository)
        return "handled"
    if event_type == "payment_intent.succeeded":
        handle_payment_intent_succeeded(obj, repository)
        return "handled"

    logger.info("checkout.webhook unhandled type=%s", event_type)
    return "ignored"
