"""
Accès aux données pour la feature 'checkout' (tables orders, payment_sessions,
payment_transactions, stripe_events).
Toutes les écritures passent par le client service-role. Les échecs sont
journalisés et signalés par un retour falsy, jamais propagés.
"""
from typing import Any, Dict, Optional
import logging
import storefront.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

# module storefront.checkout.repository
def update_order_status(order_id: str, status: str) -> bool:
    """Met à jour orders.status (ex: pending_payment, paid)."""
    try:
        (
            supabase_client.get_service_supabase()
            .table("orders")
            .update({"status": status})
            .eq("id", order_id)
            .execute()
        )
        return True
    except Exception:
        logger.exception("checkout.repository.update_order_status failed order_id=%s status=%s", order_id, status)
        return False

def insert_payment_session(
    *,
    order_id: str,
    stripe_session_id: str,
    currency: str,
    amount: Optional[float] = None,
    user_id: Optional[str] = None,
) -> Optional[dict]:
    """Enregistre la session Stripe créée (status 'pending')."""
    row: Dict[str, Any] = {
        "order_id": order_id,
        "stripe_session_id": stripe_session_id,
        "status": "pending",
        "currency": currency,
    }
    if amount is not None:
        row["amount"] = amount
    if user_id:
        row["user_id"] = user_id
    try:
        (
            supabase_client.get_service_supabase()
            .table("payment_sessions")
            .insert(row)
            .execute()
        )
        return {"status": "ok"}
    except Exception:
        logger.exception("checkout.repository.insert_payment_session failed order_id=%s", order_id)
        return None

def complete_payment_session(stripe_session_id: str) -> bool:
    try:
        (
            supabase_client.get_service_supabase()
            .table("payment_sessions")
            .update({"status": "completed"})
            .eq("stripe_session_id", stripe_session_id)
            .execute()
        )
        return True
    except Exception:
        logger.exception("checkout.repository.complete_payment_session failed session_id=%s", stripe_session_id)
        return False

def insert_payment_transaction(row: Dict[str, Any]) -> Optional[dict]:
    try:
        (
            supabase_client.get_service_supabase()
            .table("payment_transactions")
            .insert(row)
            .execute()
        )
        return {"status": "ok"}
    except Exception:
        logger.exception("checkout.repository.insert_payment_transaction failed type=%s", row.get("type"))
        return None

def store_stripe_event(*, event_id: str, event_type: str, data: Dict[str, Any]) -> Optional[dict]:
    """Archive l'événement brut reçu par le webhook (table stripe_events)."""
    try:
        (
            supabase_client.get_service_supabase()
            .table("stripe_events")
            .insert({"stripe_event_id": event_id, "type": event_type, "data": data})
            .execute()
        )
        return {"status": "ok"}
    except Exception:
        logger.exception("checkout.repository.store_stripe_event failed event_id=%s", event_id)
        return None
