"""
Métadonnées Stripe associées à la session (orderId, company_name).
"""
from typing import Any, Dict, Optional

# module storefront.checkout.metadata
def make_metadata(order_id: str, merchant_label: str) -> Dict[str, str]:
    """
    Corrèle la session Stripe avec la commande interne.
    Stripe limite les valeurs à 500 caractères.
    """
    return {
        "orderId": str(order_id)[:500],
        "company_name": merchant_label[:500],
    }


def extract_order_id(session: Dict[str, Any]) -> Optional[str]:
    """
    Lit metadata.orderId depuis une session Stripe (ou event.data.object).
    Retourne None si absent.
    """
    if not isinstance(session, dict):
        return None
    meta = session.get("metadata") or {}
    order_id = meta.get("orderId")
    return str(order_id) if order_id else None
