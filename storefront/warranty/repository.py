"""
Accès aux données pour la feature 'warranty' (table warranty_policies).
"""
from typing import List, Union
import logging
import storefront.infra.supabase_client as supabase_client

from .models import WarrantyPolicy

logger = logging.getLogger(__name__)

# module storefront.warranty.repository
def list_policies(product_id: Union[int, str]) -> List[WarrantyPolicy]:
    """
    Politiques de garantie d'un produit, triées par durée croissante (months).
    Les erreurs Supabase sont propagées: le cache décide quoi en faire.
    """
    res = (
        supabase_client.get_supabase()
        .table("warranty_policies")
        .select("*")
        .eq("product_id", product_id)
        .order("months")
        .execute()
    )
    rows = res.data or []
    policies = [WarrantyPolicy.model_validate(row) for row in rows]
    return sorted(policies, key=lambda p: p.months)
