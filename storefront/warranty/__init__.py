"""
Module 'warranty': politiques de garantie (modèle, store Supabase, cache, coût).
"""

from .models import WarrantyPolicy
from .repository import list_policies
from .service import WarrantyPolicyCache, calculate_warranty_cost, policy_cost

__all__ = [
    "WarrantyPolicy",
    "list_policies",
    "WarrantyPolicyCache",
    "calculate_warranty_cost",
    "policy_cost",
]
