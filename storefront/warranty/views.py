from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request

from storefront.warranty.service import WarrantyPolicyCache, policy_cost

router = APIRouter(prefix="/api/v1/warranty", tags=["Warranty API"])

# module storefront.warranty.views
def get_policy_cache(request: Request) -> WarrantyPolicyCache:
    cache = getattr(request.app.state, "warranty_cache", None)
    if cache is None:
        cache = WarrantyPolicyCache()
        request.app.state.warranty_cache = cache
    return cache


@router.get("/{product_id}/policies")
async def list_warranty_policies(
    product_id: str,
    base_price: Optional[float] = None,
    cache: WarrantyPolicyCache = Depends(get_policy_cache),
) -> Dict[str, Any]:
    """
    Politiques de garantie d'un produit, triées par durée croissante.
    - base_price (optionnel): ajoute additional_cost à chaque politique.
    """
    policies = await cache.get(product_id)
    out = []
    for policy in policies:
        item = policy.model_dump()
        if base_price is not None:
            item["additional_cost"] = policy_cost(policy, base_price)
        out.append(item)
    return {"policies": out}
