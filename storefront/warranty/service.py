"""
Cas d'usage 'warranty': cache des politiques par produit et calcul du coût.
- Cache par processus, lecture majoritaire: un seul chargement par produit.
- Les chargements concurrents d'un même produit non encore en cache sont
  regroupés derrière un verrou par produit.
"""
import asyncio
import logging
import math
from typing import Callable, Dict, List, Optional, Tuple, Union

from starlette.concurrency import run_in_threadpool

from . import repository
from .models import WarrantyPolicy

logger = logging.getLogger(__name__)

ProductId = Union[int, str]

# module storefront.warranty.service
class WarrantyPolicyCache:
    def __init__(self, loader: Optional[Callable[[ProductId], List[WarrantyPolicy]]] = None):
        self._loader = loader or repository.list_policies
        self._policies: Dict[str, Tuple[WarrantyPolicy, ...]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    @staticmethod
    def _key(product_id: ProductId) -> str:
        return str(product_id)

    def cached(self, product_id: ProductId) -> Optional[List[WarrantyPolicy]]:
        policies = self._policies.get(self._key(product_id))
        return list(policies) if policies is not None else None

    async def get(self, product_id: ProductId) -> List[WarrantyPolicy]:
        """
        Retourne les politiques du produit (triées par months).
        Échec de chargement: journalisé, [] retourné, rien n'est mis en cache.
        """
        key = self._key(product_id)
        if key in self._policies:
            return list(self._policies[key])

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            if key in self._policies:
                return list(self._policies[key])
            try:
                loaded = await run_in_threadpool(self._loader, product_id)
            except Exception:
                logger.exception("warranty.load_policies failed product_id=%s", product_id)
                self._locks.pop(key, None)
                return []
            self._policies[key] = tuple(loaded or ())
        self._locks.pop(key, None)
        return list(self._policies[key])

    def invalidate(self, product_id: Optional[ProductId] = None) -> None:
        if product_id is None:
            self._policies.clear()
        else:
            self._policies.pop(self._key(product_id), None)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


def calculate_warranty_cost(
    base_price: float,
    policy_multiplier: float = 0,
    fixed_price: Optional[float] = None,
) -> float:
    """
    Coût additionnel de la garantie.
    - Un prix fixe strictement positif l'emporte.
    - Sinon round(base_price * policy_multiplier).
    - Entrées non numériques: 0 (avec un warning).
    """
    if fixed_price is not None and _is_number(fixed_price) and fixed_price > 0:
        return fixed_price

    if not _is_number(base_price) or not _is_number(policy_multiplier):
        logger.warning(
            "Invalid inputs for calculate_warranty_cost: base_price=%r policy_multiplier=%r",
            base_price,
            policy_multiplier,
        )
        return 0

    return round(base_price * policy_multiplier)


def policy_cost(policy: WarrantyPolicy, base_price: float) -> float:
    return calculate_warranty_cost(base_price, policy.price_multiplier, policy.fixed_price)
