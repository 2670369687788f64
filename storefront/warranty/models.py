# module storefront.warranty.models
"""
Politique de garantie (table warranty_policies). Immuable une fois chargée.
"""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class WarrantyPolicy(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Union[int, str]
    product_id: Union[int, str]
    months: int
    price_multiplier: float = 0.0
    fixed_price: Optional[float] = None
    stripe_product_id: Optional[str] = None
    stripe_price_id: Optional[str] = None
    description: Optional[str] = None
    terms: Optional[str] = None
    is_default: bool = False
