"""
Construction des line_items Stripe à partir du panier (pas de Stripe, pas de DB).
Validation stricte et fail-fast: la première entrée invalide interrompt tout.
"""
import re
from typing import Any, Iterable, List, Optional

from .models import CartItem, LineItem
from .result import Err, Ok, Result, EMPTY_ORDER, INVALID_QUANTITY, MISSING_PRICE_REFERENCE

_DIGITS = re.compile(r"[0-9]+")

# module storefront.checkout.line_items
def parse_quantity(raw: Any) -> Optional[int]:
    """
    Revalide une quantité venue d'une frontière non typée.
    - int (hors bool), float entier, ou texte de chiffres décimaux
    - Retourne None si ce n'est pas un entier strictement positif
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        qty = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            return None
        qty = int(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not _DIGITS.fullmatch(text):
            return None
        try:
            qty = int(text)
        except ValueError:
            # au-delà de la limite de conversion int/str de l'interpréteur
            return None
    else:
        return None
    return qty if qty > 0 else None


def build_line_items(items: Iterable[CartItem]) -> Result[List[LineItem]]:
    """
    Aplatit le panier en line_items, dans l'ordre d'entrée.
    - Panier vide: Err(EmptyOrder), jamais une commande à 0.
    - Variante sans stripePriceId: Err(MissingPriceReference, scope="variant").
    - Quantité non entière ou <= 0: Err(InvalidQuantity).
    - Garantie avec stripePriceId: seconde ligne, même quantité que le produit.
    - Garantie sans stripePriceId: Err(MissingPriceReference, scope="warranty").
    """
    items = list(items or [])
    if not items:
        return Err(EMPTY_ORDER, "Aucun article dans la commande")

    line_items: List[LineItem] = []
    for item in items:
        variant = item.variant
        price_ref = ((variant.stripe_price_id if variant else None) or "").strip()
        if not price_ref:
            return Err(
                MISSING_PRICE_REFERENCE,
                f"Prix Stripe manquant pour la variante {variant.id if variant else None} (article {item.id})",
                scope="variant",
            )

        quantity = parse_quantity(item.quantity)
        if quantity is None:
            return Err(INVALID_QUANTITY, f"Quantité invalide pour l'article {item.id}: {item.quantity}")

        line_items.append(LineItem(price=price_ref, quantity=quantity))

        if item.warranty is not None:
            warranty_ref = (item.warranty.stripe_price_id or "").strip()
            if not warranty_ref:
                return Err(
                    MISSING_PRICE_REFERENCE,
                    f"Prix Stripe manquant pour la garantie de l'article {item.id}",
                    scope="warranty",
                )
            # Garantie vendue par unité couverte
            line_items.append(LineItem(price=warranty_ref, quantity=quantity))

    return Ok(line_items)
