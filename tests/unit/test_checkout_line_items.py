import pytest

from storefront.checkout import (
    CartItem,
    LineItem,
    build_line_items,
    parse_quantity,
    EMPTY_ORDER,
    INVALID_QUANTITY,
    MISSING_PRICE_REFERENCE,
)


def _items(*raw):
    return [CartItem.model_validate(r) for r in raw]


def test_products_and_warranties_keep_cart_order(cart_item):
    result = build_line_items(_items(
        cart_item(1, "price_a", 2, warranty_price_id="price_w"),
        cart_item(2, "price_b", 1),
    ))
    assert result.is_ok()
    assert [li.to_stripe() for li in result.value] == [
        {"price": "price_a", "quantity": 2},
        {"price": "price_w", "quantity": 2},
        {"price": "price_b", "quantity": 1},
    ]

def test_warranty_quantity_follows_product(cart_item):
    result = build_line_items(_items(cart_item(1, "price_a", "5", warranty_price_id="price_w")))
    assert result.value == [LineItem(price="price_a", quantity=5), LineItem(price="price_w", quantity=5)]

def test_empty_cart_is_an_error():
    result = build_line_items([])
    assert not result.is_ok()
    assert result.kind == EMPTY_ORDER

@pytest.mark.parametrize("price_id", [None, "", "   "])
def test_missing_variant_price(cart_item, price_id):
    result = build_line_items(_items(cart_item(1, price_id, 1)))
    assert result.kind == MISSING_PRICE_REFERENCE
    assert result.scope == "variant"

def test_missing_variant_object():
    result = build_line_items(_items({"id": 7, "quantity": 1}))
    assert result.kind == MISSING_PRICE_REFERENCE
    assert result.scope == "variant"

def test_warranty_without_price_fails_whole_cart(cart_item):
    result = build_line_items(_items(
        cart_item(1, "price_a", 1),
        cart_item(2, "price_b", 1, with_warranty=True),
    ))
    assert not result.is_ok()
    assert result.kind == MISSING_PRICE_REFERENCE
    assert result.scope == "warranty"

@pytest.mark.parametrize("quantity", [0, -1, "0", "abc", "2.5", 2.5, "", None, True, "-3", "٣", "9" * 5000])
def test_invalid_quantities(cart_item, quantity):
    result = build_line_items(_items(cart_item(1, "price_a", quantity)))
    assert result.kind == INVALID_QUANTITY

def test_first_invalid_entry_stops_the_build(cart_item):
    result = build_line_items(_items(
        cart_item(1, "price_a", "abc"),
        cart_item(2, None, 1),
    ))
    assert result.kind == INVALID_QUANTITY

@pytest.mark.parametrize("raw,expected", [(3, 3), ("3", 3), (" 4 ", 4), (2.0, 2), ("007", 7)])
def test_parse_quantity_accepts_positive_integers(raw, expected):
    assert parse_quantity(raw) == expected
