import asyncio
import math
import time

import pytest

from storefront.warranty import WarrantyPolicy, WarrantyPolicyCache, calculate_warranty_cost, list_policies, policy_cost


def _policy(pid, months, **kw):
    return WarrantyPolicy(id=pid, product_id="p1", months=months, **kw)


@pytest.mark.parametrize("base,mult,fixed,expected", [
    (1000, 0.15, None, 150),
    (999, 0.1, None, 100),
    (1000, 0.15, 249.0, 249.0),
    (1000, 0.15, 0, 150),
    (1000, 0, None, 0),
])
def test_calculate_warranty_cost(base, mult, fixed, expected):
    assert calculate_warranty_cost(base, mult, fixed) == expected

@pytest.mark.parametrize("base,mult", [("1000", 0.1), (1000, None), (math.nan, 0.1), (True, 0.1)])
def test_calculate_warranty_cost_invalid_inputs(base, mult, caplog):
    assert calculate_warranty_cost(base, mult) == 0
    assert "Invalid inputs" in caplog.text

def test_policy_cost_uses_policy_fields():
    assert policy_cost(_policy("w1", 24, price_multiplier=0.2), 500) == 100
    assert policy_cost(_policy("w2", 36, price_multiplier=0.2, fixed_price=150.0), 500) == 150.0

def test_list_policies_sorted_by_months(mock_supabase):
    client = mock_supabase["anon"]
    chain = client.table.return_value.select.return_value.eq.return_value.order.return_value
    chain.execute.return_value.data = [
        {"id": "w36", "product_id": "p1", "months": 36, "price_multiplier": 0.25, "created_at": "2024-01-01"},
        {"id": "w12", "product_id": "p1", "months": 12, "price_multiplier": 0.1},
    ]
    policies = list_policies("p1")
    assert [p.id for p in policies] == ["w12", "w36"]
    client.table.assert_called_with("warranty_policies")

def test_cache_loads_each_product_once():
    calls = []

    def loader(product_id):
        calls.append(product_id)
        return [_policy("w12", 12)]

    cache = WarrantyPolicyCache(loader)
    first = asyncio.run(cache.get("p1"))
    second = asyncio.run(cache.get("p1"))
    assert [p.id for p in first] == ["w12"]
    assert first == second
    assert calls == ["p1"]
    assert cache.cached(1) is None

def test_concurrent_loads_share_one_fetch():
    calls = []

    def loader(product_id):
        calls.append(product_id)
        time.sleep(0.05)
        return [_policy("w24", 24)]

    cache = WarrantyPolicyCache(loader)

    async def _run():
        return await asyncio.gather(*(cache.get("p1") for _ in range(5)))

    results = asyncio.run(_run())
    assert calls == ["p1"]
    assert all(len(r) == 1 for r in results)

def test_failed_load_is_not_cached():
    state = {"fail": True}

    def loader(product_id):
        if state["fail"]:
            raise RuntimeError("supabase down")
        return [_policy("w12", 12)]

    cache = WarrantyPolicyCache(loader)
    assert asyncio.run(cache.get("p1")) == []
    assert cache.cached("p1") is None

    state["fail"] = False
    assert len(asyncio.run(cache.get("p1"))) == 1

def test_invalidate_forces_reload():
    calls = []
    cache = WarrantyPolicyCache(lambda pid: calls.append(pid) or [])
    asyncio.run(cache.get("p1"))
    cache.invalidate("p1")
    asyncio.run(cache.get("p1"))
    assert calls == ["p1", "p1"]
