from storefront.warranty import WarrantyPolicy, WarrantyPolicyCache


def _install_cache(app, policies, calls):
    def loader(product_id):
        calls.append(product_id)
        return policies
    app.state.warranty_cache = WarrantyPolicyCache(loader)


def test_list_policies_with_cost(app, client):
    calls = []
    _install_cache(app, [
        WarrantyPolicy(id="w12", product_id="p1", months=12, price_multiplier=0.1),
        WarrantyPolicy(id="w36", product_id="p1", months=36, fixed_price=499.0),
    ], calls)

    r = client.get("/api/v1/warranty/p1/policies", params={"base_price": 1000})
    assert r.status_code == 200
    policies = r.json()["policies"]
    assert [p["months"] for p in policies] == [12, 36]
    assert [p["additional_cost"] for p in policies] == [100, 499.0]

    client.get("/api/v1/warranty/p1/policies")
    assert calls == ["p1"]

def test_list_policies_without_base_price(app, client):
    _install_cache(app, [WarrantyPolicy(id="w12", product_id="p1", months=12)], [])
    policy = client.get("/api/v1/warranty/p1/policies").json()["policies"][0]
    assert "additional_cost" not in policy

def test_store_failure_returns_empty_list(app, client):
    def loader(product_id):
        raise RuntimeError("supabase down")
    app.state.warranty_cache = WarrantyPolicyCache(loader)
    r = client.get("/api/v1/warranty/p1/policies")
    assert r.status_code == 200
    assert r.json() == {"policies": []}
