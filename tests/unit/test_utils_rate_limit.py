from fastapi import FastAPI, Depends, Request
from fastapi.testclient import TestClient

from storefront.utils.rate_limit import optional_rate_limit, rate_limit_health_info


def _make_app(times=2, seconds=60):
    app = FastAPI()

    @app.post("/limitedA", dependencies=[Depends(optional_rate_limit(times, seconds))])
    def limited_a():
        return {"ok": True}

    @app.post("/limitedB", dependencies=[Depends(optional_rate_limit(times, seconds))])
    def limited_b():
        return {"ok": True}

    @app.get("/rl_info")
    def rl_info(request: Request):
        return rate_limit_health_info(request)

    return app


def test_rate_limit_fallback_blocks_after_limit(monkeypatch):
    client = TestClient(_make_app())
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")

    assert client.post("/limitedA").status_code == 200
    assert client.post("/limitedA").status_code == 200
    assert client.post("/limitedA").status_code == 429

def test_rate_limit_is_per_path_and_token(monkeypatch):
    client = TestClient(_make_app())
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    headers = {"Authorization": "Bearer token-1"}

    assert client.post("/limitedA", headers=headers).status_code == 200
    assert client.post("/limitedA", headers=headers).status_code == 200
    assert client.post("/limitedA", headers=headers).status_code == 429

    # autre chemin, autre jeton: compteurs indépendants
    assert client.post("/limitedB", headers=headers).status_code == 200
    assert client.post("/limitedA", headers={"Authorization": "Bearer token-2"}).status_code == 200

def test_rate_limit_disabled_flag_bypasses_limit(monkeypatch):
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    app = _make_app()
    app.state.rate_limit_enabled = False
    client = TestClient(app)

    for _ in range(4):
        assert client.post("/limitedA").status_code == 200

def test_limiter_not_initialised_lets_requests_through(monkeypatch):
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    client = TestClient(_make_app())
    for _ in range(3):
        assert client.post("/limitedA").status_code == 200

def test_rate_limit_health_info():
    app = _make_app()
    app.state.rate_limit_enabled = True
    info = TestClient(app).get("/rl_info").json()
    assert info["enabled"] is True
    assert info["ready"] is False
    assert info["backend"] is None
