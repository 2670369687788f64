import os

# Pas de Redis en tests: le rate limiting est désactivé au démarrage
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from storefront.app_setup.factory import create_app
from storefront.checkout.session import CheckoutSessionService
from storefront.checkout.views import get_checkout_service, get_provider
from storefront.config import CheckoutSettings

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class FakeProvider:
    """
    Faux fournisseur Stripe: enregistre les appels.
    failures: exceptions levées tour à tour avant de réussir.
    """

    def __init__(self, failures: List[BaseException] = None, session: Dict[str, Any] = None):
        self.calls: List[Dict[str, Any]] = []
        self.failures = list(failures or [])
        self.session = session if session is not None else {
            "id": "cs_test_123",
            "url": "https://checkout.stripe.test/c/pay/cs_test_123",
        }
        self.events: List[Dict[str, Any]] = []
        self.signature_error: BaseException = None

    def create_session(self, **params):
        self.calls.append(params)
        if self.failures:
            raise self.failures.pop(0)
        return dict(self.session)

    def construct_event(self, payload, sig_header):
        if self.signature_error is not None:
            raise self.signature_error
        return self.events.pop(0)


@pytest.fixture
def settings() -> CheckoutSettings:
    return CheckoutSettings(
        success_url="https://shop.test/order-success?session_id={CHECKOUT_SESSION_ID}",
        cancel_url="https://shop.test/checkout",
        locale="en",
        merchant_label="LED Nabor",
    )

@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()

@pytest.fixture
def fake_repository() -> MagicMock:
    repo = MagicMock()
    repo.update_order_status.return_value = True
    repo.insert_payment_session.return_value = {"status": "ok"}
    return repo

@pytest.fixture
def checkout_service(fake_provider, settings, fake_repository) -> CheckoutSessionService:
    return CheckoutSessionService(fake_provider, settings=settings, repository=fake_repository)

@pytest.fixture
def app(fake_provider, checkout_service):
    application = create_app()
    application.state.rate_limit_enabled = False
    application.dependency_overrides[get_provider] = lambda: fake_provider
    application.dependency_overrides[get_checkout_service] = lambda: checkout_service
    yield application
    application.dependency_overrides.clear()

@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    yield TestClient(app)

# Aucun accès Supabase réel
@pytest.fixture(autouse=True)
def mock_supabase(monkeypatch):
    anon = MagicMock()
    service = MagicMock()
    monkeypatch.setattr("storefront.infra.supabase_client.get_supabase", lambda: anon)
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: service)
    return {"anon": anon, "service": service}

@pytest.fixture
def cart_item():
    """Fabrique d'articles de panier au format JSON du front (camelCase)."""
    def _make(item_id=1, price_id="price_a", quantity=1, warranty_price_id=None, with_warranty=False) -> Dict[str, Any]:
        item: Dict[str, Any] = {
            "id": item_id,
            "variant": {"id": item_id * 10, "stripePriceId": price_id},
            "quantity": quantity,
        }
        if with_warranty or warranty_price_id is not None:
            item["warranty"] = {"policyId": f"w-{item_id}", "months": 24, "stripePriceId": warranty_price_id}
        return item
    return _make
