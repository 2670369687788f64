from unittest.mock import MagicMock

import storefront.checkout.repository as repo


def _boom():
    raise Exception("boom")


def test_update_order_status(mock_supabase):
    client = mock_supabase["service"]
    assert repo.update_order_status("ord_1", "paid") is True
    client.table.assert_called_with("orders")
    client.table().update.assert_called_with({"status": "paid"})
    client.table().update().eq.assert_called_with("id", "ord_1")

def test_update_order_status_failure(monkeypatch):
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", _boom)
    assert repo.update_order_status("ord_1", "paid") is False

def test_insert_payment_session_row(mock_supabase):
    client = mock_supabase["service"]
    assert repo.insert_payment_session(order_id="ord_1", stripe_session_id="cs_1", currency="czk") == {"status": "ok"}
    client.table.assert_called_with("payment_sessions")
    client.table().insert.assert_called_with(
        {"order_id": "ord_1", "stripe_session_id": "cs_1", "status": "pending", "currency": "czk"}
    )

def test_insert_payment_session_failure(monkeypatch):
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", _boom)
    assert repo.insert_payment_session(order_id="ord_1", stripe_session_id="cs_1", currency="czk") is None

def test_complete_payment_session(mock_supabase):
    client = mock_supabase["service"]
    assert repo.complete_payment_session("cs_1") is True
    client.table().update().eq.assert_called_with("stripe_session_id", "cs_1")

def test_execute_error_is_logged_not_raised(monkeypatch):
    client = MagicMock()
    client.table.return_value.insert.return_value.execute.side_effect = Exception("db down")
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: client)
    assert repo.insert_payment_transaction({"type": "payment"}) is None
    assert repo.store_stripe_event(event_id="evt_1", event_type="x", data={}) is None
