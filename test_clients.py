# test_clients.py
"""Tests del registro de clientes (endpoints /api/v1/clients)."""

from fastapi.testclient import TestClient

from app.core.exceptions import InternalError
from app.main import app
from app.services.client_service import ClientRegistry

CLIENTS = "/api/v1/clients"


def test_register_client_starts_with_zero_purchases(api, auth_headers):
    response = api.post(CLIENTS + "/", json={"name": "Ana", "email": "ana@x.com", "phone": "555-0101"},
                        headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Ana"
    assert body["email"] == "ana@x.com"
    assert body["phone"] == "555-0101"
    assert body["purchase_count"] == 0
    assert body["id"]


def test_register_duplicate_email_is_rejected(api, auth_headers, make_client):
    make_client(name="Ana", email="ana@x.com")
    response = api.post(CLIENTS + "/", json={"name": "Ana Maria", "email": "ana@x.com"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Email already registered"}


def test_register_empty_name_fails_even_with_duplicate_email(api, auth_headers, make_client):
    make_client(name="Ana", email="ana@x.com")
    response = api.post(CLIENTS + "/", json={"name": "   ", "email": "ana@x.com"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Name is required"}


def test_register_without_name_is_a_validation_error(api, auth_headers):
    response = api.post(CLIENTS + "/", json={"email": "nobody@x.com"}, headers=auth_headers)
    assert response.status_code == 400
    assert "name" in response.json()["error"]


def test_clients_without_email_do_not_conflict(make_client):
    first = make_client(name="Bruno")
    second = make_client(name="Carla")
    assert first["email"] is None and second["email"] is None
    assert first["id"] != second["id"]


def test_register_requires_token(api):
    response = api.post(CLIENTS + "/", json={"name": "Ana"})
    assert response.status_code == 401
    assert "error" in response.json()


def test_invalid_token_is_rejected(api):
    response = api.get(CLIENTS + "/anything", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_list_clients_is_public_and_stable(api, make_client):
    make_client(name="Ana", email="ana@x.com")
    make_client(name="Bruno")
    first = api.get(CLIENTS + "/")
    second = api.get(CLIENTS + "/")
    assert first.status_code == 200
    assert {c["id"] for c in first.json()} == {c["id"] for c in second.json()}
    assert len(first.json()) == 2


def test_get_client_by_id(api, auth_headers, make_client):
    created = make_client(name="Ana", email="ana@x.com")
    response = api.get(f"{CLIENTS}/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


def test_get_unknown_client_is_404(api, auth_headers):
    response = api.get(f"{CLIENTS}/does-not-exist", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Client not found"}


def test_update_applies_only_supplied_fields(api, auth_headers, make_client):
    created = make_client(name="Ana", email="ana@x.com", phone="111")
    response = api.put(f"{CLIENTS}/{created['id']}", json={"phone": "222"}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["phone"] == "222"
    assert body["name"] == "Ana"
    assert body["email"] == "ana@x.com"


def test_update_unknown_client_is_404(api, auth_headers):
    response = api.put(f"{CLIENTS}/missing", json={"name": "X"}, headers=auth_headers)
    assert response.status_code == 404


def test_update_to_taken_email_hits_store_constraint(api, auth_headers, make_client):
    make_client(name="Ana", email="ana@x.com")
    other = make_client(name="Bruno", email="bruno@x.com")
    response = api.put(f"{CLIENTS}/{other['id']}", json={"email": "ana@x.com"}, headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_delete_client_keeps_its_purchases(api, auth_headers, make_client, make_purchase):
    created = make_client(name="Ana", email="ana@x.com")
    purchase = make_purchase(created["id"])

    response = api.delete(f"{CLIENTS}/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Client deleted successfully"}
    assert api.get(f"{CLIENTS}/{created['id']}", headers=auth_headers).status_code == 404

    orphan = api.get(f"/api/v1/purchases/{purchase['id']}")
    assert orphan.status_code == 200
    assert orphan.json()["client"] is None


def test_delete_unknown_client_is_404(api, auth_headers):
    assert api.delete(f"{CLIENTS}/missing", headers=auth_headers).status_code == 404


def test_client_with_purchases_empty_list(api, auth_headers, make_client):
    created = make_client(name="Ana")
    response = api.get(f"{CLIENTS}/{created['id']}/purchases", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["client"]["id"] == created["id"]
    assert response.json()["purchases"] == []


def test_client_with_purchases_lists_only_its_own(api, auth_headers, make_client, make_purchase):
    ana = make_client(name="Ana")
    bruno = make_client(name="Bruno")
    mine = make_purchase(ana["id"], details="armação")
    make_purchase(bruno["id"], details="lentes")

    response = api.get(f"{CLIENTS}/{ana['id']}/purchases", headers=auth_headers)
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["purchases"]] == [mine["id"]]


def test_client_with_purchases_unknown_client_is_404(api, auth_headers):
    assert api.get(f"{CLIENTS}/missing/purchases", headers=auth_headers).status_code == 404


def test_unexpected_error_is_reported_as_internal_error(api, monkeypatch):
    async def broken_list_all(self):
        raise RuntimeError("boom")

    monkeypatch.setattr(ClientRegistry, "list_all", broken_list_all)
    response = TestClient(app, raise_server_exceptions=False).get(CLIENTS + "/")
    assert response.status_code == 500
    assert response.json() == {"error": InternalError().message}
