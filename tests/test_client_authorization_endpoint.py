import pytest
from fastapi.testclient import TestClient

from clientauth.adapters.inbound.api.deps import get_client_authorization_service
from clientauth.main import app

BASE_URL = "/api/v1/clientauthorizations"


@pytest.fixture
def client(service):
    app.dependency_overrides[get_client_authorization_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def payload(user_name="alice", client_name="cli-1", scopes=("read",), labels=None):
    return {
        "user_name": user_name,
        "client_name": client_name,
        "scopes": list(scopes),
        "labels": labels or {},
    }


def test_create_returns_created_authorization(client):
    response = client.post(BASE_URL, json=payload(labels={"env": "prod"}))

    assert response.status_code == 201
    body = response.json()
    assert body["kind"] == "ClientAuthorization"
    assert body["name"] == "alice:cli-1"
    assert body["scopes"] == ["read"]
    assert body["metadata"]["labels"] == {"env": "prod"}
    assert body["metadata"]["uid"]
    assert body["metadata"]["resource_version"] == "1"


def test_create_ignores_supplied_name(client):
    response = client.post(BASE_URL, json={**payload(), "name": "mallory:cli-1"})

    assert response.status_code == 201
    assert response.json()["name"] == "alice:cli-1"


def test_create_duplicate_is_conflict(client):
    assert client.post(BASE_URL, json=payload()).status_code == 201

    response = client.post(BASE_URL, json=payload(scopes=["write"]))

    assert response.status_code == 409
    assert response.json()["code"] == "RESOURCE_ALREADY_EXISTS"


def test_create_without_user_is_bad_request(client, registry):
    response = client.post(BASE_URL, json=payload(user_name=""))

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"
    assert registry.calls == []


def test_create_with_bad_scope_lists_field_errors(client):
    response = client.post(BASE_URL, json=payload(scopes=["read", "not valid"]))

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "INVALID"
    assert body["errors"]["kind"] == "ClientAuthorization"
    assert body["errors"]["name"] == "alice:cli-1"
    assert body["errors"]["causes"][0]["field"] == "scopes[1]"


def test_get_missing_is_not_found(client):
    response = client.get(f"{BASE_URL}/nobody:nothing")

    assert response.status_code == 404
    assert response.json()["code"] == "RESOURCE_NOT_FOUND"


def test_get_created_authorization(client):
    client.post(BASE_URL, json=payload())

    response = client.get(f"{BASE_URL}/alice:cli-1")

    assert response.status_code == 200
    assert response.json()["user_name"] == "alice"


def test_update_replaces_scopes(client):
    client.post(BASE_URL, json=payload())

    response = client.put(f"{BASE_URL}/alice:cli-1", json=payload(scopes=["read", "write"]))

    assert response.status_code == 200
    assert response.json()["scopes"] == ["read", "write"]
    assert response.json()["metadata"]["resource_version"] == "2"


def test_update_is_last_write_wins(client):
    client.post(BASE_URL, json=payload())
    client.put(f"{BASE_URL}/alice:cli-1", json=payload(scopes=["write"]))

    stale = {**payload(scopes=["admin"]), "resource_version": "1"}
    response = client.put(f"{BASE_URL}/alice:cli-1", json=stale)

    assert response.status_code == 200
    assert response.json()["scopes"] == ["admin"]
    assert response.json()["metadata"]["resource_version"] == "3"


def test_update_changing_user_is_invalid(client):
    client.post(BASE_URL, json=payload())

    response = client.put(f"{BASE_URL}/alice:cli-1", json=payload(user_name="bob"))

    assert response.status_code == 422
    cause = response.json()["errors"]["causes"][0]
    assert cause["field"] == "user_name"
    assert cause["type"] == "FieldValueImmutable"
    assert client.get(f"{BASE_URL}/alice:cli-1").json()["user_name"] == "alice"


def test_update_missing_is_not_found(client):
    response = client.put(f"{BASE_URL}/alice:cli-1", json=payload())

    assert response.status_code == 404


def test_list_filters_by_label_selector(client):
    client.post(BASE_URL, json=payload("alice", labels={"env": "prod"}))
    client.post(BASE_URL, json=payload("bob", labels={"env": "dev"}))

    response = client.get(BASE_URL, params={"labelSelector": "env=prod"})

    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "ClientAuthorizationList"
    assert [item["name"] for item in body["items"]] == ["alice:cli-1"]


def test_list_with_malformed_selector_is_bad_request(client):
    response = client.get(BASE_URL, params={"labelSelector": "=prod"})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_delete_then_get_is_not_found(client):
    client.post(BASE_URL, json=payload())

    response = client.delete(f"{BASE_URL}/alice:cli-1")

    assert response.status_code == 200
    assert response.json()["status"] == "Success"
    assert client.get(f"{BASE_URL}/alice:cli-1").status_code == 404
    assert client.delete(f"{BASE_URL}/alice:cli-1").status_code == 404


def test_namespaces_are_isolated(client):
    client.post(BASE_URL, json=payload(), params={"namespace": "tenant-a"})

    assert client.get(f"{BASE_URL}/alice:cli-1", params={"namespace": "tenant-a"}).status_code == 200
    assert client.get(f"{BASE_URL}/alice:cli-1", params={"namespace": "tenant-b"}).status_code == 404
    response = client.post(BASE_URL, json=payload(), params={"namespace": "tenant-b"})
    assert response.status_code == 201
    assert response.json()["metadata"]["namespace"] == "tenant-b"
