import httpx

from src.api.main import app
from src.services.crm import CRMService, GoHighLevelProvider, get_crm_service

INTAKE = {
    "name": "Ana Lopez",
    "email": "ana@example.com",
    "phone": "555-0100",
    "event_type": "Wedding",
    "budget": "$500",
    "colors": "gold, white",
    "can_text": True,
}


def _use_crm(status_code=200, body=None):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(status_code, json=body if body is not None else {})

    provider = GoHighLevelProvider(api_key="key", location_id="loc", transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_crm_service] = lambda: CRMService(provider=provider)
    return calls


def test_intake_is_public_and_unsynced_without_crm(client):
    r = client.post("/api/clients", json=INTAKE)
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Ana Lopez"
    assert body["can_text"] is True
    assert body["crm_synced"] is False
    assert body["crm_id"] is None


def test_intake_validates_email(client):
    r = client.post("/api/clients", json={**INTAKE, "email": "not-an-email"})
    assert r.status_code == 422


def test_intake_syncs_to_configured_crm(client):
    calls = _use_crm(body={"contact": {"id": "ghl-1"}})
    r = client.post("/api/clients", json=INTAKE)
    assert r.status_code == 201
    assert r.json()["crm_synced"] is True
    assert r.json()["crm_id"] == "ghl-1"
    assert len(calls) == 1


def test_crm_failure_does_not_fail_intake(client, designer):
    _, headers = designer
    _use_crm(status_code=500, body={"message": "down"})
    r = client.post("/api/clients", json=INTAKE)
    assert r.status_code == 201
    client_id = r.json()["id"]
    assert r.json()["crm_synced"] is False

    sync = client.post(f"/api/clients/{client_id}/sync-crm", headers=headers).json()
    assert sync["crm"] == {"success": False, "contact_id": None, "message": "down", "data": None}
    assert sync["client"]["crm_synced"] is False


def test_listing_requires_auth(client, designer):
    _, headers = designer
    client.post("/api/clients", json=INTAKE)
    client.post("/api/clients", json={**INTAKE, "email": "bo@example.com", "name": "Bo"})
    assert client.get("/api/clients").status_code == 401
    listed = client.get("/api/clients", headers=headers).json()
    assert [c["name"] for c in listed] == ["Bo", "Ana Lopez"]


def test_crm_status(client, designer):
    _, headers = designer
    assert client.get("/api/clients/crm/status", headers=headers).json() == {
        "configured": False,
        "provider": "none",
    }
    _use_crm()
    assert client.get("/api/clients/crm/status", headers=headers).json() == {
        "configured": True,
        "provider": "Go High Level",
    }


def test_update_pushes_to_crm_when_synced(client, designer):
    _, headers = designer
    calls = _use_crm(body={"contact": {"id": "ghl-1"}})
    client_id = client.post("/api/clients", json=INTAKE).json()["id"]

    r = client.put(f"/api/clients/{client_id}", json={"phone": "555-0199"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["phone"] == "555-0199"
    assert [c.method for c in calls] == ["POST", "PUT"]
    assert str(calls[1].url).endswith("/contacts/ghl-1")

    assert client.put(f"/api/clients/{client_id}", json={}, headers=headers).status_code == 400


def test_force_sync(client, designer):
    _, headers = designer
    client_id = client.post("/api/clients", json=INTAKE).json()["id"]
    _use_crm(body={"contact": {"id": "ghl-5"}})

    r = client.post(f"/api/clients/{client_id}/sync-crm", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["crm"]["success"] is True
    assert body["client"]["crm_synced"] is True
    assert body["client"]["crm_id"] == "ghl-5"


def test_delete_is_admin_only(client, designer, admin):
    _, headers = designer
    _, admin_headers = admin
    client_id = client.post("/api/clients", json=INTAKE).json()["id"]
    assert client.delete(f"/api/clients/{client_id}", headers=headers).status_code == 403
    assert client.delete(f"/api/clients/{client_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/clients/{client_id}", headers=admin_headers).status_code == 404


def test_crm_contact_is_read_back(client, designer):
    _, headers = designer
    contact = {
        "id": "ghl-1",
        "firstName": "Ana",
        "lastName": "Lopez",
        "email": "ana@example.com",
        "phone": "555-0100",
        "customField": {"eventType": "Wedding", "budget": "$500", "canText": "yes"},
    }
    calls = _use_crm(body={"contact": contact})
    client_id = client.post("/api/clients", json=INTAKE).json()["id"]

    r = client.get(f"/api/clients/{client_id}/crm-contact", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["provider"] == "Go High Level"
    assert body["contact_id"] == "ghl-1"
    assert body["name"] == "Ana Lopez"
    assert body["event_type"] == "Wedding"
    assert body["can_text"] is True
    assert calls[-1].method == "GET"
    assert str(calls[-1].url).endswith("/contacts/ghl-1")


def test_crm_contact_requires_synced_client(client, designer):
    _, headers = designer
    client_id = client.post("/api/clients", json=INTAKE).json()["id"]
    assert client.get(f"/api/clients/{client_id}/crm-contact").status_code == 401

    r = client.get(f"/api/clients/{client_id}/crm-contact", headers=headers)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "No CRM provider configured"

    _use_crm(status_code=500, body={"message": "down"})
    r = client.get(f"/api/clients/{client_id}/crm-contact", headers=headers)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Client has not been synced to the CRM"


def test_crm_contact_missing_upstream_is_404(client, designer):
    _, headers = designer
    _use_crm(body={"contact": {"id": "ghl-9"}})
    client_id = client.post("/api/clients", json=INTAKE).json()["id"]

    _use_crm(status_code=404, body={"message": "Contact not found"})
    r = client.get(f"/api/clients/{client_id}/crm-contact", headers=headers)
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "CRM contact not found"
