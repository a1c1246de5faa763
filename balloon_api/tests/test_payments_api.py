from conftest import auth_headers


def _intent(client, headers, **payload):
    body = {"amount": 12500}
    body.update(payload)
    return client.post("/api/payments/create-intent", json=body, headers=headers)


def test_create_intent(client, designer):
    _, headers = designer
    r = _intent(client, headers, client_name="Ana")
    assert r.status_code == 201
    payment = r.json()
    assert payment["reference"].startswith("pi_")
    assert payment["status"] == "pending"
    assert payment["currency"] == "usd"
    assert payment["client_name"] == "Ana"
    assert payment["completed_at"] is None


def test_intent_defaults_and_validation(client, designer):
    _, headers = designer
    assert _intent(client, headers).json()["client_name"] == "Unknown Client"
    assert _intent(client, headers, amount=0).status_code == 422
    assert _intent(client, headers, design_id=999).status_code == 404


def test_complete_then_cannot_cancel(client, designer):
    _, headers = designer
    payment_id = _intent(client, headers).json()["id"]

    r = client.post(f"/api/payments/{payment_id}/complete", headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "completed"
    assert r.json()["completed_at"] is not None

    r = client.post(f"/api/payments/{payment_id}/cancel", headers=headers)
    assert r.status_code == 400
    assert r.json()["error"]["type"] == "invalid_state"


def test_cancel_pending(client, designer):
    _, headers = designer
    payment_id = _intent(client, headers).json()["id"]
    assert client.post(f"/api/payments/{payment_id}/cancel", headers=headers).json()["status"] == "cancelled"
    assert client.post(f"/api/payments/{payment_id}/complete", headers=headers).status_code == 400


def test_listing_is_scoped_to_owner_except_admin(client, designer, admin, make_user):
    _, headers = designer
    _, admin_headers = admin
    payment_id = _intent(client, headers).json()["id"]
    _intent(client, admin_headers)
    stranger = auth_headers(make_user("stranger"))

    assert len(client.get("/api/payments", headers=headers).json()) == 1
    assert len(client.get("/api/payments", headers=admin_headers).json()) == 2
    assert client.post(f"/api/payments/{payment_id}/complete", headers=stranger).status_code == 403
    assert client.post(f"/api/payments/{payment_id}/complete", headers=admin_headers).status_code == 200


def test_intent_on_another_users_design_is_forbidden(client, designer, admin, make_user):
    _, headers = designer
    _, admin_headers = admin
    design_id = client.post("/api/designs", json={"project_name": "Arch"}, headers=headers).json()["id"]
    stranger = auth_headers(make_user("stranger"))

    r = _intent(client, stranger, design_id=design_id)
    assert r.status_code == 403
    assert r.json()["error"]["type"] == "permission_denied"
    assert _intent(client, headers, design_id=design_id).status_code == 201
    assert _intent(client, admin_headers, design_id=design_id).status_code == 201
