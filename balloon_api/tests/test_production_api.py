from conftest import cluster


def _design(client, headers, *elements):
    r = client.post("/api/designs", json={"elements": list(elements)}, headers=headers)
    assert r.status_code == 201
    return r.json()["id"]


def _quantities(client, headers):
    return {
        (i["color"], i["size"]): (i["quantity"], i["status"])
        for i in client.get("/api/inventory", headers=headers).json()
    }


def test_start_production_consumes_inventory(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 100)
    stock("red", "16inch", 12)
    design_id = _design(client, headers, cluster("red"))

    r = client.post("/api/production", json={"design_id": design_id, "notes": "Saturday"}, headers=headers)
    assert r.status_code == 201
    run = r.json()
    assert run["status"] == "pending"
    assert run["notes"] == "Saturday"

    assert _quantities(client, headers) == {
        ("red", "11inch"): (89, "in_stock"),
        ("red", "16inch"): (10, "low_stock"),
    }


def test_production_is_all_or_nothing(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 100)
    stock("red", "16inch", 100)
    stock("blue", "16inch", 0)
    design_id = _design(client, headers, cluster("red", "blue"))

    r = client.post("/api/production", json={"design_id": design_id}, headers=headers)
    assert r.status_code == 400
    error = r.json()["error"]
    assert error["type"] == "insufficient_inventory"
    assert error["details"] == [{"color": "blue", "size": "16inch", "required": 1, "available": 0}]

    quantities = _quantities(client, headers)
    assert quantities[("red", "11inch")] == (100, "in_stock")
    assert quantities[("red", "16inch")] == (100, "in_stock")
    assert client.get("/api/production", headers=headers).json() == []


def test_production_requires_materials(client, designer):
    _, headers = designer
    design_id = _design(client, headers)
    r = client.post("/api/production", json={"design_id": design_id}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Design has no material requirements"


def test_production_requires_design_access(client, designer, make_user, stock):
    from conftest import auth_headers

    _, headers = designer
    stock("red", "11inch", 100)
    stock("red", "16inch", 100)
    design_id = _design(client, headers, cluster("red"))
    stranger = auth_headers(make_user("stranger"))

    assert client.post("/api/production", json={"design_id": design_id}, headers=stranger).status_code == 403
    assert client.post("/api/production", json={"design_id": 999}, headers=headers).status_code == 404


def test_list_update_and_complete(client, designer, stock):
    _, headers = designer
    stock("gold", "11inch", 100)
    stock("gold", "16inch", 100)
    design_id = _design(client, headers, cluster("gold"))
    run_id = client.post("/api/production", json={"design_id": design_id}, headers=headers).json()["id"]

    r = client.patch(f"/api/production/{run_id}", json={"status": "in_progress"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "in_progress"

    assert [p["id"] for p in client.get("/api/production?status=in_progress", headers=headers).json()] == [run_id]
    assert client.get("/api/production?status=completed", headers=headers).json() == []
    assert [p["id"] for p in client.get(f"/api/production/design/{design_id}", headers=headers).json()] == [run_id]

    r = client.patch(f"/api/production/{run_id}/complete", json={"actual_time": "2.5 hrs"}, headers=headers)
    done = r.json()
    assert done["status"] == "completed"
    assert done["actual_time"] == "2.5 hrs"
    assert done["completion_date"] is not None


def test_complete_without_body_defaults_actual_time(client, designer, stock):
    _, headers = designer
    stock("gold", "11inch", 100)
    stock("gold", "16inch", 100)
    design_id = _design(client, headers, cluster("gold"))
    run_id = client.post("/api/production", json={"design_id": design_id}, headers=headers).json()["id"]

    r = client.patch(f"/api/production/{run_id}/complete", headers=headers)
    assert r.status_code == 200
    assert r.json()["actual_time"] == "Unknown"
    assert client.get("/api/production/999", headers=headers).status_code == 404
