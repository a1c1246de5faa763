from conftest import cluster


def _create(client, headers, elements=None, **fields):
    payload = {"client_name": "Ana", "project_name": "Garden Party", "event_type": "Birthday"}
    payload.update(fields)
    payload["elements"] = elements if elements is not None else [cluster("red"), cluster("red", "blue")]
    return client.post("/api/designs", json=payload, headers=headers)


def test_create_derives_material_fields(client, designer):
    _, headers = designer
    r = _create(client, headers, notes="front porch", dimensions="8ft x 6ft")
    assert r.status_code == 201
    body = r.json()
    assert body["notes"] == "front porch"
    assert body["dimensions"] == "8ft x 6ft"
    assert body["total_balloons"] == 26
    assert body["estimated_clusters"] == 2
    assert body["production_time"] == "0.3 hrs"
    assert body["material_requirements"]["red"] == {"small": 22, "large": 3, "total": 25}
    assert body["material_requirements"]["blue"] == {"small": 0, "large": 1, "total": 1}
    assert body["color_analysis"]["colors"][0]["name"] == "red"


def test_create_applies_defaults(client, designer):
    _, headers = designer
    r = client.post("/api/designs", json={}, headers=headers)
    assert r.status_code == 201
    body = r.json()
    assert body["client_name"] == "Anonymous Client"
    assert body["project_name"] == "Untitled Project"
    assert body["total_balloons"] == 0
    assert body["scale"] == 1.0


def test_list_only_own_designs_unless_admin_asks_for_all(client, designer, admin):
    _, designer_headers = designer
    _, admin_headers = admin
    _create(client, designer_headers)
    _create(client, admin_headers)

    assert len(client.get("/api/designs", headers=designer_headers).json()) == 1
    assert len(client.get("/api/designs?all=true", headers=designer_headers).json()) == 1
    assert len(client.get("/api/designs", headers=admin_headers).json()) == 1
    assert len(client.get("/api/designs?all=true", headers=admin_headers).json()) == 2


def test_other_users_cannot_touch_a_design(client, designer, make_user):
    from conftest import auth_headers

    _, headers = designer
    design_id = _create(client, headers).json()["id"]
    stranger = auth_headers(make_user("stranger"))

    assert client.get(f"/api/designs/{design_id}", headers=stranger).status_code == 403
    assert client.patch(f"/api/designs/{design_id}", json={"notes": "x"}, headers=stranger).status_code == 403
    assert client.delete(f"/api/designs/{design_id}", headers=stranger).status_code == 403


def test_admin_can_read_any_design(client, designer, admin):
    _, headers = designer
    _, admin_headers = admin
    design_id = _create(client, headers).json()["id"]
    assert client.get(f"/api/designs/{design_id}", headers=admin_headers).status_code == 200


def test_update_recomputes_when_elements_change(client, designer):
    _, headers = designer
    design_id = _create(client, headers).json()["id"]

    r = client.patch(f"/api/designs/{design_id}", json={"notes": "updated"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["total_balloons"] == 26

    r = client.patch(f"/api/designs/{design_id}", json={"elements": [cluster("gold")]}, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["total_balloons"] == 13
    assert list(body["material_requirements"]) == ["gold"]
    assert body["notes"] == "updated"


def test_empty_update_is_rejected(client, designer):
    _, headers = designer
    design_id = _create(client, headers).json()["id"]
    r = client.patch(f"/api/designs/{design_id}", json={}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "No valid fields to update"


def test_delete_and_missing_design(client, designer):
    _, headers = designer
    design_id = _create(client, headers).json()["id"]
    assert client.delete(f"/api/designs/{design_id}", headers=headers).status_code == 204
    r = client.get(f"/api/designs/{design_id}", headers=headers)
    assert r.status_code == 404
    assert r.json()["error"]["type"] == "not_found"


def test_materials_and_analyze(client, designer):
    _, headers = designer
    design_id = _create(client, headers, elements=[cluster("#ffc107")]).json()["id"]

    materials = client.get(f"/api/designs/{design_id}/materials", headers=headers).json()
    assert materials["requirements"]["gold"]["total"] == 13
    assert materials["cluster_count"] == 1

    r = client.post(f"/api/designs/{design_id}/analyze", headers=headers)
    assert r.status_code == 200
    assert r.json()["color_analysis"] == {"colors": [{"name": "gold", "percentage": 100.0}]}


def test_check_inventory_uses_design_requirements(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 100)
    stock("red", "16inch", 100)
    design_id = _create(client, headers, elements=[cluster("red")]).json()["id"]

    r = client.post(f"/api/designs/{design_id}/check-inventory", headers=headers)
    assert r.status_code == 200
    report = r.json()
    assert report["available"] is True
    assert report["shortages"] == []


def test_check_inventory_with_override(client, designer, stock):
    _, headers = designer
    stock("blue", "11inch", 3)
    design_id = _create(client, headers, elements=[cluster("red")]).json()["id"]

    r = client.post(
        f"/api/designs/{design_id}/check-inventory",
        json={"material_requirements": {"blue": {"small": 10, "large": 0}}},
        headers=headers,
    )
    report = r.json()
    assert report["available"] is False
    assert report["shortages"] == [
        {"color": "blue", "size": "11inch", "required": 10, "available": 3, "shortage": 7}
    ]


def test_order_shortages_creates_priced_order(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 5)
    design_id = _create(client, headers, elements=[cluster("red")]).json()["id"]

    r = client.post(f"/api/designs/{design_id}/order-shortages", headers=headers)
    assert r.status_code == 201
    order = r.json()
    assert order["design_id"] == design_id
    assert order["status"] == "pending"
    items = {(i["color"], i["size"]): i for i in order["items"]}
    assert items[("red", "11inch")]["quantity"] == 6
    assert items[("red", "11inch")]["unit_price"] == 199
    assert items[("red", "16inch")]["quantity"] == 2
    assert items[("red", "16inch")]["unit_price"] == 299
    assert order["total_quantity"] == 8
    assert order["total_cost"] == 6 * 199 + 2 * 299


def test_order_shortages_without_shortages_is_rejected(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 100)
    stock("red", "16inch", 100)
    design_id = _create(client, headers, elements=[cluster("red")]).json()["id"]
    r = client.post(f"/api/designs/{design_id}/order-shortages", headers=headers)
    assert r.status_code == 400


def test_design_accessories_accumulate(client, designer, admin):
    _, headers = designer
    _, admin_headers = admin
    accessory = client.post(
        "/api/accessories", json={"name": "Glue dots", "quantity": 40}, headers=admin_headers
    ).json()
    design_id = _create(client, headers).json()["id"]

    url = f"/api/designs/{design_id}/accessories"
    r = client.post(url, json={"accessory_id": accessory["id"], "quantity": 2}, headers=headers)
    assert r.status_code == 201
    client.post(url, json={"accessory_id": accessory["id"], "quantity": 3}, headers=headers)

    listed = client.get(url, headers=headers).json()
    assert listed == [
        {
            "id": listed[0]["id"],
            "design_id": design_id,
            "accessory_id": accessory["id"],
            "name": "Glue dots",
            "quantity": 5,
        }
    ]

    r = client.post(url, json={"accessory_id": 999, "quantity": 1}, headers=headers)
    assert r.status_code == 404
    r = client.post(url, json={"accessory_id": accessory["id"], "quantity": 0}, headers=headers)
    assert r.status_code == 422


def test_order_shortages_skips_unstocked_colors(client, designer, manager):
    _, headers = designer
    _, manager_headers = manager
    design_id = _create(client, headers, elements=[cluster("red"), cluster("#FFD166")]).json()["id"]

    r = client.post(f"/api/designs/{design_id}/order-shortages", headers=headers)
    assert r.status_code == 201
    order = r.json()
    assert {i["color"] for i in order["items"]} == {"red"}
    assert "#ffd166 16inch" in order["notes"]
    assert "#ffd166 11inch" in order["notes"]

    received = client.post(f"/api/orders/{order['id']}/receive", headers=manager_headers)
    assert received.status_code == 200
    assert received.json()["status"] == "completed"


def test_order_shortages_with_only_unstocked_colors_is_rejected(client, designer):
    _, headers = designer
    design_id = _create(client, headers, elements=[cluster("#FFD166")]).json()["id"]

    r = client.post(f"/api/designs/{design_id}/order-shortages", headers=headers)
    assert r.status_code == 400
    assert r.json()["error"]["type"] == "invalid_state"
    assert client.get(f"/api/orders/design/{design_id}", headers=headers).json() == []
