def test_list_and_filter_inventory(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 100)
    stock("red", "16inch", 5)
    stock("blue", "11inch", 0)

    items = client.get("/api/inventory", headers=headers).json()
    assert [(i["color"], i["size"]) for i in items] == [
        ("blue", "11inch"),
        ("red", "11inch"),
        ("red", "16inch"),
    ]

    reds = client.get("/api/inventory?color=red", headers=headers).json()
    assert len(reds) == 2
    low = client.get("/api/inventory?status=low_stock", headers=headers).json()
    assert [(i["color"], i["size"]) for i in low] == [("red", "16inch")]


def test_summary_counts_and_restock_list(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 100)
    stock("red", "16inch", 5)
    stock("blue", "11inch", 0)

    summary = client.get("/api/inventory/summary", headers=headers).json()
    assert summary["total_items"] == 3
    assert summary["status_counts"] == {"in_stock": 1, "low_stock": 1, "out_of_stock": 1}
    assert [i["quantity"] for i in summary["to_restock"]] == [0, 5]


def test_create_requires_writer_role_and_derives_status(client, designer, manager):
    _, designer_headers = designer
    _, manager_headers = manager
    payload = {"color": "gold", "size": "16inch", "quantity": 10, "threshold": 20, "status": "in_stock"}

    assert client.post("/api/inventory", json=payload, headers=designer_headers).status_code == 403

    r = client.post("/api/inventory", json=payload, headers=manager_headers)
    assert r.status_code == 201
    assert r.json()["status"] == "low_stock"

    r = client.post("/api/inventory", json=payload, headers=manager_headers)
    assert r.status_code == 400
    assert r.json()["error"]["type"] == "conflict"


def test_create_rejects_unknown_color(client, admin):
    _, headers = admin
    r = client.post("/api/inventory", json={"color": "teal", "size": "11inch"}, headers=headers)
    assert r.status_code == 422


def test_update_recomputes_status(client, admin, stock):
    _, headers = admin
    item = stock("green", "11inch", 50)

    r = client.patch(f"/api/inventory/{item.id}", json={"quantity": 0}, headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "out_of_stock"

    r = client.patch(f"/api/inventory/{item.id}", json={"quantity": 30, "threshold": 40}, headers=headers)
    assert r.json()["status"] == "low_stock"

    assert client.get("/api/inventory/999", headers=headers).status_code == 404


def test_check_availability(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 30)
    r = client.post(
        "/api/inventory/check-availability",
        json={"balloon_counts": {"red": {"small": 20, "large": 1}}},
        headers=headers,
    )
    assert r.status_code == 200
    report = r.json()
    assert report["available"] is False
    statuses = {(line["color"], line["size"]): line["status"] for line in report["lines"]}
    assert statuses == {("red", "11inch"): "low", ("red", "16inch"): "unavailable"}


def test_restock_updates_and_creates_lines(client, manager, designer, stock):
    _, headers = manager
    _, designer_headers = designer
    stock("red", "11inch", 5)
    body = {"material_counts": {"red": {"small": 50, "large": 0}, "#ffc107": {"small": 0, "large": 12}}}

    assert client.post("/api/inventory/restock", json=body, headers=designer_headers).status_code == 403

    r = client.post("/api/inventory/restock", json=body, headers=headers)
    assert r.status_code == 200
    result = r.json()
    assert [(i["color"], i["quantity"], i["status"]) for i in result["updated"]] == [("red", 55, "in_stock")]
    assert [(i["color"], i["size"], i["quantity"], i["threshold"]) for i in result["created"]] == [
        ("gold", "16inch", 12, 20)
    ]
    assert result["message"] == "Restocked 2 inventory item(s)"


def test_restock_rejects_unknown_color_without_changes(client, admin, stock):
    _, headers = admin
    item = stock("red", "11inch", 5)
    body = {"material_counts": {"red": {"small": 10, "large": 0}, "teal": {"small": 1, "large": 0}}}
    r = client.post("/api/inventory/restock", json=body, headers=headers)
    assert r.status_code == 400
    assert client.get(f"/api/inventory/{item.id}", headers=headers).json()["quantity"] == 5


def test_accessory_crud(client, admin, designer):
    _, headers = admin
    _, designer_headers = designer

    assert client.post("/api/accessories", json={"name": "Tape"}, headers=designer_headers).status_code == 403

    r = client.post("/api/accessories", json={"name": "Tape", "quantity": 3}, headers=headers)
    assert r.status_code == 201
    accessory = r.json()
    assert accessory["threshold"] == 5
    assert accessory["status"] == "low_stock"

    r = client.patch(f"/api/accessories/{accessory['id']}", json={"quantity": 40}, headers=headers)
    assert r.json()["status"] == "in_stock"

    assert [a["name"] for a in client.get("/api/accessories", headers=designer_headers).json()] == ["Tape"]
    assert client.get(f"/api/accessories/{accessory['id']}", headers=designer_headers).status_code == 200
    assert client.get("/api/accessories/999", headers=designer_headers).status_code == 404
