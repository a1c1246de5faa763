from conftest import auth_headers


def test_create_order_and_add_items(client, designer):
    _, headers = designer
    r = client.post("/api/orders", json={"supplier_name": "Latex Co", "notes": "rush"}, headers=headers)
    assert r.status_code == 201
    order = r.json()
    assert order["total_quantity"] == 0
    assert order["total_cost"] == 0
    assert order["priority"] == "normal"
    assert order["status"] == "pending"

    url = f"/api/orders/{order['id']}/items"
    client.post(url, json={"color": "red", "size": "11inch", "quantity": 10, "unit_price": 199}, headers=headers)
    r = client.post(url, json={"color": "gold", "size": "16inch", "quantity": 3, "unit_price": 299}, headers=headers)
    assert r.status_code == 201
    detail = r.json()
    assert [i["subtotal"] for i in detail["items"]] == [1990, 897]
    assert detail["total_quantity"] == 13
    assert detail["total_cost"] == 2887

    fetched = client.get(f"/api/orders/{order['id']}", headers=headers).json()
    assert fetched["total_cost"] == 2887
    assert len(fetched["items"]) == 2


def test_balloon_quick_order(client, designer):
    _, headers = designer
    r = client.post("/api/orders/balloon", json={"color": "pink", "size": "16inch", "quantity": 4}, headers=headers)
    assert r.status_code == 201
    order = r.json()
    assert order["items"][0]["inventory_type"] == "balloon"
    assert order["items"][0]["unit_price"] == 299
    assert order["total_cost"] == 4 * 299

    too_many = {"color": "pink", "size": "16inch", "quantity": 101}
    assert client.post("/api/orders/balloon", json=too_many, headers=headers).status_code == 422


def test_update_order_fields(client, designer):
    _, headers = designer
    order_id = client.post("/api/orders", json={}, headers=headers).json()["id"]
    r = client.patch(
        f"/api/orders/{order_id}",
        json={"status": "processing", "priority": "high", "expected_delivery_date": "2026-11-01"},
        headers=headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "processing"
    assert body["priority"] == "high"
    assert body["expected_delivery_date"] == "2026-11-01"
    assert client.patch(f"/api/orders/{order_id}", json={}, headers=headers).status_code == 400


def test_orders_are_private(client, designer, make_user):
    _, headers = designer
    order_id = client.post("/api/orders", json={}, headers=headers).json()["id"]
    stranger = auth_headers(make_user("stranger"))

    assert client.get("/api/orders", headers=stranger).json() == []
    assert client.get(f"/api/orders/{order_id}", headers=stranger).status_code == 403
    assert len(client.get("/api/orders", headers=headers).json()) == 1


def test_orders_for_design(client, designer):
    _, headers = designer
    design_id = client.post("/api/designs", json={}, headers=headers).json()["id"]
    client.post("/api/orders", json={"design_id": design_id}, headers=headers)
    client.post("/api/orders", json={}, headers=headers)

    listed = client.get(f"/api/orders/design/{design_id}", headers=headers).json()
    assert [o["design_id"] for o in listed] == [design_id]
    assert client.post("/api/orders", json={"design_id": 999}, headers=headers).status_code == 404


def test_receive_order_restocks_and_completes(client, designer, manager, stock):
    _, headers = designer
    _, manager_headers = manager
    stock("red", "11inch", 5)
    order = client.post("/api/orders/balloon", json={"color": "red", "size": "11inch", "quantity": 50}, headers=headers)
    order_id = order.json()["id"]
    client.post(
        f"/api/orders/{order_id}/items",
        json={"inventory_type": "ribbon", "color": "white", "size": "roll", "quantity": 1},
        headers=headers,
    )

    assert client.post(f"/api/orders/{order_id}/receive", headers=headers).status_code == 403

    r = client.post(f"/api/orders/{order_id}/receive", headers=manager_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "completed"

    inventory = client.get("/api/inventory", headers=headers).json()
    assert [(i["color"], i["size"], i["quantity"], i["status"]) for i in inventory] == [
        ("red", "11inch", 55, "in_stock")
    ]

    again = client.post(f"/api/orders/{order_id}/receive", headers=manager_headers)
    assert again.status_code == 400
    assert again.json()["error"]["type"] == "invalid_state"


def test_receive_cancelled_order_is_rejected(client, designer, admin):
    _, headers = designer
    _, admin_headers = admin
    order_id = client.post("/api/orders", json={}, headers=headers).json()["id"]
    client.patch(f"/api/orders/{order_id}", json={"status": "cancelled"}, headers=headers)
    assert client.post(f"/api/orders/{order_id}/receive", headers=admin_headers).status_code == 400


def test_balloon_items_must_be_stocked(client, designer):
    _, headers = designer
    url = f"/api/orders/{client.post('/api/orders', json={}, headers=headers).json()['id']}/items"

    bad_size = client.post(url, json={"color": "red", "size": "12inch", "quantity": 1}, headers=headers)
    assert bad_size.status_code == 422
    assert bad_size.json()["error"]["type"] == "validation_error"
    assert client.post(url, json={"color": "teal", "size": "11inch", "quantity": 1}, headers=headers).status_code == 422

    r = client.post(url, json={"color": " #FF5252 ", "size": "16inch", "quantity": 2}, headers=headers)
    assert r.status_code == 201
    assert [(i["color"], i["size"]) for i in r.json()["items"]] == [("red", "16inch")]

    r = client.post(
        url, json={"inventory_type": "ribbon", "color": "teal", "size": "spool", "quantity": 1}, headers=headers
    )
    assert r.status_code == 201
    assert len(r.json()["items"]) == 2
