import io

import pandas as pd

from conftest import cluster


def test_inventory_report_csv(client, designer, stock):
    _, headers = designer
    stock("red", "11inch", 100)
    stock("blue", "16inch", 0)

    r = client.get("/api/reports/inventory", headers=headers)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert 'filename="inventory_report.csv"' in r.headers["content-disposition"]

    df = pd.read_csv(io.StringIO(r.text))
    assert list(df["color"]) == ["blue", "red"]
    assert list(df["status"]) == ["out_of_stock", "in_stock"]


def test_orders_report_xlsx(client, designer):
    _, headers = designer
    client.post("/api/orders/balloon", json={"color": "red", "size": "11inch", "quantity": 10}, headers=headers)

    r = client.get("/api/reports/orders?format=xlsx", headers=headers)
    assert r.status_code == 200
    df = pd.read_excel(io.BytesIO(r.content), engine="openpyxl")
    assert df.loc[0, "total_quantity"] == 10
    assert df.loc[0, "total_cost"] == 19.9


def test_design_materials_report_pdf(client, designer):
    _, headers = designer
    design_id = client.post("/api/designs", json={"elements": [cluster("gold")]}, headers=headers).json()["id"]

    r = client.get(f"/api/reports/designs/{design_id}/materials?format=pdf", headers=headers)
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")


def test_design_materials_report_respects_ownership(client, designer, make_user):
    from conftest import auth_headers

    _, headers = designer
    design_id = client.post("/api/designs", json={}, headers=headers).json()["id"]
    stranger = auth_headers(make_user("stranger"))
    assert client.get(f"/api/reports/designs/{design_id}/materials", headers=stranger).status_code == 403
