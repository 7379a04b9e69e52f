"""HTTP tests for the price-update API over an in-memory database."""

from __future__ import annotations

import io

import openpyxl
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ferrecloud.main import create_app
from ferrecloud.storage.database import get_db


@pytest_asyncio.fixture()
async def client(db_session, acme):
    app = create_app()

    async def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def _xlsx_bytes(rows):
    wb = openpyxl.Workbook()
    for r in rows:
        wb.active.append(r)
    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()


@pytest.mark.asyncio
async def test_ready(client):
    resp = await client.get("/api/ready")

    assert resp.status_code == 200
    assert resp.json()["message"] == "ready"


@pytest.mark.asyncio
async def test_full_pipeline_over_http(client, acme):
    content = _xlsx_bytes([
        ["Código", "Descripción", "Precio"],
        ["A1", "Martillo", 100],
        ["B2", "Pinza", 50],
        ["ZZZ", "Nuevo", 10],
    ])

    parsed = await client.post(
        "/api/price-updates/parse",
        data={"templateId": str(acme["template_id"])},
        files={"file": ("acme.xlsx", content, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")},
    )
    assert parsed.status_code == 200, parsed.text
    body = parsed.json()
    assert body["total"] == 3
    assert body["fileName"] == "acme.xlsx"

    analyzed = await client.post(
        "/api/price-updates/analyze",
        json={
            "supplierId": acme["supplier_id"],
            "templateId": acme["template_id"],
            "fileName": body["fileName"],
            "data": body["rows"],
        },
    )
    assert analyzed.status_code == 201, analyzed.text
    analysis = analyzed.json()
    assert analysis["summary"]["notFound"] == 1
    assert analysis["summary"]["avgVariation"] == pytest.approx(11.11)
    log_id = analysis["logId"]

    applied = await client.post(f"/api/price-updates/{log_id}/apply", json={"appliedBy": "caja 1"})
    assert applied.status_code == 200, applied.text
    assert applied.json()["updatedProducts"] == 1

    again = await client.post(f"/api/price-updates/{log_id}/apply")
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "INVALID_STATE"

    product = await client.get(f"/api/products/{acme['a1_id']}")
    assert product.json()["costPrice"] == 100.0

    movements = await client.get(f"/api/products/{acme['a1_id']}/price-movements")
    assert [m["movementType"] for m in movements.json()] == ["supplier_price_update"]

    detail = await client.get(f"/api/price-updates/{log_id}")
    assert detail.json()["status"] == "applied"
    assert detail.json()["appliedBy"] == "caja 1"
    assert [d["status"] for d in detail.json()["details"]] == ["update", "discontinued", "not_found"]


@pytest.mark.asyncio
async def test_parse_rejects_empty_and_unreadable_files(client, acme):
    empty = await client.post(
        "/api/price-updates/parse",
        data={"templateId": str(acme["template_id"])},
        files={"file": ("acme.csv", b"", "text/csv")},
    )
    assert empty.status_code == 400

    garbage = await client.post(
        "/api/price-updates/parse",
        data={"templateId": str(acme["template_id"])},
        files={"file": ("acme.xlsx", b"not really a workbook", "application/octet-stream")},
    )
    assert garbage.status_code == 400
    assert garbage.json()["error"]["code"] == "PARSE_ERROR"

    wrong_type = await client.post(
        "/api/price-updates/parse",
        data={"templateId": str(acme["template_id"])},
        files={"file": ("acme.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert wrong_type.status_code == 415


@pytest.mark.asyncio
async def test_analyze_errors(client, acme):
    bad_price = await client.post(
        "/api/price-updates/analyze",
        json={
            "supplierId": acme["supplier_id"],
            "templateId": acme["template_id"],
            "data": [{"supplierCode": "A1", "price": "n/a"}],
        },
    )
    assert bad_price.status_code == 422
    assert bad_price.json()["error"]["details"]["errors"][0]["row"] == 1

    unknown = await client.post(
        "/api/price-updates/analyze",
        json={"supplierId": 999, "templateId": acme["template_id"], "data": []},
    )
    assert unknown.status_code == 404
    assert unknown.json()["error"]["code"] == "SUPPLIER_NOT_FOUND"


@pytest.mark.asyncio
async def test_cancel_and_history(client, acme):
    analyzed = await client.post(
        "/api/price-updates/analyze",
        json={
            "supplierId": acme["supplier_id"],
            "templateId": acme["template_id"],
            "data": [{"supplierCode": "A1", "description": "Martillo", "price": "95"}],
        },
    )
    log_id = analyzed.json()["logId"]

    cancelled = await client.post(f"/api/price-updates/{log_id}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    history = await client.get("/api/price-updates", params={"supplierId": acme["supplier_id"], "status": "cancelled"})
    assert history.status_code == 200
    page = history.json()
    assert page["total"] == 1
    assert page["items"][0]["id"] == log_id
    assert page["items"][0]["supplierName"] == "ACME"

    missing = await client.post("/api/price-updates/999/cancel")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_export_xlsx(client, acme):
    analyzed = await client.post(
        "/api/price-updates/analyze",
        json={
            "supplierId": acme["supplier_id"],
            "templateId": acme["template_id"],
            "data": [{"supplierCode": "A1", "description": "Martillo", "price": "95"}],
        },
    )
    log_id = analyzed.json()["logId"]

    resp = await client.get(f"/api/price-updates/{log_id}/export", params={"fmt": "xlsx"})

    assert resp.status_code == 200
    wb = openpyxl.load_workbook(io.BytesIO(resp.content))
    rows = list(wb.active.iter_rows(values_only=True))
    assert rows[0][1] == "supplier_code"
    assert rows[1][1] == "A1"


@pytest.mark.asyncio
async def test_template_crud_over_http(client, acme):
    created = await client.post(
        "/api/supplier-import-templates",
        json={
            "supplierId": acme["supplier_id"],
            "name": "Lista semanal",
            "columnMapping": {"supplierCode": "a", "description": "b", "price": "c"},
        },
    )
    assert created.status_code == 201, created.text
    template_id = created.json()["id"]
    assert created.json()["columnMapping"]["supplierCode"] == "A"

    replaced = await client.put(
        f"/api/supplier-import-templates/{template_id}",
        json={
            "name": "Lista semanal",
            "columnMapping": {"supplierCode": "C", "description": "D", "price": "E"},
            "hasHeaderRow": False,
            "startRow": 2,
        },
    )
    assert replaced.status_code == 200
    assert replaced.json()["columnMapping"] == {"supplierCode": "C", "description": "D", "price": "E"}

    invalid = await client.post(
        "/api/supplier-import-templates",
        json={"supplierId": acme["supplier_id"], "name": "", "columnMapping": {"supplierCode": "A"}},
    )
    assert invalid.status_code == 422

    listed = await client.get("/api/supplier-import-templates", params={"supplierId": acme["supplier_id"]})
    assert {t["id"] for t in listed.json()} == {acme["template_id"], template_id}

    deleted = await client.delete(f"/api/supplier-import-templates/{template_id}")
    assert deleted.status_code == 204
    gone = await client.get(f"/api/supplier-import-templates/{template_id}")
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_suppliers_and_product_patch(client, acme):
    suppliers = await client.get("/api/suppliers")
    assert [s["name"] for s in suppliers.json()] == ["ACME", "Bulonera Sur"]

    patched = await client.patch(f"/api/products/{acme['a1_id']}", json={"taxPercent": 10.5})
    assert patched.status_code == 200
    assert patched.json()["costWithTax"] == pytest.approx(99.45)

    empty = await client.patch(f"/api/products/{acme['a1_id']}", json={})
    assert empty.status_code == 400
