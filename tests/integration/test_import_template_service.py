"""Integration tests for supplier import templates."""

from __future__ import annotations

import pytest

from ferrecloud.core.errors import NotFoundError, ValidationError
from ferrecloud.v1_0.schemas import ImportTemplateCreate, ImportTemplateUpdate


def _create(supplier_id, **overrides):
    data = {
        "supplier_id": supplier_id,
        "name": "  Lista Ferretera  ",
        "column_mapping": {"supplierCode": "a", "description": "b", "price": "d"},
        "has_header_row": True,
        "start_row": 1,
        "sheet_name": "",
    }
    data.update(overrides)
    return ImportTemplateCreate(**data)


@pytest.mark.asyncio
async def test_create_normalizes_fields(db_session, acme, template_service):
    dto = await template_service.create(_create(acme["supplier_id"]), db_session)

    assert dto.id is not None
    assert dto.name == "Lista Ferretera"
    assert dto.column_mapping == {"supplierCode": "A", "description": "B", "price": "D"}
    assert dto.sheet_name is None
    assert dto.is_active is True


@pytest.mark.asyncio
async def test_update_replaces_mapping_and_list_reflects_it(db_session, acme, template_service):
    created = await template_service.create(
        _create(acme["supplier_id"], column_mapping={"supplierCode": "A", "description": "B", "price": "C", "brand": "E"}),
        db_session,
    )

    await template_service.update(
        created.id,
        ImportTemplateUpdate(
            name="Lista v2",
            column_mapping={"supplierCode": "B", "description": "C", "price": "F"},
            has_header_row=False,
            start_row=3,
            sheet_name="Precios",
        ),
        db_session,
    )

    listed = await template_service.list_for_supplier(acme["supplier_id"], db_session)
    mine = [t for t in listed if t.id == created.id]
    assert len(mine) == 1
    assert mine[0].column_mapping == {"supplierCode": "B", "description": "C", "price": "F"}
    assert mine[0].name == "Lista v2"
    assert mine[0].has_header_row is False
    assert mine[0].start_row == 3
    assert mine[0].sheet_name == "Precios"
    assert mine[0].supplier_id == acme["supplier_id"]


@pytest.mark.asyncio
async def test_list_is_scoped_to_supplier(db_session, acme, template_service):
    listed = await template_service.list_for_supplier(acme["supplier_id"], db_session)

    assert [t.id for t in listed] == [acme["template_id"]]
    assert await template_service.list_for_supplier(999, db_session) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"start_row": 0},
        {"column_mapping": {"supplierCode": "A", "description": "B"}},
        {"column_mapping": {"supplierCode": "A", "description": "B", "price": "7"}},
    ],
)
async def test_create_rejects_invalid_templates(db_session, acme, template_service, overrides):
    with pytest.raises(ValidationError):
        await template_service.create(_create(acme["supplier_id"], **overrides), db_session)


@pytest.mark.asyncio
async def test_create_for_unknown_supplier(db_session, acme, template_service):
    with pytest.raises(NotFoundError) as exc:
        await template_service.create(_create(999), db_session)

    assert exc.value.code == "SUPPLIER_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_update_delete_unknown_template(db_session, acme, template_service):
    update = ImportTemplateUpdate(
        name="x",
        column_mapping={"supplierCode": "A", "description": "B", "price": "C"},
    )

    with pytest.raises(NotFoundError):
        await template_service.get(999, db_session)
    with pytest.raises(NotFoundError):
        await template_service.update(999, update, db_session)
    with pytest.raises(NotFoundError):
        await template_service.delete(999, db_session)


@pytest.mark.asyncio
async def test_delete_removes_template(db_session, acme, template_service):
    assert await template_service.delete(acme["template_id"], db_session) is True

    with pytest.raises(NotFoundError):
        await template_service.get(acme["template_id"], db_session)
