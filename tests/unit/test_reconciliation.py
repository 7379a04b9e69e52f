"""Unit tests for price-list reconciliation against the catalog."""

import pytest

from ferrecloud.v1_0.helper.pricing import (
    CatalogProduct,
    PricedRow,
    classify_row,
    compute_variation,
    price_rows,
    reconcile,
)
from ferrecloud.v1_0.models import DetailStatus


def _row(code, price, position=1, description=""):
    return PricedRow(position=position, supplier_code=code, description=description, new_price=price)


def test_active_match_is_update_with_variation():
    product = CatalogProduct(id=1, sku="S1", name="Martillo", cost_price=100.0, is_active=True)

    out = classify_row(_row("A1", 110.0), product)

    assert out.status == DetailStatus.UPDATE
    assert out.variation == 10.0
    assert out.old_price == 100.0
    assert out.product_id == 1


def test_missing_product_is_not_found_with_zero_old_price():
    out = classify_row(_row("ZZZ", 10.0), None)

    assert out.status == DetailStatus.NOT_FOUND
    assert out.old_price == 0
    assert out.product_id is None
    assert out.variation == 0.0


def test_discontinued_regardless_of_delta():
    product = CatalogProduct(id=2, sku="S2", name="Pinza", cost_price=40.0, is_active=False)

    for price in (40.0, 50.0, 1.0):
        assert classify_row(_row("B2", price), product).status == DetailStatus.DISCONTINUED


def test_variation_without_previous_cost_is_zero():
    assert compute_variation(0.0, 50.0) == 0.0
    assert compute_variation(None, 50.0) == 0.0
    assert compute_variation(90.0, 100.0) == 11.11
    assert compute_variation(100.0, 80.0) == -20.0


def test_summary_counts_and_average_over_update_rows_only():
    catalog = {
        "A1": CatalogProduct(id=1, sku="S1", name="a", cost_price=100.0, is_active=True),
        "A2": CatalogProduct(id=2, sku="S2", name="b", cost_price=50.0, is_active=True),
        "B2": CatalogProduct(id=3, sku="S3", name="c", cost_price=10.0, is_active=False),
        "C3": CatalogProduct(id=4, sku="S4", name="d", cost_price=0.0, is_active=True),
    }
    rows = [
        _row("A1", 110.0, 1),
        _row("A2", 45.0, 2),
        _row("B2", 30.0, 3),
        _row("ZZZ", 1.0, 4),
        _row("C3", 5.0, 5),
    ]

    details, summary = reconcile(rows, catalog)

    assert [d.position for d in details] == [1, 2, 3, 4, 5]
    assert summary.total == 5
    assert summary.updated == 3
    assert summary.not_found == 1
    assert summary.discontinued == 1
    assert summary.updated + summary.not_found + summary.discontinued == summary.total
    # C3 has no previous cost and stays out of the mean; B2 never counts
    assert summary.avg_variation == pytest.approx((10.0 + -10.0) / 2)


def test_average_is_zero_without_update_rows():
    _, summary = reconcile([_row("ZZZ", 1.0)], {})

    assert summary.avg_variation == 0.0
    assert summary.not_found == 1


def test_acme_scenario():
    catalog = {
        "A1": CatalogProduct(id=1, sku="S1", name="a", cost_price=90.0, is_active=True),
        "B2": CatalogProduct(id=2, sku="S2", name="b", cost_price=40.0, is_active=False),
    }
    priced, errors = price_rows([
        {"supplierCode": "A1", "price": "100"},
        {"supplierCode": "B2", "price": "50"},
        {"supplierCode": "ZZZ", "price": "10"},
    ])

    details, summary = reconcile(priced, catalog)

    assert errors == []
    assert (summary.total, summary.updated, summary.not_found, summary.discontinued) == (3, 1, 1, 1)
    assert summary.avg_variation == pytest.approx(11.11)
    assert [d.status for d in details] == [
        DetailStatus.UPDATE,
        DetailStatus.DISCONTINUED,
        DetailStatus.NOT_FOUND,
    ]
    assert details[0].variation == 11.11


def test_price_rows_reports_non_numeric_prices():
    priced, errors = price_rows([
        {"supplierCode": "A1", "price": "100"},
        {"supplierCode": "A2", "price": "consultar"},
        {"supplierCode": "A3", "price": ""},
    ])

    assert [p.supplier_code for p in priced] == ["A1"]
    assert [e["row"] for e in errors] == [2, 3]
    assert errors[0]["value"] == "consultar"


def test_supplier_codes_match_exactly():
    catalog = {"A1": CatalogProduct(id=1, sku="S1", name="a", cost_price=90.0, is_active=True)}

    details, _ = reconcile([_row(" A1", 100.0), _row("a1", 100.0)], catalog)

    assert all(d.status == DetailStatus.NOT_FOUND for d in details)


def test_price_rows_flags_heading_rows_without_price():
    priced, errors = price_rows([
        {"supplierCode": "HERRAMIENTAS", "description": "", "price": ""},
        {"supplierCode": "A1", "description": "Martillo", "price": "100"},
        {"supplierCode": "A2", "description": "Pinza", "price": None},
    ])

    assert [p.supplier_code for p in priced] == ["A1"]
    assert [(e["row"], e["code"]) for e in errors] == [(1, "required"), (3, "required")]
    assert "remove" in errors[0]["message"]


def test_unchanged_price_is_update_with_zero_variation():
    product = CatalogProduct(id=1, sku="S1", name="Martillo", cost_price=90.0, is_active=True)

    out = classify_row(_row("A1", 90.0), product)

    assert out.status == DetailStatus.UPDATE
    assert out.variation == 0.0
