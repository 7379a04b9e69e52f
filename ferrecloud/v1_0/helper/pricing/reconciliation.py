"""
Reconciliation of a supplier price list against the product catalog.

Pure functions: no database access. The price-update service loads the
catalog snapshot, calls :func:`reconcile` and persists the result.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ferrecloud.v1_0.helper.io.normalizers import to_price
from ferrecloud.v1_0.models.price_update_detail import DetailStatus


@dataclass(frozen=True)
class CatalogProduct:
    """Read-only view of the catalog fields the analyzer needs."""
    id: int
    sku: str
    name: str
    cost_price: float
    is_active: bool


@dataclass(frozen=True)
class PricedRow:
    """A normalized import row whose price already parsed to a number."""
    position: int
    supplier_code: str
    description: str
    new_price: float


@dataclass(frozen=True)
class ReconciledRow:
    position: int
    supplier_code: str
    description: str
    product_id: Optional[int]
    sku: Optional[str]
    product_name: Optional[str]
    old_price: float
    new_price: float
    variation: float
    status: DetailStatus


@dataclass(frozen=True)
class ReconciliationSummary:
    total: int
    updated: int
    not_found: int
    discontinued: int
    avg_variation: float


def compute_variation(old_price: float | None, new_price: float) -> float:
    """Signed % change of new vs old, 2 decimals; 0.0 when there is no old price."""
    if old_price is None or old_price <= 0:
        return 0.0
    return round((new_price - old_price) / old_price * 100, 2)


def price_rows(rows: Sequence[Mapping[str, Any]]) -> Tuple[List[PricedRow], List[Dict[str, Any]]]:
    """
    Parse the price of every row.

    Returns:
        (priced rows, errors). Row numbers in errors are 1-based positions.
    """
    priced: List[PricedRow] = []
    errors: List[Dict[str, Any]] = []
    for position, row in enumerate(rows, start=1):
        raw_price = row.get("price")
        price = to_price(raw_price)
        if price is None:
            # filas de título o sin precio en la lista del proveedor
            if raw_price is None or not str(raw_price).strip():
                errors.append({
                    "row": position,
                    "field": "price",
                    "code": "required",
                    "message": "Row has no price; remove heading or blank-price rows before analyzing",
                    "value": raw_price,
                })
                continue
            errors.append({
                "row": position,
                "field": "price",
                "code": "type",
                "message": "Price must be a number >= 0",
                "value": raw_price,
            })
            continue
        priced.append(PricedRow(
            position=position,
            supplier_code="" if row.get("supplierCode") is None else str(row.get("supplierCode")),
            description="" if row.get("description") is None else str(row.get("description")),
            new_price=price,
        ))
    return priced, errors


def classify_row(row: PricedRow, product: Optional[CatalogProduct]) -> ReconciledRow:
    """
    not_found without a product, discontinued for an inactive one, update
    otherwise. An unchanged price stays `update` with variation 0; apply
    counts it as skipped.
    """
    if product is None:
        return ReconciledRow(
            position=row.position,
            supplier_code=row.supplier_code,
            description=row.description,
            product_id=None,
            sku=None,
            product_name=None,
            old_price=0.0,
            new_price=row.new_price,
            variation=0.0,
            status=DetailStatus.NOT_FOUND,
        )

    old_price = float(product.cost_price or 0.0)
    return ReconciledRow(
        position=row.position,
        supplier_code=row.supplier_code,
        description=row.description,
        product_id=product.id,
        sku=product.sku,
        product_name=product.name,
        old_price=old_price,
        new_price=row.new_price,
        variation=compute_variation(old_price, row.new_price),
        status=DetailStatus.UPDATE if product.is_active else DetailStatus.DISCONTINUED,
    )


def summarize(rows: Sequence[ReconciledRow]) -> ReconciliationSummary:
    """Counts per status; average variation over update rows that had a cost."""
    updated = [r for r in rows if r.status == DetailStatus.UPDATE]
    with_cost = [r.variation for r in updated if r.old_price > 0]
    avg = round(sum(with_cost) / len(with_cost), 2) if with_cost else 0.0
    return ReconciliationSummary(
        total=len(rows),
        updated=len(updated),
        not_found=sum(1 for r in rows if r.status == DetailStatus.NOT_FOUND),
        discontinued=sum(1 for r in rows if r.status == DetailStatus.DISCONTINUED),
        avg_variation=avg,
    )


def reconcile(
    rows: Sequence[PricedRow],
    catalog: Mapping[str, CatalogProduct],
) -> Tuple[List[ReconciledRow], ReconciliationSummary]:
    """Classify rows in input order; `catalog` is keyed by exact supplier code."""
    out = [classify_row(r, catalog.get(r.supplier_code)) for r in rows]
    return out, summarize(out)
