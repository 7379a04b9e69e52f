from .reconciliation import (
    CatalogProduct,
    PricedRow,
    ReconciledRow,
    ReconciliationSummary,
    compute_variation,
    price_rows,
    classify_row,
    summarize,
    reconcile,
)

__all__ = [
    "CatalogProduct",
    "PricedRow",
    "ReconciledRow",
    "ReconciliationSummary",
    "compute_variation",
    "price_rows",
    "classify_row",
    "summarize",
    "reconcile",
]
