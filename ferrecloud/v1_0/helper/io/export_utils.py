from typing import Any, Dict, Iterable, List, Literal

DETAIL_FIELDS = [
    "position",
    "supplier_code",
    "description",
    "sku",
    "product_name",
    "old_price",
    "new_price",
    "variation",
    "status",
]
NUMERIC_FIELDS = {"old_price", "new_price", "variation"}

FileFmt = Literal["csv", "xlsx"]

def _cast(v: Any, *, numeric: bool) -> Any:
    if v is None:
        return 0 if numeric else ""
    return v

def rows_from_details(details: Iterable[Any], fields: List[str] = DETAIL_FIELDS) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for d in details:
        base = d.model_dump() if hasattr(d, "model_dump") else dict(d)
        out.append({k: _cast(base.get(k), numeric=(k in NUMERIC_FIELDS)) for k in fields})
    return out
