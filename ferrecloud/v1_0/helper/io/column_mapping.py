import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from ferrecloud.core.errors import ValidationError

REQUIRED_FIELDS: Tuple[str, ...] = ("supplierCode", "description", "price")

_TEMPLATE_COLUMN = re.compile(r"^[A-Z]$")
_ANY_COLUMN = re.compile(r"^[A-Z]+$")


def column_index(letters: str) -> int:
    """Spreadsheet column reference to 0-based index: A -> 0, Z -> 25, AA -> 26."""
    ref = (letters or "").strip().upper()
    if not _ANY_COLUMN.match(ref):
        raise ValueError(f"Invalid column reference: {letters!r}")
    idx = 0
    for ch in ref:
        idx = idx * 26 + (ord(ch) - ord("A") + 1)
    return idx - 1


@dataclass(frozen=True)
class ColumnMapping:
    """Logical field -> column letter, with the three required fields typed."""
    supplier_code: str
    description: str
    price: str
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ColumnMapping":
        """Build from a stored/raw mapping without validating column letters."""
        extra = {k: str(v) for k, v in raw.items() if k not in REQUIRED_FIELDS}
        return cls(
            supplier_code=str(raw.get("supplierCode", "")),
            description=str(raw.get("description", "")),
            price=str(raw.get("price", "")),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, str]:
        """Mapped fields only; a field without a column is left out."""
        base = {
            "supplierCode": self.supplier_code,
            "description": self.description,
            "price": self.price,
            **self.extra,
        }
        return {k: v for k, v in base.items() if v}

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self.to_dict().items())

    def resolved(self) -> List[Tuple[str, int]]:
        """(field, 0-based column index) pairs in mapping order."""
        return [(name, column_index(col)) for name, col in self.items()]


def validate_column_mapping(raw: Mapping[str, Any] | None) -> ColumnMapping:
    """
    Validate a template mapping as entered by staff.

    Required keys supplierCode/description/price; every value a single
    letter A..Z (lowercase accepted and upper-cased).
    """
    errors: List[Dict[str, Any]] = []
    raw = raw or {}

    for req in REQUIRED_FIELDS:
        if not str(raw.get(req) or "").strip():
            errors.append({"field": req, "code": "required", "message": "Column is required"})

    cleaned: Dict[str, str] = {}
    for name, value in raw.items():
        name = str(name).strip()
        if not name:
            errors.append({"field": name, "code": "invalid", "message": "Empty field name"})
            continue
        col = str(value or "").strip().upper()
        if not col:
            if name not in REQUIRED_FIELDS:
                errors.append({"field": name, "code": "required", "message": "Column is required"})
            continue
        if not _TEMPLATE_COLUMN.match(col):
            errors.append({
                "field": name,
                "code": "format",
                "message": "Column must be a single letter A-Z",
                "value": value,
            })
            continue
        cleaned[name] = col

    if errors:
        raise ValidationError("Incomplete or invalid column mapping", details={"errors": errors})

    return ColumnMapping.from_dict(cleaned)
