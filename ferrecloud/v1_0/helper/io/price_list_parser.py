from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ferrecloud.core.logger import logger
from .column_mapping import ColumnMapping
from .readers import read_sheet_rows


@dataclass(frozen=True)
class ParseOptions:
    """How to read one supplier's price-list layout."""
    mapping: ColumnMapping
    has_header_row: bool = True
    start_row: int = 1
    sheet_name: Optional[str] = None

    @property
    def start_index(self) -> int:
        # con encabezado se salta una fila más que sin él
        return self.start_row if self.has_header_row else self.start_row - 1


def _is_blank(row: Sequence[str]) -> bool:
    return all(cell == "" for cell in row)


def extract_rows(raw_rows: Sequence[Sequence[str]], opts: ParseOptions) -> List[Dict[str, str]]:
    """Apply a column mapping to a row-major cell grid."""
    columns = opts.mapping.resolved()
    out: List[Dict[str, str]] = []
    for row in raw_rows[max(opts.start_index, 0):]:
        if _is_blank(row):
            continue
        out.append({
            field: (row[idx] if idx < len(row) else "")
            for field, idx in columns
        })
    return out


def parse_price_list(content: bytes, filename: str, opts: ParseOptions) -> List[Dict[str, str]]:
    """
    Read a supplier price list into normalized rows.

    Returns:
        Rows in file order, each holding every mapped field
        (supplierCode, description, price and any extras).

    Raises:
        ParseError: the file cannot be read; nothing partial is returned.
    """
    raw_rows, meta = read_sheet_rows(content, filename, sheet=opts.sheet_name)
    rows = extract_rows(raw_rows, opts)
    logger.info(
        "[PriceListParser] file=%s meta=%s raw_rows=%s parsed_rows=%s",
        filename,
        meta,
        len(raw_rows),
        len(rows),
    )
    return rows
