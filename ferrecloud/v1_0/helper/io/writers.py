import csv, io
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, cast
from fastapi import Response

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PRICE_FORMAT = "#,##0.00"

def _attachment(body: bytes | str, media_type: str, filename: str) -> Response:
    return Response(
        body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

def write_csv(rows: Optional[Sequence[Mapping[str, Any]]], headers: List[str], filename: str) -> Response:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=headers, extrasaction="ignore", lineterminator="\n")
    w.writeheader()
    for r in rows or []:
        w.writerow({k: r.get(k, "") for k in headers})
    return _attachment(buf.getvalue(), "text/csv; charset=utf-8", filename)

def write_xlsx(
    rows: Optional[Sequence[Mapping[str, Any]]],
    headers: List[str],
    filename: str,
    sheet_title: str = "export",
    numeric_fields: Iterable[str] = (),
) -> Response:
    """
    One-sheet workbook: header row frozen, numeric columns with two decimals
    and column widths sized to the longest value (10..40 chars).
    """
    import openpyxl
    from openpyxl.styles import Font
    from openpyxl.utils import get_column_letter
    from openpyxl.worksheet.worksheet import Worksheet

    wb = openpyxl.Workbook()
    ws = cast(Worksheet, wb.active)
    ws.title = sheet_title[:31]

    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    ws.freeze_panes = "A2"

    widths: Dict[str, int] = {h: len(h) for h in headers}
    for r in rows or []:
        values = [r.get(h, "") for h in headers]
        ws.append(values)
        for h, v in zip(headers, values):
            widths[h] = max(widths[h], len(str(v)))

    numeric = set(numeric_fields)
    for i, h in enumerate(headers, 1):
        letter = get_column_letter(i)
        ws.column_dimensions[letter].width = max(10, min(40, widths[h] + 2))
        if h in numeric:
            for (cell,) in ws.iter_rows(min_row=2, min_col=i, max_col=i):
                cell.number_format = PRICE_FORMAT

    bio = io.BytesIO()
    wb.save(bio)
    return _attachment(bio.getvalue(), XLSX_MEDIA_TYPE, filename)
