import io, csv
from typing import List, Dict, Tuple, Optional
import pandas as pd

from ferrecloud.core.errors import ParseError
from .normalizers import cell_text

SUPPORTED_EXTENSIONS = {"csv", "xlsx", "xls"}

def file_extension(name: str) -> str:
    return name.rsplit(".", 1)[-1].lower() if name and "." in name else ""

def _decode(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")

def read_csv_rows(content: bytes, delimiter: Optional[str] = None) -> Tuple[List[List[str]], Dict]:
    text = _decode(content)
    if delimiter is None:
        try:
            sniff = csv.Sniffer().sniff(text[:4096], delimiters=",;\t|")
            sep = sniff.delimiter
        except Exception:
            sep = ","
    else:
        sep = "\t" if delimiter == "tab" else delimiter

    width = max((len(r) for r in csv.reader(io.StringIO(text), delimiter=sep)), default=0)
    if width == 0:
        return [], {"delimiter": sep, "rows": 0}

    df = pd.read_csv(
        io.StringIO(text),
        sep=sep,
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
        engine="python",
    )
    rows = [[cell_text(c) for c in r] for r in df.itertuples(index=False, name=None)]
    return rows, {"delimiter": sep, "rows": len(rows)}

def read_excel_rows(content: bytes, sheet: Optional[str] = None, engine: str = "openpyxl") -> Tuple[List[List[str]], Dict]:
    bio = io.BytesIO(content)
    with pd.ExcelFile(bio, engine=engine) as xl:
        if sheet:
            if sheet not in xl.sheet_names:
                raise ParseError(
                    f"Sheet '{sheet}' not found",
                    details={"sheet": sheet, "available": list(xl.sheet_names)},
                )
            target = sheet
        else:
            target = xl.sheet_names[0]
        df = xl.parse(sheet_name=target, header=None, dtype=str)
    df = df.fillna("")
    rows = [[cell_text(c) for c in r] for r in df.itertuples(index=False, name=None)]
    return rows, {"sheet": target, "rows": len(rows)}

def read_sheet_rows(content: bytes, filename: str, sheet: Optional[str] = None) -> Tuple[List[List[str]], Dict]:
    """
    Row-major cell grid of the first (or named) sheet of a price list.

    Raises:
        ParseError: unsupported extension or unreadable content.
    """
    ext = file_extension(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise ParseError("Unsupported file type; use .xlsx, .xls or .csv", details={"extension": ext})
    try:
        if ext == "csv":
            return read_csv_rows(content)
        return read_excel_rows(content, sheet=sheet, engine="xlrd" if ext == "xls" else "openpyxl")
    except ParseError:
        raise
    except Exception as e:
        raise ParseError(details={"file": filename, "reason": e.__class__.__name__}) from e
