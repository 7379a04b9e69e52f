import math
from typing import Any

def to_float(v: Any) -> float | None:
    if v is None: return None
    if isinstance(v, bool): return None
    if isinstance(v, (int, float)):
        return float(v) if math.isfinite(v) else None
    s = str(v).strip()
    if s == "": return None
    s = s.replace(" ", "").replace("$", "")
    if "," in s and "." in s:
        # 1.234,56 -> 1234.56 ; 1,234.56 -> 1234.56
        if s.rfind(",") > s.rfind("."):
            s = s.replace(".", "").replace(",", ".")
        else:
            s = s.replace(",", "")
    else:
        s = s.replace(",", ".")
    try:
        f = float(s)
    except ValueError:
        return None
    return f if math.isfinite(f) else None

def to_price(v: Any) -> float | None:
    f = to_float(v)
    if f is None or f < 0: return None
    return round(f, 2)

def cell_text(v: Any) -> str:
    """Raw sheet cell as text; missing/NaN cells become ""."""
    if v is None: return ""
    if isinstance(v, float) and math.isnan(v): return ""
    return v if isinstance(v, str) else str(v)
