from .column_mapping import (
    REQUIRED_FIELDS,
    ColumnMapping,
    column_index,
    validate_column_mapping,
)
from .normalizers import to_float, to_price, cell_text
from .readers import read_sheet_rows, read_csv_rows, read_excel_rows, file_extension, SUPPORTED_EXTENSIONS
from .price_list_parser import ParseOptions, extract_rows, parse_price_list
from .writers import write_csv, write_xlsx
from .export_utils import rows_from_details, DETAIL_FIELDS, NUMERIC_FIELDS, FileFmt
__all__ = [
    "REQUIRED_FIELDS",
    "ColumnMapping",
    "column_index",
    "validate_column_mapping",
    "to_float",
    "to_price",
    "cell_text",
    "read_sheet_rows",
    "read_csv_rows",
    "read_excel_rows",
    "file_extension",
    "SUPPORTED_EXTENSIONS",
    "ParseOptions",
    "extract_rows",
    "parse_price_list",
    "write_csv",
    "write_xlsx",
    "rows_from_details",
    "DETAIL_FIELDS",
    "NUMERIC_FIELDS",
    "FileFmt",
]
