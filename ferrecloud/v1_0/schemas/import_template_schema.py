from typing import Dict, Optional
from pydantic import Field, ConfigDict
from pydantic.alias_generators import to_camel

from .camel import CamelModel

class ImportTemplateCreate(CamelModel):
    """Input schema to create a supplier import template."""
    supplier_id: int = Field(..., ge=1)
    name: str = Field(..., max_length=120)
    column_mapping: Dict[str, str] = Field(
        ...,
        description="Logical field -> spreadsheet column letter",
    )
    has_header_row: bool = True
    start_row: int = 1
    sheet_name: Optional[str] = Field(None, max_length=120)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "supplierId": 1,
                "name": "Lista mensual ACME",
                "columnMapping": {"supplierCode": "A", "description": "B", "price": "C"},
                "hasHeaderRow": True,
                "startRow": 1,
                "sheetName": None,
            }
        },
    )

class ImportTemplateUpdate(CamelModel):
    """Full replacement (PUT) of a template; supplierId in the body is ignored."""
    name: str = Field(..., max_length=120)
    column_mapping: Dict[str, str]
    has_header_row: bool = True
    start_row: int = 1
    sheet_name: Optional[str] = Field(None, max_length=120)
