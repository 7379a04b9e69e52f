from typing import List, Optional, Union
from pydantic import Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from .camel import CamelModel

class NormalizedRow(CamelModel):
    """One parsed price-list row; extra mapped fields are kept as-is."""
    supplier_code: str = ""
    description: str = ""
    price: Union[str, float, int, None] = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    @field_validator("supplier_code", "description", mode="before")
    @classmethod
    def _as_text(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

class PriceUpdateAnalyzeRequest(CamelModel):
    """Body of POST /price-updates/analyze."""
    supplier_id: int
    template_id: int
    file_name: Optional[str] = Field(None, max_length=255)
    data: List[NormalizedRow] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "supplierId": 1,
                "templateId": 3,
                "fileName": "acme_2026_10.xlsx",
                "data": [
                    {"supplierCode": "A1", "description": "Martillo 500g", "price": "100"},
                    {"supplierCode": "B2", "description": "Pinza", "price": "50"},
                ],
            }
        },
    )

class PriceUpdateApplyRequest(CamelModel):
    """Optional body of POST /price-updates/{logId}/apply."""
    applied_by: Optional[str] = Field(None, max_length=120)
