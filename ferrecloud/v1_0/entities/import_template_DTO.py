from datetime import datetime
from typing import Dict, Optional

from ferrecloud.v1_0.schemas.camel import CamelModel

class ImportTemplateDTO(CamelModel):
    id: int
    supplier_id: int
    name: str
    column_mapping: Dict[str, str]
    has_header_row: bool
    start_row: int
    sheet_name: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
