from typing import Generic, List, TypeVar

from ferrecloud.v1_0.schemas.camel import CamelModel

T = TypeVar("T")

class PageDTO(CamelModel, Generic[T]):
    """Generic pagination envelope."""
    items: List[T]
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool
