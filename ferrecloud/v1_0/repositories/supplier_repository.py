from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.v1_0.models import Supplier
from .base_repository import BaseRepository

class SupplierRepository(BaseRepository[Supplier]):
    def __init__(self) -> None:
        super().__init__(Supplier)

    async def get_supplier_by_id(
        self,
        supplier_id: int,
        session: AsyncSession
    ) -> Optional[Supplier]:
        return await super().get_by_id(supplier_id, session)

    async def list_suppliers(
        self,
        session: AsyncSession
    ) -> List[Supplier]:
        """
        Return ALL suppliers ordered by name ASC.
        """
        return await self.list_where(session, order_by=Supplier.name.asc())
