from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.core.errors import NotFoundError
from ferrecloud.core.logger import logger
from ferrecloud.utils.tx import maybe_begin
from ferrecloud.v1_0.models import Supplier
from ferrecloud.v1_0.repositories import SupplierRepository
from ferrecloud.v1_0.entities import SupplierDTO

def to_supplier_dto(s: Supplier) -> SupplierDTO:
    return SupplierDTO(
        id=s.id,
        name=s.name,
        tax_id=s.tax_id,
        email=s.email,
        phone=s.phone,
        city=s.city,
        is_active=s.is_active,
    )

class SupplierService:
    def __init__(self, supplier_repository: SupplierRepository) -> None:
        self.supplier_repository = supplier_repository

    async def require(
        self,
        supplier_id: int,
        db: AsyncSession,
    ) -> Supplier:
        """
        Ensure that a supplier exists or raise NotFoundError.

        Args:
            supplier_id: Identifier of the supplier to fetch.
            db: Active async database session.

        Returns:
            ORM supplier entity if found.

        Raises:
            NotFoundError: If the supplier does not exist.
        """
        s = await self.supplier_repository.get_supplier_by_id(supplier_id, db)
        if not s:
            raise NotFoundError("Supplier", supplier_id)
        return s

    async def get(
        self,
        supplier_id: int,
        db: AsyncSession,
    ) -> SupplierDTO:
        logger.debug("[SupplierService] Get supplier ID=%s", supplier_id)
        async with maybe_begin(db):
            s = await self.require(supplier_id, db)
            return to_supplier_dto(s)

    async def list_all(
        self,
        db: AsyncSession,
    ) -> List[SupplierDTO]:
        """
        List all suppliers ordered by name, without pagination.
        """
        logger.debug("[SupplierService] List all suppliers")
        async with maybe_begin(db):
            rows = await self.supplier_repository.list_suppliers(db)
            return [to_supplier_dto(s) for s in rows]
