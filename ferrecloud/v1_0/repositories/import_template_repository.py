from typing import Optional, List, Dict, Any
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.v1_0.models import SupplierImportTemplate, PriceUpdateLog
from .base_repository import BaseRepository

class ImportTemplateRepository(BaseRepository[SupplierImportTemplate]):
    def __init__(self) -> None:
        super().__init__(SupplierImportTemplate)

    async def create_template(
        self,
        data: Dict[str, Any],
        session: AsyncSession
    ) -> SupplierImportTemplate:
        """
        Create a template from already-validated fields and flush to assign PK.
        """
        entity = SupplierImportTemplate(
            supplier_id=data["supplier_id"],
            name=data["name"],
            column_mapping=data["column_mapping"],
            has_header_row=data["has_header_row"],
            start_row=data["start_row"],
            sheet_name=data.get("sheet_name"),
        )
        await self.add(entity, session)
        await session.refresh(entity)
        return entity

    async def get_template_by_id(
        self,
        template_id: int,
        session: AsyncSession
    ) -> Optional[SupplierImportTemplate]:
        return await super().get_by_id(template_id, session)

    async def replace_template(
        self,
        template_id: int,
        data: Dict[str, Any],
        session: AsyncSession
    ) -> Optional[SupplierImportTemplate]:
        """
        Full replacement of the editable fields. The JSON mapping is
        assigned as a new dict so no key of the previous mapping survives.
        """
        entity = await self.get_template_by_id(template_id, session)
        if not entity:
            return None

        entity.name = data["name"]
        entity.column_mapping = dict(data["column_mapping"])
        entity.has_header_row = data["has_header_row"]
        entity.start_row = data["start_row"]
        entity.sheet_name = data.get("sheet_name")

        await self.update(entity, session)
        await session.refresh(entity)
        return entity

    async def delete_template(
        self,
        template_id: int,
        session: AsyncSession
    ) -> bool:
        entity = await self.get_template_by_id(template_id, session)
        if not entity:
            return False
        # el historial conserva el log sin plantilla
        await session.execute(
            update(PriceUpdateLog)
            .where(PriceUpdateLog.template_id == template_id)
            .values(template_id=None)
        )
        await self.delete(entity, session)
        return True

    async def list_by_supplier(
        self,
        supplier_id: int,
        session: AsyncSession
    ) -> List[SupplierImportTemplate]:
        """
        Templates of one supplier in insertion order.
        """
        return await self.list_where(
            session,
            SupplierImportTemplate.supplier_id == supplier_id,
            order_by=SupplierImportTemplate.id.asc(),
        )
