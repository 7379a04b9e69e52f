from typing import Optional, List, Dict, Any, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.v1_0.models import Product
from .base_repository import BaseRepository

class ProductRepository(BaseRepository[Product]):
    PATCHABLE_FIELDS = {
        "name",
        "description",
        "supplier_code",
        "cost_price",
        "tax_percent",
        "sale_price",
        "is_active",
    }

    def __init__(self) -> None:
        super().__init__(Product)

    async def get_product_by_id(
        self,
        product_id: int,
        session: AsyncSession,
        *,
        for_update: bool = False,
    ) -> Optional[Product]:
        return await super().get_by_id(product_id, session, for_update=for_update)

    async def update_product(
        self,
        product_id: int,
        data: Dict[str, Any],
        session: AsyncSession
    ) -> Optional[Product]:
        """
        Partial update restricted to PATCHABLE_FIELDS; keeps cost_with_tax in sync.
        """
        entity = await self.get_product_by_id(product_id, session)
        if not entity:
            return None

        for k, v in data.items():
            if k in self.PATCHABLE_FIELDS:
                setattr(entity, k, v)
        if "cost_price" in data or "tax_percent" in data:
            entity.recompute_cost_with_tax()

        await self.update(entity, session)
        await session.refresh(entity)
        return entity

    async def map_by_supplier_codes(
        self,
        supplier_id: int,
        codes: Iterable[str],
        session: AsyncSession,
    ) -> Dict[str, Product]:
        """
        Exact supplier_code -> Product for one supplier.

        Active and discontinued products are both returned. When several
        products share a code the lowest id wins.
        """
        wanted = {c for c in codes if c}
        if not wanted:
            return {}
        stmt = (
            select(Product)
            .where(Product.supplier_id == supplier_id)
            .where(Product.supplier_code.in_(wanted))
            .order_by(Product.id.asc())
        )
        out: Dict[str, Product] = {}
        for p in (await session.execute(stmt)).scalars().all():
            out.setdefault(p.supplier_code, p)
        return out

    async def list_by_ids_for_update(
        self,
        product_ids: Iterable[int],
        session: AsyncSession,
    ) -> Dict[int, Product]:
        ids = sorted(set(product_ids))
        if not ids:
            return {}
        stmt = (
            select(Product)
            .where(Product.id.in_(ids))
            .order_by(Product.id.asc())
            .with_for_update()
        )
        return {p.id: p for p in (await session.execute(stmt)).scalars().all()}

    async def set_cost(
        self,
        entity: Product,
        new_cost: float,
        session: AsyncSession,
    ) -> Product:
        entity.cost_price = new_cost
        entity.recompute_cost_with_tax()
        return await self.update(entity, session)

