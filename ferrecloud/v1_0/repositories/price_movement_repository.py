from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.v1_0.models import PriceMovement
from .base_repository import BaseRepository

class PriceMovementRepository(BaseRepository[PriceMovement]):
    def __init__(self) -> None:
        super().__init__(PriceMovement)

    async def add_movements(
        self,
        movements: List[PriceMovement],
        session: AsyncSession,
    ) -> List[PriceMovement]:
        if not movements:
            return []
        return await self.add_many(movements, session)

    async def list_by_product(
        self,
        product_id: int,
        session: AsyncSession,
    ) -> List[PriceMovement]:
        """
        Audit trail of one product, newest first.
        """
        return await self.list_where(
            session,
            PriceMovement.product_id == product_id,
            order_by=PriceMovement.id.desc(),
        )
