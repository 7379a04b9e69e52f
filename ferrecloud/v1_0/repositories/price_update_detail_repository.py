from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.v1_0.models import PriceUpdateDetail
from .base_repository import BaseRepository

class PriceUpdateDetailRepository(BaseRepository[PriceUpdateDetail]):
    def __init__(self) -> None:
        super().__init__(PriceUpdateDetail)

    async def insert_details(
        self,
        details: List[PriceUpdateDetail],
        session: AsyncSession,
    ) -> List[PriceUpdateDetail]:
        return await self.add_many(details, session)

    async def list_by_log(
        self,
        log_id: int,
        session: AsyncSession,
        *,
        status: Optional[str] = None,
    ) -> List[PriceUpdateDetail]:
        """
        Details of a log in file order, optionally filtered by status.
        """
        filters = [PriceUpdateDetail.log_id == log_id]
        if status is not None:
            filters.append(PriceUpdateDetail.status == status)
        return await self.list_where(
            session,
            *filters,
            order_by=PriceUpdateDetail.position.asc(),
        )
