from datetime import datetime
from typing import Optional, List, Tuple, Any

from sqlalchemy import select, update
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.v1_0.models import PriceUpdateLog, PriceUpdateStatus
from .base_repository import BaseRepository

class PriceUpdateLogRepository(BaseRepository[PriceUpdateLog]):
    def __init__(self) -> None:
        super().__init__(PriceUpdateLog)

    async def create_log(
        self,
        entity: PriceUpdateLog,
        session: AsyncSession
    ) -> PriceUpdateLog:
        entity.status = PriceUpdateStatus.PENDING.value
        return await self.add(entity, session)

    async def get_log(
        self,
        log_id: int,
        session: AsyncSession,
        *,
        with_details: bool = False,
    ) -> Optional[PriceUpdateLog]:
        stmt = (
            select(PriceUpdateLog)
            .where(PriceUpdateLog.id == log_id)
            .options(selectinload(PriceUpdateLog.supplier))
            .execution_options(populate_existing=True)
        )
        if with_details:
            stmt = stmt.options(selectinload(PriceUpdateLog.details))
        res = await session.execute(stmt)
        return res.scalars().first()

    async def list_paginated(
        self,
        offset: int,
        limit: int,
        session: AsyncSession,
        *,
        supplier_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[PriceUpdateLog], int]:
        filters: List[Any] = []
        if supplier_id is not None:
            filters.append(PriceUpdateLog.supplier_id == supplier_id)
        if status is not None:
            filters.append(PriceUpdateLog.status == status)
        return await self.list_page(
            session,
            offset,
            limit,
            *filters,
            order_by=PriceUpdateLog.id.desc(),
            options=[selectinload(PriceUpdateLog.supplier)],
            fresh=True,
        )

    async def transition(
        self,
        log_id: int,
        to_status: PriceUpdateStatus,
        session: AsyncSession,
        *,
        applied_by: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> bool:
        """
        Atomic pending -> applied|cancelled.

        A single conditional UPDATE guarded by status = 'pending'; returns
        False when the log is missing or already terminal, so concurrent
        callers cannot both win.
        """
        values: dict[str, Any] = {"status": to_status.value}
        if to_status == PriceUpdateStatus.APPLIED:
            values["applied_at"] = at
            values["applied_by"] = applied_by
        elif to_status == PriceUpdateStatus.CANCELLED:
            values["cancelled_at"] = at

        stmt = (
            update(PriceUpdateLog)
            .where(PriceUpdateLog.id == log_id)
            .where(PriceUpdateLog.status == PriceUpdateStatus.PENDING.value)
            .values(**values)
        )
        res = await session.execute(stmt)
        return (res.rowcount or 0) == 1
