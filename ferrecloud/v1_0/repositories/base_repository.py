from typing import Any, Iterable, Optional, Sequence, Tuple, Type, TypeVar, Generic, Protocol, runtime_checkable
from sqlalchemy import Select, select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

# --- los modelos deben exponer .id ---
@runtime_checkable
class HasId(Protocol):
    id: Any  # columna PK

ModelT = TypeVar("ModelT", bound=HasId)


class BaseRepository(Generic[ModelT]):
    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def add(self, entity: ModelT, session: AsyncSession) -> ModelT:
        session.add(entity)
        try:
            await session.flush([entity])
        except IntegrityError:
            await session.rollback()
            raise
        return entity

    async def add_many(self, entities: Iterable[ModelT], session: AsyncSession) -> list[ModelT]:
        items = list(entities)
        session.add_all(items)
        await session.flush()
        return items

    async def get_by_id(
        self,
        id_: Any,
        session: AsyncSession,
        *,
        options: Sequence[Any] | None = None,
        for_update: bool = False,
    ) -> Optional[ModelT]:
        stmt: Select = select(self.model).where(self.model.id == id_)
        if for_update:
            stmt = stmt.with_for_update()
        if options:
            stmt = stmt.options(*options)
        res = await session.execute(stmt)
        return res.scalars().first()

    async def list_where(
        self,
        session: AsyncSession,
        *filters: ColumnElement[bool],
        order_by: Any | None = None,
        options: Sequence[Any] | None = None,
    ) -> list[ModelT]:
        if order_by is None:
            order_by = self.model.id.asc()
        stmt: Select = select(self.model).where(*filters).order_by(order_by)
        if options:
            stmt = stmt.options(*options)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def list_page(
        self,
        session: AsyncSession,
        offset: int,
        limit: int,
        *filters: ColumnElement[bool],
        order_by: Any | None = None,
        options: Sequence[Any] | None = None,
        fresh: bool = False,
    ) -> Tuple[list[ModelT], int]:
        if order_by is None:
            order_by = self.model.id.desc()

        page_q: Select = select(self.model).where(*filters).order_by(order_by).offset(offset).limit(limit)
        if options:
            page_q = page_q.options(*options)
        if fresh:
            page_q = page_q.execution_options(populate_existing=True)

        items = list((await session.execute(page_q)).scalars().all())
        total = int(await session.scalar(select(func.count(self.model.id)).where(*filters)) or 0)
        return items, total

    async def update(self, entity: ModelT, session: AsyncSession) -> ModelT:
        await session.flush([entity])
        return entity

    async def delete(self, entity: ModelT, session: AsyncSession) -> None:
        await session.delete(entity)
        await session.flush()
