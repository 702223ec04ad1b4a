# src/services/base_service.py
from typing import Any, List, Optional, Sequence, Tuple, Type, TypeVar
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from utils.logger import setup_logger
from utils.pagination import PageParams

ModelType = TypeVar("ModelType")


class BaseService:
    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.logger = setup_logger(f"SERVICE_{model.__name__}")

    async def get(self, db: AsyncSession, id: int) -> Optional[ModelType]:
        """Get a single row by primary key, or None"""
        result = await db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def count(self, db: AsyncSession, query: Select) -> int:
        """Count the rows a select would return"""
        result = await db.execute(select(func.count()).select_from(query.subquery()))
        return result.scalar_one()

    async def paginate(
        self,
        db: AsyncSession,
        query: Select,
        params: PageParams,
        order_by: Sequence[Any] = (),
    ) -> Tuple[List[ModelType], int]:
        """Run one page of ``query`` and the total row count"""
        total = await self.count(db, query)
        page_query = query.order_by(*order_by).offset(params.offset).limit(params.limit)
        result = await db.execute(page_query)
        return list(result.scalars().all()), total

    async def save(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """Commit pending changes on ``db_obj`` and reload server-side columns"""
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def apply_update(
        self, db: AsyncSession, db_obj: ModelType, data: dict
    ) -> ModelType:
        """Set the given attributes and commit"""
        for field, value in data.items():
            setattr(db_obj, field, value)
        db_obj = await self.save(db, db_obj)
        self.logger.info(f"Updated {self.model.__name__} with ID: {db_obj.id}")
        return db_obj

    async def soft_delete(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """Hide a row from listings; it stays reachable by id"""
        db_obj.is_active = False
        db_obj = await self.save(db, db_obj)
        self.logger.info(f"Soft-deleted {self.model.__name__} with ID: {db_obj.id}")
        return db_obj

    async def hard_delete(self, db: AsyncSession, db_obj: ModelType) -> None:
        row_id = db_obj.id
        await db.delete(db_obj)
        await db.commit()
        self.logger.info(f"Deleted {self.model.__name__} with ID: {row_id}")
