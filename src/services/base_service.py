# src/services/base_service.py
from typing import Type, TypeVar, List, Optional, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, inspect
from sqlalchemy.exc import SQLAlchemyError
from utils.logger import setup_logger
from utils.exceptions import handle_db_exception

ModelType = TypeVar("ModelType")


class BaseService:
    def __init__(self, model: Type[ModelType], logger_name: Optional[str] = None):
        self.model = model
        self.logger = setup_logger(logger_name or f"SERVICE_{model.__name__}")

    @property
    def primary_key(self):
        return inspect(self.model).primary_key[0]

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """Get a single item by primary key"""
        try:
            result = await db.execute(select(self.model).where(self.primary_key == id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await handle_db_exception(
                db, self.logger, f"fetch {self.model.__name__}", e, id=id
            )

    async def get_multi(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: int = 100,
        order_by: Any = None,
        **filters: Any,
    ) -> List[ModelType]:
        """Get multiple items with pagination and equality filters"""
        try:
            query = select(self.model)
            for column, value in filters.items():
                query = query.where(column_of(self.model, column) == value)

            query = query.order_by(
                order_by if order_by is not None else self.primary_key.desc()
            )
            result = await db.execute(query.offset(skip).limit(limit))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await handle_db_exception(
                db, self.logger, f"list {self.model.__name__}", e, filters=filters
            )

    async def create(
        self,
        db: AsyncSession,
        values: dict,
        conflict_detail: Optional[str] = None,
    ) -> ModelType:
        """Insert one row and commit; duplicate keys raise a conflict"""
        try:
            db_obj = self.model(**values)
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)

            self.logger.info(
                f"Created {self.model.__name__} with ID: "
                f"{getattr(db_obj, self.primary_key.key)}"
            )
            return db_obj
        except SQLAlchemyError as e:
            await handle_db_exception(
                db,
                self.logger,
                f"create {self.model.__name__}",
                e,
                conflict_detail=conflict_detail,
            )


def column_of(model: Any, name: str):
    """Mapped attribute for a filter name; unknown names are programming errors"""
    attribute = getattr(model, name, None)
    if attribute is None:
        raise AttributeError(f"{model.__name__} has no column {name}")
    return attribute
