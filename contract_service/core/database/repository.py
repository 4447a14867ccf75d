"""Generic async repository over one mapped class.

Repositories take the session as an argument and never commit; whoever
opened the session decides when the unit of work ends. Feature repositories
subclass ``BaseRepository`` and add their own queries.

Example:
    class WorkflowRepository(BaseRepository[Workflow]):
        async def get_active(self, session: AsyncSession, workflow_id: UUID) -> Workflow | None:
            stmt = select(Workflow).where(Workflow.id == workflow_id, Workflow.is_active.is_(True))
            return (await session.execute(stmt)).scalar_one_or_none()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from contract_service.core.database.exceptions import NotFoundError
from contract_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Primary-key reads and inserts shared by all repositories."""

    __slots__ = ("_lazy", "_logger", "model")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        name = f"repository.{model.__name__}"
        self._logger = logging.getLogger(name)
        self._lazy = get_lazy_logger(name)

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Row with primary key ``id``, or None."""
        instance = await session.get(self.model, id)
        self._lazy.debug(lambda: f"get {self.model.__name__} {id}: {'hit' if instance else 'miss'}")
        return instance

    async def get_or_raise(self, session: AsyncSession, id: Any) -> T:  # noqa: A002
        """Like ``get`` but a missing row raises NotFoundError."""
        instance = await self.get(session, id)
        if instance is not None:
            return instance

        self._logger.info(
            "Row missing",
            extra={"model": self.model.__name__, "id": str(id), "operation": "repository.get_or_raise"},
        )
        raise NotFoundError(self.model.__name__, id=id)

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Add, flush and refresh so defaults and the generated id are populated."""
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        self._lazy.debug(lambda: f"created {self.model.__name__} {getattr(instance, 'id', None)}")
        return instance

    async def create_many(self, session: AsyncSession, instances: Iterable[T]) -> Sequence[T]:
        batch = list(instances)
        session.add_all(batch)
        await session.flush()
        for instance in batch:
            await session.refresh(instance)
        self._lazy.debug(lambda: f"created {len(batch)} {self.model.__name__} rows")
        return batch


__all__ = ["BaseRepository"]
