"""Database dependencies for FastAPI route handlers.

Route handlers receive the session factory (``SessionFactoryDep``) and hand
it to pipeline services, which open and commit their own sessions per write.
CLI commands use ``contract_service.infra.database`` directly.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from contract_service.infra.database import get_session_factory


def get_db_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency returning the shared session factory.

    Tests override this dependency to point the app at an in-memory database.
    """
    return get_session_factory()


SessionFactoryDep = Annotated[async_sessionmaker[AsyncSession], Depends(get_db_session_factory)]


__all__ = ["SessionFactoryDep", "get_db_session_factory"]
