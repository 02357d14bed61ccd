"""
SQLAlchemy Repository Base

Shared plumbing for repositories backed by the store context: session
checkout and translation of driver errors into the application taxonomy.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from content_store.common.errors import BackendError, BackendUnavailable
from content_store.db.capabilities import StoreCapabilities
from content_store.db.context import StoreContext

# Connection-level failures; everything else from the driver is a rejected statement
_UNAVAILABLE_ERRORS = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    OSError,
    asyncio.TimeoutError,
)


@asynccontextmanager
async def translate_backend_errors(operation: str) -> AsyncIterator[None]:
    """
    Map driver exceptions to ``BackendUnavailable`` / ``BackendError``

    Args:
        operation: Name used in the error details
    """
    try:
        yield
    except _UNAVAILABLE_ERRORS as e:
        raise BackendUnavailable(
            message=f"Storage backend unavailable during {operation}",
            details={"operation": operation, "reason": str(e)},
        ) from e
    except SQLAlchemyError as e:
        raise BackendError(
            message=f"Storage backend rejected {operation}",
            details={"operation": operation, "reason": str(e)},
        ) from e


class SQLAlchemyRepository:
    """
    Base class for context-bound repositories

    Every call checks out its own session, so concurrent operations run on
    separate pooled connections and the connection is returned on every
    exit path.
    """

    def __init__(self, context: StoreContext):
        """
        Initialize Repository

        Args:
            context: Store context shared by the process
        """
        self.context = context

    async def _capabilities(self) -> StoreCapabilities:
        return await self.context.capabilities.get()

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with translate_backend_errors(operation):
            async with self.context.session_factory() as session:
                yield session
