"""
Store Context

One ``StoreContext`` is built at process start and handed to every
repository. It owns the engine (and so the connection pool), the session
factory, the fixed storage owner and the negotiated schema capabilities.
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from content_store.config import Settings
from content_store.db.capabilities import CapabilityCache, StoreCapabilities
from content_store.db.session import create_engine, create_session_factory


@dataclass
class StoreContext:
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    owner_id: str
    capabilities: CapabilityCache = field(init=False)

    def __post_init__(self) -> None:
        self.capabilities = CapabilityCache(self.engine)

    @classmethod
    def from_engine(cls, engine: AsyncEngine, owner_id: str) -> "StoreContext":
        return cls(
            engine=engine,
            session_factory=create_session_factory(engine),
            owner_id=owner_id,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "StoreContext":
        return cls.from_engine(create_engine(settings), settings.STORE_OWNER_ID)

    async def negotiate(self) -> StoreCapabilities:
        """Resolve schema capabilities now instead of on first use."""
        return await self.capabilities.get()

    async def dispose(self) -> None:
        await self.engine.dispose()
