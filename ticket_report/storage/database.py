from typing import Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from ticket_report.config import settings
from ticket_report.storage.models import Base
import logging

logger = logging.getLogger(__name__)

# Convert sync URL to async if needed
def get_async_url(url: str) -> str:
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    elif url.startswith("mysql://"):
        return url.replace("mysql://", "mysql+aiomysql://")
    elif url.startswith("mysql+pymysql://"):
        return url.replace("mysql+pymysql://", "mysql+aiomysql://")
    return url


def create_engine_for(url: str) -> AsyncEngine:
    """Async engine for *url*; an in-memory sqlite database keeps a single connection"""
    async_url = get_async_url(url)
    if async_url.endswith(":memory:"):
        return create_async_engine(async_url, poolclass=StaticPool)
    return create_async_engine(async_url, echo=False, pool_pre_ping=True)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = create_engine_for(settings.DATABASE_URL)
AsyncSessionLocal = create_session_factory(engine)


async def init_db(bind: Optional[AsyncEngine] = None):
    """Create missing ticket tables"""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


def get_db() -> AsyncSession:
    """Read session for report generation (use as ``async with``)"""
    return AsyncSessionLocal()
