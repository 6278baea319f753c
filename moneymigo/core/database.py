"""
Async engine and session factory for the transactions store
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from moneymigo.config import settings

def build_engine(url: str = None) -> AsyncEngine:
    """One pooled engine per process; requests borrow a connection per query"""
    return create_async_engine(url or settings.DATABASE_URL, echo=settings.SQL_ECHO)

engine = build_engine()
async_session = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

Base = declarative_base()

async def init_db():
    """Create the transactions and payment_types tables if missing"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def close_db():
    await engine.dispose()
