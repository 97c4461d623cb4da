from __future__ import annotations
from typing import Any, AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from captionboard.config import settings

class Base(DeclarativeBase):
    pass

def engine_options(url: str) -> dict[str, Any]:
    # sqlite (tests, local) has no server to drop idle connections
    if url.startswith("sqlite"):
        return {}
    return {"pool_pre_ping": True}

engine = create_async_engine(settings.database_url, echo=settings.sql_echo, **engine_options(settings.database_url))
SessionLocal = async_sessionmaker(engine, expire_on_commit=False)

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
