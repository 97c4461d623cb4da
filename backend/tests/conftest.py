from __future__ import annotations
import os
import uuid
from datetime import datetime, timedelta, timezone

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-0123456789abcdef0123456789")
os.environ.setdefault("PIPELINE_BASE_URL", "https://pipeline.test")

import jwt
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from captionboard.config import settings
from captionboard.db import Base, get_session
from captionboard.main import app
from captionboard.models.caption import Caption, HumorFlavor
from captionboard.models.image import Image
import captionboard.models.vote  # noqa: F401  registers caption_votes


def make_token(user_id: uuid.UUID | str, email: str | None = None, **overrides) -> str:
    """Mint a bearer token the way the identity provider does."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "aud": settings.auth_jwt_audience,
        "role": "authenticated",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=1)).timestamp()),
    }
    if email:
        payload["email"] = email
    payload.update(overrides)
    return jwt.encode(payload, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


def auth_headers(user_id: uuid.UUID | str, email: str | None = None) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory database per test, wired into the app's get_session."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)

    async def _get_session_override():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override
    try:
        yield factory
    finally:
        app.dependency_overrides.pop(get_session, None)
        await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


_BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


async def seed_caption(
    session,
    content: str | None = "caption",
    like_count: int = 0,
    minutes: int = 0,
    humor_flavor_id: int | None = None,
    image_id: uuid.UUID | None = None,
    profile_id: uuid.UUID | None = None,
) -> Caption:
    """Insert a caption created ``minutes`` after a fixed base time."""
    c = Caption(
        content=content,
        like_count=like_count,
        humor_flavor_id=humor_flavor_id,
        image_id=image_id,
        profile_id=profile_id,
        created_datetime_utc=_BASE_TIME + timedelta(minutes=minutes),
    )
    session.add(c)
    await session.commit()
    return c


async def seed_flavor(session, flavor_id: int, slug: str, description: str | None = None) -> HumorFlavor:
    f = HumorFlavor(id=flavor_id, slug=slug, description=description)
    session.add(f)
    await session.commit()
    return f


async def seed_image(session, url: str = "https://cdn.test/a.jpg", is_public: bool = True, minutes: int = 0, **kw) -> Image:
    img = Image(url=url, is_public=is_public, created_datetime_utc=_BASE_TIME + timedelta(minutes=minutes), **kw)
    session.add(img)
    await session.commit()
    return img
