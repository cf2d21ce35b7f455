"""
Shared pytest fixtures and configuration.
"""
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock
import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ytmate.main import app
from ytmate.api.dependencies import get_summary_service, get_sync_service
from ytmate.api.auth import current_active_user
from ytmate.core.db import Base
from ytmate.core.limiter import limiter
from ytmate.models.sql import ActionItemModel, User, VideoSummaryModel


@pytest.fixture
def mock_user_id():
    """Generate a mock user UUID."""
    return uuid.uuid4()


@pytest.fixture
def mock_user(mock_user_id):
    """Create a mock User object."""
    user = MagicMock(spec=User)
    user.id = mock_user_id
    user.email = "test@example.com"
    user.is_active = True
    user.is_verified = True
    user.is_superuser = False
    return user


@pytest.fixture
def mock_summary_service():
    """Create a mock SummaryService."""
    return AsyncMock()


@pytest.fixture
def mock_sync_service():
    """Create a mock SyncService."""
    return AsyncMock()


@pytest.fixture
def override_dependencies(mock_user, mock_summary_service, mock_sync_service):
    """Override FastAPI dependencies for testing."""
    async def override_current_active_user():
        return mock_user

    def override_get_summary_service():
        return mock_summary_service

    def override_get_sync_service():
        return mock_sync_service

    app.dependency_overrides[current_active_user] = override_current_active_user
    app.dependency_overrides[get_summary_service] = override_get_summary_service
    app.dependency_overrides[get_sync_service] = override_get_sync_service
    limiter.enabled = False

    yield

    # Clean up
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest_asyncio.fixture
async def db_session():
    """In-memory SQLite session with the full schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def make_summary(mock_user_id):
    """Factory for VideoSummaryModel objects with two action items."""
    def _make(
        summary_id: str = None,
        user_id: uuid.UUID = None,
        title: str = "Portrait Lighting Basics",
        tldr: str = "Lighting matters. Here is how to set it up.",
        category: str = "Tutorial",
        difficulty: str = "Beginner",
        created_at: datetime = None,
        is_synced: bool = False,
        remote_id: str = None,
    ) -> VideoSummaryModel:
        summary_id = summary_id or str(uuid.uuid4()).upper()
        created = created_at or datetime(2026, 1, 1, 12, 0, 0)
        return VideoSummaryModel(
            id=summary_id,
            user_id=user_id or mock_user_id,
            video_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            video_id="dQw4w9WgXcQ",
            video_title=title,
            thumbnail_url="https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
            tldr=tldr,
            difficulty_level=difficulty,
            vibe_category=category,
            user_notes=None,
            created_at=created,
            updated_at=created,
            is_synced=is_synced,
            remote_id=remote_id,
            action_items=[
                ActionItemModel(
                    id=f"{summary_id}-A1",
                    emoji="💡",
                    headline="Place key light at 45 degrees",
                    detail="Flattering shadows add depth.",
                    timestamp_seconds=45,
                    order_index=0,
                ),
                ActionItemModel(
                    id=f"{summary_id}-A2",
                    emoji="🪞",
                    headline="Bounce light with a reflector",
                    detail="A white foam board is enough.",
                    timestamp_seconds=3725,
                    order_index=1,
                ),
            ],
        )

    return _make

