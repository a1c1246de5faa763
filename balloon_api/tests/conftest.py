"""
Shared fixtures.

Each test gets its own SQLite file. Tables are created from the ORM metadata
with a sync engine, and the app's session dependency is overridden with an
aiosqlite session on the same file.
"""
from __future__ import annotations

import os

os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("AUTO_SEED", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("CRM_PROVIDER", "")

from typing import AsyncGenerator, Callable, Dict  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from src.api.main import app  # noqa: E402
from src.core.security import create_access_token, get_password_hash  # noqa: E402
from src.db.base import Base  # noqa: E402
from src.db.models import InventoryItem, User  # noqa: E402
from src.db.models.enums import BalloonColor, BalloonSize, UserRole  # noqa: E402
from src.db.session import get_async_session, make_session_maker  # noqa: E402
from src.services.crm import CRMService, get_crm_service  # noqa: E402
from src.services.inventory_status import calculate_inventory_status  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "studio.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def sync_session(db_path):
    """Sync session on the test database for arranging data directly."""
    engine = create_engine(f"sqlite:///{db_path}")
    with Session(engine, expire_on_commit=False) as session:
        yield session
    engine.dispose()


@pytest.fixture
def client(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    maker = make_session_maker(engine)

    async def _session_override() -> AsyncGenerator[AsyncSession, None]:
        async with maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _session_override
    app.dependency_overrides[get_crm_service] = lambda: CRMService(provider=None)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(sync_session) -> Callable[..., User]:
    def _make(username: str = "designer", role: UserRole = UserRole.DESIGNER, password: str = "secret123",
              is_active: bool = True) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            full_name=username.title(),
            hashed_password=get_password_hash(password),
            role=role,
            is_active=is_active,
        )
        sync_session.add(user)
        sync_session.commit()
        return user

    return _make


def auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token(subject=str(user.id), role=UserRole(user.role).value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def designer(make_user):
    user = make_user("designer")
    return user, auth_headers(user)


@pytest.fixture
def admin(make_user):
    user = make_user("admin", role=UserRole.ADMIN)
    return user, auth_headers(user)


@pytest.fixture
def manager(make_user):
    user = make_user("stock", role=UserRole.INVENTORY_MANAGER)
    return user, auth_headers(user)


@pytest.fixture
def stock(sync_session) -> Callable[..., InventoryItem]:
    """Insert an inventory line with a derived status."""

    def _stock(color: str, size: str, quantity: int, threshold: int = 20) -> InventoryItem:
        item = InventoryItem(
            color=BalloonColor(color),
            size=BalloonSize(size),
            quantity=quantity,
            threshold=threshold,
            status=calculate_inventory_status(quantity, threshold),
        )
        sync_session.add(item)
        sync_session.commit()
        return item

    return _stock


def cluster(*colors: str, template: str = "classic") -> dict:
    """A balloon-cluster canvas element."""
    return {
        "id": "el-" + "-".join(colors),
        "type": "balloon-cluster",
        "x": 10,
        "y": 20,
        "width": 100,
        "height": 100,
        "rotation": 0,
        "colors": list(colors),
        "template": template,
    }
