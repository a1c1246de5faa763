from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, IntPkMixin, TimestampMixin
from src.db.models.enums import UserRole, enum_column


class User(IntPkMixin, TimestampMixin, Base):
    """Studio user (designer, inventory manager or admin)."""
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    full_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    hashed_password: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole, "user_role"),
        nullable=False,
        default=UserRole.DESIGNER,
        server_default=UserRole.DESIGNER.value,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
