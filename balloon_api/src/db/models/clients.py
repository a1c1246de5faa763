from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, IntPkMixin, TimestampMixin


class Client(IntPkMixin, TimestampMixin, Base):
    """Client record captured by the intake form, optionally mirrored to a CRM."""
    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    event_type: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    budget: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    theme: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    colors: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    inspiration: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    birthdate: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    can_text: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    crm_synced: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    crm_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
