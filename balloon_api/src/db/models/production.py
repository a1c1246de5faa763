from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, IntPkMixin, TimestampMixin
from src.db.models.enums import ProductionStatus, enum_column


class Production(IntPkMixin, TimestampMixin, Base):
    """Production run of a design; creating one consumes the design's balloons."""
    __tablename__ = "production"

    design_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("designs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[ProductionStatus] = mapped_column(
        enum_column(ProductionStatus, "production_status"),
        nullable=False,
        default=ProductionStatus.PENDING,
    )
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completion_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    actual_time: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
