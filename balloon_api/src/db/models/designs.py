from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, IntPkMixin, JSONType, TimestampMixin


class Design(IntPkMixin, TimestampMixin, Base):
    """Saved balloon-decor project: canvas elements, client metadata and derived materials."""
    __tablename__ = "designs"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True
    )
    client_name: Mapped[str] = mapped_column(Text, nullable=False, default="Anonymous Client")
    project_name: Mapped[str] = mapped_column(Text, nullable=False, default="Untitled Project")
    event_type: Mapped[str] = mapped_column(Text, nullable=False, default="Birthday")
    event_date: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    dimensions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    background_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Canvas state
    elements: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    measurements: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    scale: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    # Derived from elements
    color_analysis: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    material_requirements: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    total_balloons: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    estimated_clusters: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    production_time: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
