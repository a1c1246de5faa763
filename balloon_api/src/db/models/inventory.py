from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedAtMixin, IntPkMixin, UpdatedAtMixin
from src.db.models.enums import BalloonColor, BalloonSize, InventoryStatus, enum_column


class InventoryItem(IntPkMixin, UpdatedAtMixin, Base):
    """Stock level of one balloon color in one size."""
    __tablename__ = "inventory"
    __table_args__ = (
        UniqueConstraint("color", "size", name="uq_inventory_color_size"),
        CheckConstraint("quantity >= 0", name="quantity_non_negative"),
        CheckConstraint("threshold >= 0", name="threshold_non_negative"),
    )

    color: Mapped[BalloonColor] = mapped_column(enum_column(BalloonColor, "balloon_color"), nullable=False)
    size: Mapped[BalloonSize] = mapped_column(enum_column(BalloonSize, "balloon_size"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    status: Mapped[InventoryStatus] = mapped_column(
        enum_column(InventoryStatus, "inventory_status"),
        nullable=False,
        default=InventoryStatus.OUT_OF_STOCK,
    )


class Accessory(IntPkMixin, UpdatedAtMixin, Base):
    """Non-balloon supply (ribbon, weights, glue dots, ...)."""
    __tablename__ = "accessories"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="quantity_non_negative"),
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    status: Mapped[InventoryStatus] = mapped_column(
        enum_column(InventoryStatus, "accessory_status"),
        nullable=False,
        default=InventoryStatus.OUT_OF_STOCK,
    )


class DesignAccessory(IntPkMixin, CreatedAtMixin, Base):
    """Accessory quantity attached to a design."""
    __tablename__ = "design_accessories"
    __table_args__ = (
        UniqueConstraint("design_id", "accessory_id", name="uq_design_accessories_design_accessory"),
        CheckConstraint("quantity >= 1", name="quantity_positive"),
    )

    design_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("designs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    accessory_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accessories.id", ondelete="CASCADE"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
