from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedAtMixin, IntPkMixin, TimestampMixin
from src.db.models.enums import OrderStatus, enum_column


class Order(IntPkMixin, TimestampMixin, Base):
    """Supplier order header. Totals are kept in sync with its items."""
    __tablename__ = "orders"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    design_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("designs.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status: Mapped[OrderStatus] = mapped_column(
        enum_column(OrderStatus, "order_status"), nullable=False, default=OrderStatus.PENDING
    )
    supplier_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    expected_delivery_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    priority: Mapped[str] = mapped_column(Text, nullable=False, default="normal")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    total_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # cents


class OrderItem(IntPkMixin, CreatedAtMixin, Base):
    """Line of a supplier order; prices in cents."""
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="quantity_positive"),
    )

    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    inventory_type: Mapped[str] = mapped_column(Text, nullable=False, default="balloon")
    color: Mapped[str] = mapped_column(Text, nullable=False)
    size: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    subtotal: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
