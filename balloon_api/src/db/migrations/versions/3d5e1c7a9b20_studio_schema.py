"""Studio schema.

- users
- clients
- designs
- inventory (unique color/size)
- accessories, design_accessories
- production
- orders, order_items
- payments

Types are portable between PostgreSQL and SQLite; JSON columns become JSONB on PostgreSQL.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "3d5e1c7a9b20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

NOW = sa.func.now()
JSON = sa.JSON().with_variant(JSONB(), "postgresql")
ENUM = sa.String(32)


def _timestamps(created: bool = True, updated: bool = True) -> list:
    cols = []
    if created:
        cols.append(sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False))
    if updated:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False))
    return cols


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("hashed_password", sa.Text(), nullable=False),
        sa.Column("role", ENUM, nullable=False, server_default="designer"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("event_type", sa.Text(), nullable=True),
        sa.Column("budget", sa.Text(), nullable=True),
        sa.Column("theme", sa.Text(), nullable=True),
        sa.Column("colors", sa.Text(), nullable=True),
        sa.Column("inspiration", sa.Text(), nullable=True),
        sa.Column("birthdate", sa.Text(), nullable=True),
        sa.Column("can_text", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("crm_synced", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("crm_id", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_clients"),
    )

    op.create_table(
        "designs",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=True),
        sa.Column("client_name", sa.Text(), nullable=False),
        sa.Column("project_name", sa.Text(), nullable=False),
        sa.Column("event_type", sa.Text(), nullable=False),
        sa.Column("event_date", sa.Text(), nullable=True),
        sa.Column("dimensions", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("background_url", sa.Text(), nullable=True),
        sa.Column("elements", JSON, nullable=False),
        sa.Column("measurements", JSON, nullable=False),
        sa.Column("scale", sa.Float(), nullable=False),
        sa.Column("color_analysis", JSON, nullable=False),
        sa.Column("material_requirements", JSON, nullable=False),
        sa.Column("total_balloons", sa.Integer(), nullable=False),
        sa.Column("estimated_clusters", sa.Integer(), nullable=False),
        sa.Column("production_time", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_designs"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_designs_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], name="fk_designs_client_id_clients", ondelete="SET NULL"),
    )
    op.create_index("ix_designs_user_id", "designs", ["user_id"])

    op.create_table(
        "inventory",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("color", ENUM, nullable=False),
        sa.Column("size", ENUM, nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("threshold", sa.Integer(), nullable=False),
        sa.Column("status", ENUM, nullable=False),
        *_timestamps(created=False),
        sa.PrimaryKeyConstraint("id", name="pk_inventory"),
        sa.UniqueConstraint("color", "size", name="uq_inventory_color_size"),
        sa.CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        sa.CheckConstraint("threshold >= 0", name="ck_inventory_threshold_non_negative"),
    )

    op.create_table(
        "accessories",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("threshold", sa.Integer(), nullable=False),
        sa.Column("status", ENUM, nullable=False),
        *_timestamps(created=False),
        sa.PrimaryKeyConstraint("id", name="pk_accessories"),
        sa.CheckConstraint("quantity >= 0", name="ck_accessories_quantity_non_negative"),
    )

    op.create_table(
        "design_accessories",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("design_id", sa.Integer(), nullable=False),
        sa.Column("accessory_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id", name="pk_design_accessories"),
        sa.ForeignKeyConstraint(
            ["design_id"], ["designs.id"], name="fk_design_accessories_design_id_designs", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["accessory_id"], ["accessories.id"],
            name="fk_design_accessories_accessory_id_accessories", ondelete="CASCADE",
        ),
        sa.UniqueConstraint("design_id", "accessory_id", name="uq_design_accessories_design_accessory"),
        sa.CheckConstraint("quantity >= 1", name="ck_design_accessories_quantity_positive"),
    )
    op.create_index("ix_design_accessories_design_id", "design_accessories", ["design_id"])

    op.create_table(
        "production",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("design_id", sa.Integer(), nullable=False),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completion_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("actual_time", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_production"),
        sa.ForeignKeyConstraint(
            ["design_id"], ["designs.id"], name="fk_production_design_id_designs", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_production_design_id", "production", ["design_id"])

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("design_id", sa.Integer(), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("supplier_name", sa.Text(), nullable=True),
        sa.Column("expected_delivery_date", sa.Date(), nullable=True),
        sa.Column("priority", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("total_quantity", sa.Integer(), nullable=False),
        sa.Column("total_cost", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_orders"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_orders_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["design_id"], ["designs.id"], name="fk_orders_design_id_designs", ondelete="SET NULL"
        ),
    )
    op.create_index("ix_orders_user_id", "orders", ["user_id"])
    op.create_index("ix_orders_design_id", "orders", ["design_id"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("inventory_type", sa.Text(), nullable=False),
        sa.Column("color", sa.Text(), nullable=False),
        sa.Column("size", sa.Text(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Integer(), nullable=False),
        sa.Column("subtotal", sa.Integer(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id", name="pk_order_items"),
        sa.ForeignKeyConstraint(
            ["order_id"], ["orders.id"], name="fk_order_items_order_id_orders", ondelete="CASCADE"
        ),
        sa.CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("reference", sa.Text(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("design_id", sa.Integer(), nullable=True),
        sa.Column("client_name", sa.Text(), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("currency", sa.Text(), nullable=False),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_payments"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_payments_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["design_id"], ["designs.id"], name="fk_payments_design_id_designs", ondelete="SET NULL"
        ),
        sa.UniqueConstraint("reference", name="uq_payments_reference"),
        sa.CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )
    op.create_index("ix_payments_user_id", "payments", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_payments_user_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_order_items_order_id", table_name="order_items")
    op.drop_table("order_items")
    op.drop_index("ix_orders_design_id", table_name="orders")
    op.drop_index("ix_orders_user_id", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_production_design_id", table_name="production")
    op.drop_table("production")
    op.drop_index("ix_design_accessories_design_id", table_name="design_accessories")
    op.drop_table("design_accessories")
    op.drop_table("accessories")
    op.drop_table("inventory")
    op.drop_index("ix_designs_user_id", table_name="designs")
    op.drop_table("designs")
    op.drop_table("clients")
    op.drop_table("users")
