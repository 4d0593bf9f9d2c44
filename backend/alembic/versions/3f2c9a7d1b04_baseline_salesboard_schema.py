"""baseline salesboard schema

Revision ID: 3f2c9a7d1b04
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f2c9a7d1b04"
down_revision = None
branch_labels = None
depends_on = None


def _record_columns() -> list:
    """Columns every logged record shares."""
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=8), nullable=False),
        sa.Column("profile_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _record_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_date", table, ["date"])
    op.create_index(f"ix_{table}_profile_id", table, ["profile_id"])
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("avatar", sa.String(length=1024), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("meeting_count", sa.Integer(), nullable=False),
        sa.Column("offer_count", sa.Integer(), nullable=False),
        sa.Column("sale_count", sa.Integer(), nullable=False),
        sa.Column("booking_count", sa.Integer(), nullable=False),
        sa.Column("meeting_goal", sa.Integer(), nullable=False),
        sa.Column("offer_goal", sa.Integer(), nullable=False),
        sa.Column("sale_goal", sa.Integer(), nullable=False),
        sa.Column("booking_goal", sa.Integer(), nullable=False),
        sa.Column("magic_code", sa.String(length=64), nullable=True),
        sa.Column("magic_code_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profiles_email", "profiles", ["email"], unique=True)

    op.create_table(
        "services",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("provision", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    for table in ("meetings", "bookings"):
        op.create_table(
            table,
            *_record_columns(),
            sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="RESTRICT"),
            sa.PrimaryKeyConstraint("id"),
        )
        _record_indexes(table)

    op.create_table(
        "offers",
        *_record_columns(),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.CheckConstraint("amount >= 1 AND amount <= 5", name="ck_offers_amount_range"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    _record_indexes("offers")

    op.create_table(
        "sales",
        *_record_columns(),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("revenue", sa.Integer(), nullable=False),
        sa.Column("invoice", sa.String(length=64), nullable=False),
        sa.Column("customer", sa.String(length=20), nullable=True),
        sa.CheckConstraint("amount >= 1 AND amount <= 5", name="ck_sales_amount_range"),
        sa.CheckConstraint("revenue >= 0", name="ck_sales_revenue_non_negative"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    _record_indexes("sales")
    op.create_index("ix_sales_revenue", "sales", ["revenue"])

    op.create_table(
        "sale_services",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("sale_id", sa.Uuid(), nullable=False),
        sa.Column("service_id", sa.Uuid(), nullable=False),
        sa.Column("subscription", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["sale_id"], ["sales.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sale_services_sale_id", "sale_services", ["sale_id"])
    op.create_index("ix_sale_services_service_id", "sale_services", ["service_id"])


def downgrade() -> None:
    op.drop_index("ix_sale_services_service_id", table_name="sale_services")
    op.drop_index("ix_sale_services_sale_id", table_name="sale_services")
    op.drop_table("sale_services")

    op.drop_index("ix_sales_revenue", table_name="sales")
    for table in ("sales", "offers", "bookings", "meetings"):
        op.drop_index(f"ix_{table}_created_at", table_name=table)
        op.drop_index(f"ix_{table}_profile_id", table_name=table)
        op.drop_index(f"ix_{table}_date", table_name=table)
        op.drop_table(table)

    op.drop_table("services")

    op.drop_index("ix_profiles_email", table_name="profiles")
    op.drop_table("profiles")
