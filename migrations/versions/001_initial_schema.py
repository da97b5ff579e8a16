"""Initial schema: bookings table.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── bookings ──────────────────────────────────────────────────────
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("guest_name", sa.String(100), nullable=False),
        sa.Column("start_location", sa.String(255), nullable=False),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("taxi_tier", sa.String(50), nullable=False),
        sa.Column("total_price", sa.Float, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_bookings_created_at", "bookings", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_bookings_created_at", table_name="bookings")
    op.drop_table("bookings")
