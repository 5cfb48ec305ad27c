"""Initial database schema: calculations, locks and metrics."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20240201_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "calculations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("session_id", sa.String(length=256), nullable=False),
        sa.Column("annual_salary", sa.Numeric(), nullable=False),
        sa.Column("year1_estimated_nic", sa.Numeric(), nullable=False),
        sa.Column("year2_estimated_nic", sa.Numeric(), nullable=False),
        sa.Column("rounded_saving", sa.Numeric(), nullable=False),
        sa.Column("saving", sa.Numeric()),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("timestampIdx", "calculations", ["timestamp"], unique=False)

    op.create_table(
        "locks",
        sa.Column("id", sa.String(length=128), primary_key=True),
        sa.Column("owner", sa.String(length=128), nullable=False),
        sa.Column("time_created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expiry_time", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "metrics",
        sa.Column("name", sa.String(length=128), primary_key=True),
        sa.Column("count", sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("metrics")
    op.drop_table("locks")
    op.drop_index("timestampIdx", table_name="calculations")
    op.drop_table("calculations")
