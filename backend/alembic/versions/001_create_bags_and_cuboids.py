"""Create bags and cuboids tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `bags` and `cuboids` with the cuboid -> bag foreign key.
How:   Plain SQLAlchemy types so the same migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create bags, then cuboids (which references bags)."""
    op.create_table(
        "bags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "title",
            sa.String(255),
            nullable=True,
            comment="Optional human-readable label",
        ),
        # Capacity is width * height * depth, computed by the application
        sa.Column("width", sa.Float(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("depth", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "cuboids",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("width", sa.Float(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("depth", sa.Float(), nullable=False),
        sa.Column("bag_id", sa.Integer(), nullable=False, comment="Owning bag"),
        sa.ForeignKeyConstraint(["bag_id"], ["bags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    # Every admission check loads the cuboids of one bag
    op.create_index("idx_cuboids_bag_id", "cuboids", ["bag_id"])


def downgrade() -> None:
    """Drop cuboids, then bags. All data is lost."""
    op.drop_index("idx_cuboids_bag_id", table_name="cuboids")
    op.drop_table("cuboids")
    op.drop_table("bags")
