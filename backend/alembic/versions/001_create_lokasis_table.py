"""Create lokasis table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `lokasis` table holding every location record.
How:   24-char hex primary key, three free-text columns with '' defaults and
       a JSON column for the GeoJSON Point.

Rollback: downgrade() drops the table (all location data is lost).
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
    """Create the lokasis table. Column docs live in lokasi/models/location.py."""
    op.create_table(
        "lokasis",
        sa.Column(
            "id",
            sa.CHAR(24),
            nullable=False,
            comment="24-char hex identifier, assigned once at creation",
        ),
        sa.Column("nama", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("kategori", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("deskripsi", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "koordinat",
            sa.JSON(),
            nullable=False,
            comment="GeoJSON Point object",
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("lokasis")
