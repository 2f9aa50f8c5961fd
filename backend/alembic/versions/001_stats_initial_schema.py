"""Stats service initial schema: endpoint hits.

Revision ID: 001_stats
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001_stats"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = ("stats",)
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "endpoint_hits",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("app", sa.String(255), nullable=False),
        sa.Column("uri", sa.String(512), nullable=False),
        sa.Column("ip", sa.String(45), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_endpoint_hits_id", "endpoint_hits", ["id"])
    op.create_index("ix_endpoint_hits_uri_timestamp", "endpoint_hits", ["uri", "timestamp"])


def downgrade() -> None:
    op.drop_table("endpoint_hits")
