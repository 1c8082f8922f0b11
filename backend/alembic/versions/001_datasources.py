"""Initial schema — datasources keyed by (project, name).

Revision ID: 001_datasources
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_datasources"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "datasources",
        sa.Column("project", sa.String(75), nullable=False, server_default=""),
        sa.Column("name", sa.String(75), nullable=False),
        sa.Column("plugin_kind", sa.String(100), nullable=False),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("spec", sa.JSON, nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("project", "name"),
    )
    op.create_index("ix_datasources_plugin_kind", "datasources", ["plugin_kind"])


def downgrade() -> None:
    op.drop_index("ix_datasources_plugin_kind", table_name="datasources")
    op.drop_table("datasources")
