"""create clients table

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_ONLY = sa.text("deleted_at IS NULL")


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(15), nullable=True),
        sa.Column("cnpj", sa.String(14), nullable=False),
        sa.Column("cep", sa.String(8), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("number", sa.String(10), nullable=False),
        sa.Column("complement", sa.String(255), nullable=True),
        sa.Column("neighborhood", sa.String(255), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("state", sa.String(2), nullable=False),
        sa.Column("sector", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_clients_name", "clients", ["name"])
    op.create_index("ix_clients_deleted_at", "clients", ["deleted_at"])
    for column in ("email", "phone", "cnpj"):
        op.create_index(
            f"uq_clients_{column}", "clients", [column], unique=True,
            postgresql_where=ACTIVE_ONLY,
        )


def downgrade() -> None:
    for column in ("email", "phone", "cnpj"):
        op.drop_index(f"uq_clients_{column}", table_name="clients")
    op.drop_index("ix_clients_deleted_at", table_name="clients")
    op.drop_index("ix_clients_name", table_name="clients")
    op.drop_table("clients")
