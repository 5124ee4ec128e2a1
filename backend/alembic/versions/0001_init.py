"""init

Revision ID: 0001_init
Revises:
Create Date: 2024-06-03 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "jurisprudence",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("radicado", sa.String(), nullable=False),
        sa.Column("sentencia_id", sa.String(), nullable=True),
        sa.Column("ddp_number", sa.String(), nullable=True),
        sa.Column("tema", sa.String(), nullable=True),
        sa.Column("tesis", sa.Text(), nullable=True),
        sa.Column("source_url", sa.String(), nullable=True),
        sa.Column("source_type", sa.String(), nullable=False, server_default="bulletin"),
        sa.Column("analysis_level", sa.String(), nullable=False, server_default="basic"),
        sa.Column("uploaded_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_jurisprudence_radicado", "jurisprudence", ["radicado"], unique=True)

    op.create_table(
        "saved_documents",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("doc_type", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("saved_documents")
    op.drop_index("ix_jurisprudence_radicado", table_name="jurisprudence")
    op.drop_table("jurisprudence")
