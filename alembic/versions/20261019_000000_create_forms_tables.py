"""Create forms tables

Revision ID: create_forms_tables
Revises:
Create Date: 2026-10-19

Creates the forms table (layout stored as JSON text in content) and the
form_submissions table holding submitted values.
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "create_forms_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "forms",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()"), nullable=False),
        sa.Column("published", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column("visits", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("submissions", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("share_url", sa.String(36), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("share_url"),
        sa.UniqueConstraint("name", "user_id", name="uq_forms_name_user_id"),
    )
    op.create_index("ix_forms_user_id", "forms", ["user_id"])

    op.create_table(
        "form_submissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()"), nullable=False),
        sa.Column("form_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["form_id"], ["forms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_form_submissions_form_id", "form_submissions", ["form_id"])


def downgrade() -> None:
    op.drop_index("ix_form_submissions_form_id", table_name="form_submissions")
    op.drop_table("form_submissions")
    op.drop_index("ix_forms_user_id", table_name="forms")
    op.drop_table("forms")
