"""Create notes and career_reports tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the two owner-scoped record tables.
How:   UUID primary keys, owner email column, UTC timestamps, and one
       (email, created_at) index per table for "my records, newest first".

Rollback: downgrade() drops both tables (destructive: all data lost).
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
    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Unique identifier"),
        sa.Column(
            "email",
            sa.String(320),
            nullable=False,
            comment="Owner identity (email resolved from the bearer token)",
        ),
        sa.Column("title", sa.String(500), nullable=True, comment="Note title"),
        sa.Column("smart_notes", sa.Text(), nullable=True, comment="Generated study notes body"),
        sa.Column(
            "mcq_json",
            sa.JSON(),
            nullable=True,
            comment="Structured multiple-choice questions",
        ),
        sa.Column("pages", sa.Integer(), nullable=True, comment="Number of source pages"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_email_created_at", "notes", ["email", "created_at"])

    op.create_table(
        "career_reports",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "email",
            sa.String(320),
            nullable=False,
            comment="Owner identity (email resolved from the bearer token)",
        ),
        sa.Column(
            "role",
            sa.String(255),
            nullable=True,
            comment="Target role the report was generated for",
        ),
        sa.Column("report_html", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_career_reports_email_created_at",
        "career_reports",
        ["email", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_career_reports_email_created_at", table_name="career_reports")
    op.drop_table("career_reports")
    op.drop_index("idx_notes_email_created_at", table_name="notes")
    op.drop_table("notes")
