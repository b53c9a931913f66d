"""Create profile tables.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

Tables: profile, skills, work_experience, education
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        UUID,
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Create profile tables."""
    op.create_table(
        "profile",
        _id_column(),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("bio", JSONB, nullable=False, server_default="[]"),
        sa.Column("profile_image_url", sa.Text),
        _created_at_column(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )

    op.create_table(
        "skills",
        _id_column(),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("category", sa.Text),
        sa.Column("order", sa.Integer, nullable=False, server_default="0"),
        _created_at_column(),
    )
    op.create_index("idx_skills_order", "skills", ["order"])

    op.create_table(
        "work_experience",
        _id_column(),
        sa.Column("company_name", sa.Text, nullable=False),
        sa.Column("company_logo_url", sa.Text),
        sa.Column("position", sa.Text, nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date),
        sa.Column("is_current", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("order", sa.Integer, nullable=False, server_default="0"),
        _created_at_column(),
    )
    op.create_index("idx_work_experience_order", "work_experience", ["order"])

    op.create_table(
        "education",
        _id_column(),
        sa.Column("institution_name", sa.Text, nullable=False),
        sa.Column("institution_logo_url", sa.Text),
        sa.Column("degree", sa.Text, nullable=False),
        sa.Column("field", sa.Text),
        sa.Column("description", sa.Text),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date),
        sa.Column("order", sa.Integer, nullable=False, server_default="0"),
        _created_at_column(),
    )
    op.create_index("idx_education_order", "education", ["order"])


def downgrade() -> None:
    """Drop profile tables."""
    op.drop_index("idx_education_order", table_name="education")
    op.drop_table("education")
    op.drop_index("idx_work_experience_order", table_name="work_experience")
    op.drop_table("work_experience")
    op.drop_index("idx_skills_order", table_name="skills")
    op.drop_table("skills")
    op.drop_table("profile")
