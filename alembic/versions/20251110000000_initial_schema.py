"""Initial schema: users, profiles, projects, collaborators, impacts, SDGs, app settings.

Revision ID: 20251110000000
Revises:
Create Date: 2025-11-10

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251110000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SDG_ROWS = [
    {"id": 1, "title": "No Poverty"},
    {"id": 2, "title": "Zero Hunger"},
    {"id": 3, "title": "Good Health and Well-being"},
    {"id": 4, "title": "Quality Education"},
    {"id": 5, "title": "Gender Equality"},
    {"id": 6, "title": "Clean Water and Sanitation"},
    {"id": 7, "title": "Affordable and Clean Energy"},
    {"id": 8, "title": "Decent Work and Economic Growth"},
    {"id": 9, "title": "Industry, Innovation and Infrastructure"},
    {"id": 10, "title": "Reduced Inequality"},
    {"id": 11, "title": "Sustainable Cities and Communities"},
    {"id": 12, "title": "Responsible Consumption and Production"},
    {"id": 13, "title": "Climate Action"},
    {"id": 14, "title": "Life Below Water"},
    {"id": 15, "title": "Life on Land"},
    {"id": 16, "title": "Peace, Justice and Strong Institutions"},
    {"id": 17, "title": "Partnerships for the Goals"},
]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="User"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("profile_url", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_profiles_user_id"), "profiles", ["user_id"], unique=True)

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_projects_profile_id"), "projects", ["profile_id"], unique=False)

    op.create_table(
        "project_collaborators",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="Editor"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("project_id", "profile_id", name="uq_project_collaborators_project_profile"),
    )
    op.create_index(op.f("ix_project_collaborators_project_id"), "project_collaborators", ["project_id"], unique=False)
    op.create_index(op.f("ix_project_collaborators_profile_id"), "project_collaborators", ["profile_id"], unique=False)

    sdgs = op.create_table(
        "sdgs",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.bulk_insert(sdgs, SDG_ROWS)

    op.create_table(
        "impacts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("dimension", sa.String(length=32), nullable=False),
        sa.Column("relation", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=2000), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("score BETWEEN 1 AND 10", name="ck_impacts_score_range"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_impacts_project_id"), "impacts", ["project_id"], unique=False)

    op.create_table(
        "impact_sdgs",
        sa.Column("impact_id", sa.Integer(), nullable=False),
        sa.Column("sdg_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["impact_id"], ["impacts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sdg_id"], ["sdgs.id"]),
        sa.PrimaryKeyConstraint("impact_id", "sdg_id"),
    )

    op.create_table(
        "app_settings",
        sa.Column("key", sa.String(length=128), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )


def downgrade() -> None:
    op.drop_table("app_settings")
    op.drop_table("impact_sdgs")
    op.drop_index(op.f("ix_impacts_project_id"), table_name="impacts")
    op.drop_table("impacts")
    op.drop_table("sdgs")
    op.drop_index(op.f("ix_project_collaborators_profile_id"), table_name="project_collaborators")
    op.drop_index(op.f("ix_project_collaborators_project_id"), table_name="project_collaborators")
    op.drop_table("project_collaborators")
    op.drop_index(op.f("ix_projects_profile_id"), table_name="projects")
    op.drop_table("projects")
    op.drop_index(op.f("ix_profiles_user_id"), table_name="profiles")
    op.drop_table("profiles")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
