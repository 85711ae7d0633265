"""Add job title, department, organization and location to profiles.

Revision ID: 20251205000000
Revises: 20251110000000
Create Date: 2025-12-05

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251205000000"
down_revision: Union[str, None] = "20251110000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PROFILE_FIELDS = ("job_title", "department", "organization", "location")


def upgrade() -> None:
    for name in PROFILE_FIELDS:
        op.add_column("profiles", sa.Column(name, sa.String(length=255), nullable=True))


def downgrade() -> None:
    for name in reversed(PROFILE_FIELDS):
        op.drop_column("profiles", name)
