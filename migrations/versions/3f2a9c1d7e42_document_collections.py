"""document collections: reference data, synced results/standings, community

Revision ID: 3f2a9c1d7e42
Revises:
Create Date: 2026-02-20 18:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "teams",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("base", sa.String(), nullable=True),
        sa.Column("color", sa.String(), nullable=True),
    )
    op.create_table(
        "drivers",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False, unique=True),
        sa.Column("nationality", sa.String(), nullable=True),
        sa.Column("team_id", sa.String(), sa.ForeignKey("teams.id"), nullable=True),
        sa.Column("team_color", sa.String(), nullable=True),
        sa.Column("photo_url", sa.String(), nullable=True),
    )
    op.create_table(
        "races",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("round", sa.Integer(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("circuit", sa.String(), nullable=True),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
    )
    op.create_table(
        "results",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("race_name", sa.String(), nullable=False),
        sa.Column("date", sa.String(), nullable=True),
        sa.Column("circuit", sa.String(), nullable=True),
        sa.Column("results", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "standings",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("standings", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("photo_url", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("favourite_driver_id", sa.String(), sa.ForeignKey("drivers.id"), nullable=True),
        sa.Column("chat_facts", sa.JSON(), nullable=False),
        sa.Column("chat_recent", sa.JSON(), nullable=False),
    )
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("race_id", sa.String(), sa.ForeignKey("races.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("photo_url", sa.String(), nullable=True),
        sa.Column("text", sa.String(length=500), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    # comment threads are read per race in creation order
    op.create_index("ix_comments_race_created", "comments", ["race_id", "created_at"], unique=False)
    op.create_table(
        "predictions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("race_id", sa.String(), sa.ForeignKey("races.id", ondelete="CASCADE"), nullable=False),
        sa.Column("race_name", sa.String(), nullable=False),
        sa.Column("predicted_winner", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_predictions_user_race", "predictions", ["user_id", "race_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_predictions_user_race", table_name="predictions")
    op.drop_table("predictions")
    op.drop_index("ix_comments_race_created", table_name="comments")
    op.drop_table("comments")
    op.drop_table("users")
    op.drop_table("standings")
    op.drop_table("results")
    op.drop_table("races")
    op.drop_table("drivers")
    op.drop_table("teams")
