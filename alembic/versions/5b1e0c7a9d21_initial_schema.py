"""Initial schema: users, sessions and lead capture

Revision ID: 5b1e0c7a9d21
Revises:
Create Date: 2026-10-19 09:12:04.118204

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b1e0c7a9d21"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def owner_column() -> sa.Column:
    return sa.Column(
        "user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        *timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Session store: one row per live session, swept by expiry
    op.create_table(
        "session",
        sa.Column("sid", sa.String(255), primary_key=True),
        sa.Column("sess", sa.JSON(), nullable=False),
        sa.Column("expire", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_session_expire", "session", ["expire"])

    op.create_table(
        "registrations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("interest", sa.String(255), nullable=True),
        owner_column(),
        *timestamps(),
    )
    op.create_index("ix_registrations_id", "registrations", ["id"])
    op.create_index("ix_registrations_email", "registrations", ["email"])
    op.create_index("ix_registrations_user_id", "registrations", ["user_id"])

    op.create_table(
        "game_submissions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("game_name", sa.String(255), nullable=False),
        sa.Column("game_link", sa.String(2048), nullable=False),
        sa.Column("daily_active_users", sa.BigInteger(), nullable=True),
        sa.Column("total_visits", sa.BigInteger(), nullable=True),
        sa.Column("revenue", sa.BigInteger(), nullable=True),
        owner_column(),
        *timestamps(),
    )
    op.create_index("ix_game_submissions_id", "game_submissions", ["id"])
    op.create_index("ix_game_submissions_email", "game_submissions", ["email"])
    op.create_index("ix_game_submissions_user_id", "game_submissions", ["user_id"])

    op.create_table(
        "asset_submissions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("assets_count", sa.Integer(), nullable=True),
        sa.Column("asset_links", sa.Text(), nullable=True),
        sa.Column("additional_notes", sa.Text(), nullable=True),
        owner_column(),
        *timestamps(),
    )
    op.create_index("ix_asset_submissions_id", "asset_submissions", ["id"])
    op.create_index("ix_asset_submissions_email", "asset_submissions", ["email"])
    op.create_index("ix_asset_submissions_user_id", "asset_submissions", ["user_id"])

    op.create_table(
        "newsletter_subscriptions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        owner_column(),
        *timestamps(),
    )
    op.create_index("ix_newsletter_subscriptions_id", "newsletter_subscriptions", ["id"])
    op.create_index(
        "ix_newsletter_subscriptions_email", "newsletter_subscriptions", ["email"], unique=True
    )


def downgrade() -> None:
    op.drop_table("newsletter_subscriptions")
    op.drop_table("asset_submissions")
    op.drop_table("game_submissions")
    op.drop_table("registrations")
    op.drop_table("session")
    op.drop_table("users")
