"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""

from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEEDED_PAGES = [
    ("galerie", "Galerie"),
    ("labomaton", "Labomaton"),
    ("contact", "Contact"),
]


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def _publishable_columns() -> list[sa.Column]:
    return [
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("published_at", nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    ]


def upgrade() -> None:
    """Create every table and seed the fixed pages."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="editor"),
        _timestamp("created_at"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # media.artist_id gets its foreign key once artists exists
    op.create_table(
        "media",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("alt", sa.Text(), nullable=True),
        sa.Column("credit", sa.Text(), nullable=True),
        sa.Column("folder", sa.String(length=255), nullable=True),
        sa.Column("artist_id", sa.Uuid(), nullable=True),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_media_folder", "media", ["folder"])
    op.create_index("ix_media_artist_id", "media", ["artist_id"])

    op.create_table(
        "artists",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("bio_md", sa.Text(), nullable=True),
        sa.Column(
            "portrait_media_id",
            sa.Uuid(),
            sa.ForeignKey("media.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("artsper_url", sa.Text(), nullable=True),
        sa.Column("website_url", sa.Text(), nullable=True),
        sa.Column("instagram_url", sa.Text(), nullable=True),
        *_publishable_columns(),
    )
    op.create_index("ix_artists_slug", "artists", ["slug"], unique=True)
    op.create_index("ix_artists_published", "artists", ["published"])

    op.create_foreign_key(
        "fk_media_artist_id_artists", "media", "artists", ["artist_id"], ["id"], ondelete="SET NULL"
    )

    for table in ("artworks", "editions"):
        extra = (
            [sa.Column("edition_size", sa.String(length=255), nullable=True)]
            if table == "editions"
            else []
        )
        op.create_table(
            table,
            sa.Column("id", sa.Uuid(), primary_key=True),
            sa.Column(
                "artist_id",
                sa.Uuid(),
                sa.ForeignKey("artists.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("title", sa.String(length=255), nullable=False),
            sa.Column("year", sa.Integer(), nullable=True),
            sa.Column("medium", sa.String(length=255), nullable=True),
            sa.Column("dimensions", sa.String(length=255), nullable=True),
            *extra,
            sa.Column("price_note", sa.Text(), nullable=True),
            sa.Column("artsper_url", sa.Text(), nullable=True),
            *_publishable_columns(),
        )
        op.create_index(f"ix_{table}_slug", table, ["slug"], unique=True)
        op.create_index(f"ix_{table}_published", table, ["published"])
        op.create_index(f"ix_{table}_artist_id", table, ["artist_id"])

    for link_table, parent_table, parent_column in (
        ("artwork_media", "artworks", "artwork_id"),
        ("edition_media", "editions", "edition_id"),
    ):
        op.create_table(
            link_table,
            sa.Column(
                parent_column,
                sa.Uuid(),
                sa.ForeignKey(f"{parent_table}.id", ondelete="CASCADE"),
                primary_key=True,
            ),
            sa.Column(
                "media_id",
                sa.Uuid(),
                sa.ForeignKey("media.id", ondelete="CASCADE"),
                primary_key=True,
            ),
            sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        )

    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        _timestamp("start_at"),
        _timestamp("end_at", nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("description_md", sa.Text(), nullable=True),
        sa.Column(
            "hero_media_id",
            sa.Uuid(),
            sa.ForeignKey("media.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_publishable_columns(),
    )
    op.create_index("ix_events_slug", "events", ["slug"], unique=True)
    op.create_index("ix_events_published", "events", ["published"])
    op.create_index("ix_events_start_at", "events", ["start_at"])

    op.create_table(
        "event_artists",
        sa.Column(
            "event_id",
            sa.Uuid(),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "artist_id",
            sa.Uuid(),
            sa.ForeignKey("artists.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body_md", sa.Text(), nullable=True),
        sa.Column(
            "hero_media_id",
            sa.Uuid(),
            sa.ForeignKey("media.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_publishable_columns(),
    )
    op.create_index("ix_posts_slug", "posts", ["slug"], unique=True)
    op.create_index("ix_posts_published", "posts", ["published"])

    pages = op.create_table(
        "pages",
        sa.Column("key", sa.String(length=100), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body_md", sa.Text(), nullable=True),
        sa.Column(
            "hero_media_id",
            sa.Uuid(),
            sa.ForeignKey("media.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _timestamp("updated_at"),
    )

    op.create_table(
        "contact_messages",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="new"),
        _timestamp("created_at"),
    )
    op.create_index("ix_contact_messages_status", "contact_messages", ["status"])

    op.create_table(
        "labomaton_waitlist",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("source", sa.String(length=255), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_labomaton_waitlist_email", "labomaton_waitlist", ["email"], unique=True)

    seeded_at = datetime.now(timezone.utc)
    op.bulk_insert(
        pages,
        [
            {"key": key, "title": title, "body_md": None, "updated_at": seeded_at}
            for key, title in SEEDED_PAGES
        ],
    )


def downgrade() -> None:
    """Drop every table (reverse dependency order)."""
    op.drop_table("labomaton_waitlist")
    op.drop_table("contact_messages")
    op.drop_table("pages")
    op.drop_table("posts")
    op.drop_table("event_artists")
    op.drop_table("events")
    op.drop_table("edition_media")
    op.drop_table("artwork_media")
    op.drop_table("editions")
    op.drop_table("artworks")
    op.drop_constraint("fk_media_artist_id_artists", "media", type_="foreignkey")
    op.drop_table("artists")
    op.drop_table("media")
    op.drop_table("users")
