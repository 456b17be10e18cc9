"""Publish lifecycle tests.

Covers the (published, published_at) transition table and how partial
updates merge into a publishable row.
"""

from datetime import datetime, timedelta, timezone

import pytest

from galerie.models.artist import Artist
from galerie.models.publishing import resolve_publish_state

EARLIER = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
NOW = datetime(2025, 6, 1, 9, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "current_published,current_published_at,requested,expected",
    [
        (False, None, None, (False, None)),
        (True, EARLIER, None, (True, EARLIER)),
        (False, None, True, (True, NOW)),
        (True, EARLIER, True, (True, EARLIER)),
        (False, None, False, (False, None)),
        (True, EARLIER, False, (False, None)),
    ],
)
def test_resolve_publish_state(current_published, current_published_at, requested, expected):
    assert resolve_publish_state(current_published, current_published_at, requested, NOW) == expected


def test_republishing_moves_published_at_forward():
    """Unpublish then publish again records the second publish instant."""
    artist = Artist(name="Jane Doe", slug="jane-doe")
    artist.apply_publish(True, EARLIER)
    artist.apply_publish(False, EARLIER + timedelta(days=1))
    assert artist.published_at is None

    artist.apply_publish(True, NOW)
    assert artist.published is True
    assert artist.published_at == NOW


def test_toggle_publish_flips_both_ways():
    artist = Artist(name="Jane Doe", slug="jane-doe")

    artist.toggle_publish(NOW)
    assert (artist.published, artist.published_at) == (True, NOW)

    artist.toggle_publish(NOW + timedelta(minutes=5))
    assert (artist.published, artist.published_at) == (False, None)


def test_apply_changes_skips_none_and_keeps_slug():
    artist = Artist(name="Jane Doe", slug="jane-doe", bio_md="Painter")

    artist.apply_changes({"name": None, "bio_md": "Sculptor", "published": None}, "name", NOW)

    assert artist.name == "Jane Doe"
    assert artist.slug == "jane-doe"
    assert artist.bio_md == "Sculptor"
    assert artist.published is False
    assert artist.updated_at == NOW


def test_apply_changes_reslugs_when_name_changes():
    artist = Artist(name="Jane Doe", slug="jane-doe")

    artist.apply_changes({"name": "Jane Doe-Martin", "published": True}, "name", NOW)

    assert artist.slug == "jane-doe-martin"
    assert artist.published is True
    assert artist.published_at == NOW
