"""Tests for slug derivation, pagination clamping and search normalization."""

import pytest

from galerie.core.slug import slugify
from galerie.models.artist import Artist
from galerie.repositories.query import (
    MAX_MEDIA_PER_PAGE,
    PageWindow,
    escape_like,
    normalize_search,
    page_window,
    search_clause,
)
from galerie.services.storage import build_key


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Jane Doe", "jane-doe"),
        ("  Éditions d'été 2024! ", "editions-d-ete-2024"),
        ("Hello---World", "hello-world"),
        ("___", ""),
        ("ÇA VA", "ca-va"),
    ],
)
def test_slugify(value, expected):
    assert slugify(value) == expected


def test_slugify_output_is_url_safe():
    slug = slugify("L'Atelier: œuvres & éditions (vol. 2)")
    assert slug == slug.lower()
    assert all(ch.isalnum() or ch == "-" for ch in slug)
    assert not slug.startswith("-") and not slug.endswith("-")
    assert "--" not in slug


def test_page_window_defaults():
    assert page_window(None, None) == PageWindow(page=1, per_page=20)


def test_page_window_clamps_out_of_range_values():
    assert page_window(0, 1000) == PageWindow(page=1, per_page=100)
    assert page_window(-3, 0) == PageWindow(page=1, per_page=1)


def test_page_window_media_limits():
    window = page_window(3, 2000, default_per_page=50, max_per_page=MAX_MEDIA_PER_PAGE)
    assert window.per_page == MAX_MEDIA_PER_PAGE
    assert window.offset == 2 * MAX_MEDIA_PER_PAGE


def test_page_window_offset():
    assert page_window(4, 10).offset == 30


def test_normalize_search():
    assert normalize_search(None) is None
    assert normalize_search("   ") is None
    assert normalize_search("  blue ") == "blue"


def test_search_clause_empty_query_is_none():
    assert search_clause("", Artist.name) is None
    assert search_clause(" blue ", Artist.name, Artist.bio_md) is not None


def test_build_key_keeps_extension():
    key = build_key("portrait.final.JPG")
    assert key.endswith(".JPG")
    assert len(key.split(".")[0]) == 36


def test_build_key_without_extension_uses_bin():
    assert build_key("README").endswith(".bin")
    assert build_key(None).endswith(".bin")


def test_escape_like_makes_wildcards_literal():
    assert escape_like("a_b") == "a\\_b"
    assert escape_like("100%") == "100\\%"
    assert escape_like("c:\\dir") == "c:\\\\dir"
