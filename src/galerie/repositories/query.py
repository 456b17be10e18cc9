"""Pagination and search helpers shared by the list queries."""

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import or_

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100
MAX_MEDIA_PER_PAGE = 500


@dataclass(frozen=True)
class PageWindow:
    """Resolved page/per_page pair with its row offset."""

    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


def page_window(
    page: Optional[int],
    per_page: Optional[int],
    default_per_page: int = DEFAULT_PER_PAGE,
    max_per_page: int = MAX_PER_PAGE,
) -> PageWindow:
    """Clamp raw pagination input.

    ``page`` floors at 1; ``per_page`` is clamped to ``[1, max_per_page]``.
    Missing values fall back to page 1 and ``default_per_page``.

    Example:
        >>> page_window(0, 1000)
        PageWindow(page=1, per_page=100)
    """
    resolved_page = max(page or 1, 1)
    resolved_per_page = default_per_page if per_page is None else per_page
    resolved_per_page = min(max(resolved_per_page, 1), max_per_page)
    return PageWindow(page=resolved_page, per_page=resolved_per_page)


def normalize_search(q: Optional[str]) -> Optional[str]:
    """Return the trimmed search text, or None when there is nothing to match."""
    if q is None:
        return None
    q = q.strip()
    return q or None


LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def search_clause(q: Optional[str], *columns: Any):
    """Build a case-insensitive literal substring match OR'd across ``columns``.

    Returns None when ``q`` is empty so callers can skip the WHERE clause.
    """
    text = normalize_search(q)
    if text is None:
        return None
    pattern = f"%{escape_like(text)}%"
    return or_(*(column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns))
