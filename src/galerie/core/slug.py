"""Slug derivation for public URLs."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Derive a URL-safe slug from a title or name.

    Lossy: accents are folded to ASCII, everything is lowercased, and each run
    of non-alphanumeric characters becomes a single "-".

    Example:
        >>> slugify("Jane Doe")
        'jane-doe'
        >>> slugify("  Éditions d'été 2024! ")
        'editions-d-ete-2024'
    """
    folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", folded.lower()).strip("-")
