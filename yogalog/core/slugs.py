"""Slugs — URL-safe identifiers derived from pose names."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lowercase, strip diacritics, collapse non-alphanumerics to '-', trim.

    >>> slugify("Utthita Hasta Pādāngusthāsana")
    'utthita-hasta-padangusthasana'
    """
    decomposed = unicodedata.normalize("NFD", name.lower())
    ascii_only = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _NON_ALNUM.sub("-", ascii_only).strip("-")
