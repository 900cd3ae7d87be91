"""Compound color parsing and shape keyword lookup."""

from __future__ import annotations

STYLE_SEPARATOR = ":"
DEFAULT_OPACITY = "100"

SHAPE_POLYGON = "polygon"
SHAPE_LINE = "line"
SHAPE_DOT = "dot"

SHAPE_KEYWORDS: dict[str, str] = {
    "p": SHAPE_POLYGON,
    "poly": SHAPE_POLYGON,
    "region": SHAPE_POLYGON,
    "polygon": SHAPE_POLYGON,
    "l": SHAPE_LINE,
    "line": SHAPE_LINE,
    "border": SHAPE_LINE,
    "d": SHAPE_DOT,
    "dot": SHAPE_DOT,
    "circle": SHAPE_DOT,
}


def split_style(compound: str) -> tuple[str, str]:
    """Split `"name"` or `"name:opacity"` into `(color, opacity)`.

    Only the first separator splits; the values themselves are not validated.
    """
    color, sep, opacity = compound.partition(STYLE_SEPARATOR)
    if not sep:
        return (compound, DEFAULT_OPACITY)
    return (color, opacity)


def canonical_shape(keyword: str) -> str | None:
    """Return the canonical shape for an exact-match keyword, or None."""
    return SHAPE_KEYWORDS.get(keyword)


def is_known_shape(keyword: str) -> bool:
    return keyword in SHAPE_KEYWORDS
