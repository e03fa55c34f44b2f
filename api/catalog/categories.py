"""
Mapping between collection URL slugs and the category labels stored on
productions.
"""

from __future__ import annotations

CATEGORIES: dict[str, str] = {
    "javascript-nodejs": "JavaScript / NodeJS",
    "net": ".NET",
    "mobile": "iOS, Android, Windows Phone",
    "python": "Python",
    "go": "Go / Golang",
    "autres": "Autres / Labs",
}

_SLUGS: dict[str, str] = {category: slug for slug, category in CATEGORIES.items()}


def slug_to_category(slug: str) -> str:
    return CATEGORIES.get((slug or "").strip().lower(), "")


def category_to_slug(category: str) -> str:
    return _SLUGS.get((category or "").strip(), "")
