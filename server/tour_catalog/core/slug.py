"""URL slug generation."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    Derive a URL-safe slug from a display name.

    >>> slugify("Best of Kerala!!  ")
    'best-of-kerala'
    """
    slug = _NON_ALNUM.sub("-", name.lower().strip())
    return slug.strip("-")
