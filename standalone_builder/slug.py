"""
Slug derivation for page titles.

    "My Page!!"        → "my-page"
    "  Hello, World  " → "hello-world"
    "Über uns"         → "ber-uns"
"""

import re
from typing import Optional

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Lower-case, collapse every non-[a-z0-9] run into one hyphen, trim hyphens."""
    return _NON_ALNUM_RUN.sub("-", title.lower()).strip("-")


def resolve_slug(title: str, slug: Optional[str] = None) -> str:
    """An explicit non-empty slug wins; otherwise derive one from the title."""
    return slug or slugify(title)
