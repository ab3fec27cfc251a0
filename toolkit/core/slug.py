# toolkit/core/slug.py
import re

from toolkit.core.exceptions import EmptyInputError, EmptySlugError

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(s: str) -> str:
    if s == "":
        raise EmptyInputError()

    slug = _NON_SLUG_RE.sub("-", s.lower()).strip("-")
    if not slug:
        raise EmptySlugError()
    return slug
