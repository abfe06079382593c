"""Name derivation for specification records."""

from __future__ import annotations

import hashlib
import re
from typing import Dict

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def slugify(value: str) -> str:
    """Collapse non-alphanumeric runs into single hyphens and drop a trailing one."""
    slug = _NON_ALNUM.sub("-", value)
    if slug.endswith("-"):
        slug = slug[:-1]
    return slug


class NameRegistry:
    """Per-run counter that turns repeated base names into distinct identifiers.

    One registry belongs to one extraction run; the same base seen twice gets
    two different suffixes, and a fresh registry starts counting again.
    """

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}

    def digest(self, base: str) -> str:
        count = self._counts.get(base, 0) + 1
        self._counts[base] = count
        return hashlib.md5(f"{base}:{count}".encode("utf-8"), usedforsecurity=False).hexdigest()[:6]

    def unique(self, base: str) -> str:
        return f"{base}-{self.digest(base)}"

    def seen(self, base: str) -> int:
        return self._counts.get(base, 0)


__all__ = ["NameRegistry", "slugify"]
