"""Route path and verb helpers."""

from __future__ import annotations

import re

_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def method_upper(value: str) -> str:
    """Normalize HTTP verbs to uppercase."""
    return (value or "").strip().upper()


def join_paths(prefix: str, path: str) -> str:
    """Combine a module prefix with an action path without doubling separators.

    A leading separator on the prefix is kept as written, and a trailing
    separator on the action path survives the join.
    """
    prefix = (prefix or "").strip()
    path = (path or "").strip()
    if not prefix:
        return path
    if not path:
        return prefix
    combined = f"{prefix.rstrip('/')}/{path.lstrip('/')}"
    return _DUPLICATE_SLASHES.sub("/", combined)


__all__ = ["join_paths", "method_upper"]
