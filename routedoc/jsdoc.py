"""JSDoc-style documentation block parsing.

Blocks are unwrapped (comment delimiters and `*` gutters removed) and split into
the leading free-text description and an ordered list of tags. Each tag reads
as ``@title {type} name description`` where the type and name parts are only
recognised for the tags that carry them, mirroring doctrine's sloppy mode.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

_GUTTER = re.compile(r"^\s*\*? ?")
_TAG_START = re.compile(r"^@([A-Za-z_$][\w$-]*)")
_WORD = re.compile(r"\S+")

_TYPED_TAGS = frozenset(
    {
        "param",
        "arg",
        "argument",
        "property",
        "prop",
        "returns",
        "return",
        "typedef",
        "type",
        "throws",
        "exception",
        "enum",
        "this",
    }
)

_NAMED_TAGS = frozenset(
    {
        "param",
        "arg",
        "argument",
        "property",
        "prop",
        "typedef",
        "callback",
        "module",
        "namespace",
        "name",
        "alias",
    }
)


@dataclass(frozen=True)
class TypeExpression:
    """A type annotation as written between braces."""

    text: str
    optional: bool = False

    def stringify(self) -> str:
        return self.text


@dataclass
class Tag:
    title: str
    description: str = ""
    name: str = ""
    type: Optional[TypeExpression] = None
    default: Optional[str] = None


@dataclass
class DocComment:
    """Parsed documentation block with doctrine-like accessors."""

    description: str = ""
    tags: List[Tag] = field(default_factory=list)

    def title(self) -> str:
        for line in self.description.strip().splitlines():
            if line.strip():
                return line.strip()
        return ""

    def has(self, title: str) -> bool:
        return any(tag.title == title for tag in self.tags)

    def first(self, title: str) -> Optional[Tag]:
        for tag in self.tags:
            if tag.title == title:
                return tag
        return None

    def tags_named(self, *titles: str) -> List[Tag]:
        return [tag for tag in self.tags if tag.title in titles]

    def text(self, title: str) -> str:
        tag = self.first(title)
        return tag.description.strip() if tag else ""

    def text_array(self, title: str) -> List[str]:
        return [tag.description for tag in self.tags_named(title)]

    def module_name(self) -> str:
        tag = self.first("module")
        return tag.name if tag else ""


def unwrap(comment: str) -> str:
    """Strip comment delimiters and leading `*` gutters from a block."""
    text = comment.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]
    return "\n".join(_GUTTER.sub("", line, count=1) for line in text.splitlines())


def parse_comment(comment: str) -> DocComment:
    """Parse the raw text of a `/** ... */` block."""
    description_lines: List[str] = []
    chunks: List[Tuple[str, List[str]]] = []

    for line in unwrap(comment).splitlines():
        stripped = line.strip()
        match = _TAG_START.match(stripped)
        if match:
            chunks.append((match.group(1), [stripped[match.end():]]))
        elif chunks:
            chunks[-1][1].append(line)
        else:
            description_lines.append(line)

    tags = [_parse_tag(title, "\n".join(lines)) for title, lines in chunks]
    return DocComment(description="\n".join(description_lines).strip(), tags=tags)


def _parse_tag(title: str, body: str) -> Tag:
    rest = body
    type_expr: Optional[TypeExpression] = None
    if title in _TYPED_TAGS:
        type_text, rest = _scan_type(rest)
        if type_text is not None:
            type_expr = _parse_type(type_text)

    name = ""
    default: Optional[str] = None
    if title in _NAMED_TAGS:
        name, rest, bracketed, default = _scan_name(rest)
        if bracketed and type_expr is not None:
            type_expr = TypeExpression(type_expr.text, optional=True)
        description = rest.strip()
        if description.startswith("- "):
            description = description[2:].lstrip()
    else:
        description = rest.strip()

    return Tag(title=title, description=description, name=name, type=type_expr, default=default)


def _scan_type(text: str) -> Tuple[Optional[str], str]:
    stripped = text.lstrip()
    if not stripped.startswith("{"):
        return None, text
    depth = 0
    for index, char in enumerate(stripped):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return stripped[1:index].strip(), stripped[index + 1:]
    # Unbalanced braces are left in the description.
    return None, text


def _parse_type(text: str) -> TypeExpression:
    normalised = " ".join(text.split())
    if normalised.endswith("="):
        return TypeExpression(normalised[:-1].rstrip(), optional=True)
    return TypeExpression(normalised)


def _scan_name(text: str) -> Tuple[str, str, bool, Optional[str]]:
    stripped = text.lstrip(" \t")
    if stripped.startswith("["):
        end = stripped.find("]")
        if end != -1:
            inner = stripped[1:end].strip()
            name, sep, default = inner.partition("=")
            return name.strip(), stripped[end + 1:], True, (default.strip() if sep else None)
    match = _WORD.match(stripped)
    if not match:
        return "", stripped, False, None
    return match.group(0), stripped[match.end():], False, None


__all__ = ["DocComment", "Tag", "TypeExpression", "parse_comment", "unwrap"]
