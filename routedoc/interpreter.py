"""Turn parsed documentation blocks into specification records."""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Optional, Union

from .errors import MalformedTagError
from .jsdoc import DocComment, Tag
from .logging import get_logger
from .models import (
    Action,
    Application,
    Middleware,
    Module,
    Param,
    ReturnField,
    Route,
    TypeDef,
    TypeProperty,
)
from .naming import NameRegistry, slugify
from .routes import method_upper

Record = Union[Application, Module, Action]

_ROUTE_PATTERN = re.compile(r"^\s*\{([^}]+)\}(.+?)(?:\n|$)")
_MIDDLEWARE_PATTERN = re.compile(r"^\s*\{([^}]+)\}(.*?)(?:\n|$)")

_PARAM_SENTINELS = frozenset({"context", "params"})
_RETURN_SENTINELS = frozenset({"context", "params", "returns", "return"})
_PARAM_PREFIX = "params."
_RETURN_PREFIX = "returns."


class BlockKind(Enum):
    APPLICATION = "application"
    MODULE = "module"
    ACTION = "action"
    UNRECOGNIZED = "unrecognized"


def classify(doc: DocComment) -> BlockKind:
    """Decide what a block describes; application > module > route."""
    if doc.has("application"):
        return BlockKind.APPLICATION
    if doc.has("module"):
        return BlockKind.MODULE
    if doc.has("route"):
        return BlockKind.ACTION
    return BlockKind.UNRECOGNIZED


def parse_route(tag: Tag) -> Route:
    match = _ROUTE_PATTERN.match(tag.description)
    if match and match.group(2).strip():
        return Route(method=method_upper(match.group(1)), path=match.group(2).strip())
    raise MalformedTagError("route", tag.description)


def parse_middleware(tag: Tag) -> Middleware:
    match = _MIDDLEWARE_PATTERN.match(tag.description)
    if match:
        return Middleware(name=match.group(1).strip(), args=match.group(2).strip())
    raise MalformedTagError("middleware", tag.description)


def parse_param(tag: Tag) -> Optional[Param]:
    """Return a parameter for `params.<name>` tags, None for anything else."""
    if tag.type is None:
        return None
    name = tag.name
    if not name or name in _PARAM_SENTINELS or not name.startswith(_PARAM_PREFIX):
        return None
    field_name = name[len(_PARAM_PREFIX):]
    if not field_name:
        return None
    return Param(
        type=tag.type.stringify(),
        name=field_name,
        description=tag.description or "",
        optional=tag.type.optional,
    )


def parse_return(tag: Tag) -> Optional[ReturnField]:
    """Return a response field for `returns.<name>` tags, None for anything else.

    Return tags carry no name slot, so the first word of the description is
    read as the field name.
    """
    if tag.type is None:
        return None
    description = tag.description.strip()
    name = description.split(" ")[0] if description else ""
    rest = description[len(name):].strip()
    if not name or name in _RETURN_SENTINELS or not name.startswith(_RETURN_PREFIX):
        return None
    field_name = name[len(_RETURN_PREFIX):]
    if not field_name:
        return None
    return ReturnField(
        type=tag.type.stringify(),
        name=field_name,
        description=rest,
        optional=tag.type.optional,
    )


def parse_typedefs(doc: DocComment) -> Dict[str, TypeDef]:
    """Collect @typedef declarations; the first one owns the block's @property tags."""
    typedefs: Dict[str, TypeDef] = {}
    for tag in doc.tags_named("typedef"):
        if not tag.name:
            continue
        kind = "function" if tag.type and tag.type.stringify().lower() == "function" else "object"
        typedefs[tag.name] = TypeDef(
            name=tag.name,
            kind=kind,
            description=tag.description.strip() or _summary_line(doc),
        )

    if not typedefs:
        return typedefs

    owner = next(iter(typedefs.values()))
    for tag in doc.tags_named("property", "prop"):
        if not tag.name:
            continue
        owner.properties[tag.name] = TypeProperty(
            type=tag.type.stringify() if tag.type else "any",
            description=tag.description or "",
            optional=bool(tag.type and tag.type.optional),
        )
    return typedefs


def _summary_line(doc: DocComment) -> str:
    for line in doc.description.strip().splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("@"):
            return stripped
    return ""


class TagInterpreter:
    """Interpret one documentation block into zero or more records."""

    def __init__(self, names: NameRegistry | None = None) -> None:
        self.names = names or NameRegistry()
        self.logger = get_logger("interpreter")

    def interpret(self, doc: DocComment, *, filename: str, funcname: str = "") -> List[Record]:
        kind = classify(doc)
        if kind is BlockKind.APPLICATION:
            return [self._application(doc)]
        if kind is BlockKind.MODULE:
            return [self._module(doc, filename)]
        if kind is BlockKind.ACTION:
            return list(self._actions(doc, filename, funcname))
        return []

    def _application(self, doc: DocComment) -> Application:
        return Application(
            title=doc.title(),
            name=doc.text("application"),
            description=doc.text("description"),
            notes=_notes(doc),
            address=doc.text("address"),
            author=doc.text("author"),
            contact=doc.text("contact"),
            version=doc.text("version"),
        )

    def _module(self, doc: DocComment, filename: str) -> Module:
        base = doc.module_name() or "module"
        return Module(
            name=self.names.unique(base),
            title=doc.title(),
            path=doc.text("path"),
            description=doc.text("description"),
            middlewares=[parse_middleware(tag) for tag in doc.tags_named("middleware")],
            notes=_notes(doc),
            filename=filename,
        )

    def _actions(self, doc: DocComment, filename: str, funcname: str) -> List[Action]:
        routes = [parse_route(tag) for tag in doc.tags_named("route")]
        shared_name = doc.text("action")
        params = [p for p in (parse_param(tag) for tag in doc.tags_named("param", "arg", "argument")) if p]
        returns = [r for r in (parse_return(tag) for tag in doc.tags_named("returns", "return")) if r]
        middlewares = [parse_middleware(tag) for tag in doc.tags_named("middleware")]

        actions = []
        for route in routes:
            name = slugify(shared_name or route.canonical_name()) or "action"
            actions.append(
                Action(
                    name=name,
                    route=route,
                    title=doc.title(),
                    description=doc.text("description"),
                    notes=_notes(doc),
                    params=list(params),
                    returns=list(returns),
                    middlewares=list(middlewares),
                    filename=filename,
                    funcname=funcname,
                )
            )
        self.logger.debug(
            "Interpreted %d action(s) for %s in %s", len(actions), funcname or "<anonymous>", filename
        )
        return actions


def _notes(doc: DocComment) -> List[str]:
    return [note for note in doc.text_array("note") if note]


__all__ = [
    "BlockKind",
    "Record",
    "TagInterpreter",
    "classify",
    "parse_middleware",
    "parse_param",
    "parse_return",
    "parse_route",
    "parse_typedefs",
]
