"""Specification records shared across routedoc components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableSequence, Optional, Sequence


@dataclass(frozen=True)
class Route:
    """HTTP verb plus path identifying how an action is invoked."""

    method: str
    path: str

    def canonical_name(self) -> str:
        return f"{self.method.lower()}:{self.path}"

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, "path": self.path}


@dataclass(frozen=True)
class Middleware:
    """Middleware reference parsed from `{name} args`."""

    name: str
    args: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "args": self.args}


@dataclass(frozen=True)
class Param:
    """A named request parameter or response field."""

    type: str
    name: str
    description: str = ""
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "optional": self.optional,
        }


ReturnField = Param


@dataclass(frozen=True)
class TypeProperty:
    type: str
    description: str = ""
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "description": self.description, "optional": self.optional}


@dataclass
class TypeDef:
    """Named object or function shape declared with @typedef."""

    name: str
    kind: str
    description: str = ""
    properties: Dict[str, TypeProperty] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "description": self.description,
            "properties": {key: prop.to_dict() for key, prop in self.properties.items()},
        }


@dataclass(eq=False)
class Action:
    """One routed operation; blocks with several @route tags yield several actions.

    Actions compare by identity so that membership checks on a module's action
    list never confuse two distinct actions that happen to look alike.
    """

    name: str
    route: Route
    title: str = ""
    description: str = ""
    notes: List[str] = field(default_factory=list)
    params: List[Param] = field(default_factory=list)
    returns: List[ReturnField] = field(default_factory=list)
    middlewares: List[Middleware] = field(default_factory=list)
    filename: str = ""
    funcname: str = ""
    route_composed: bool = field(default=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "action",
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "notes": list(self.notes),
            "route": self.route.to_dict(),
            "params": [param.to_dict() for param in self.params],
            "returns": [item.to_dict() for item in self.returns],
            "middlewares": [middleware.to_dict() for middleware in self.middlewares],
            "filename": self.filename,
            "funcname": self.funcname,
        }


@dataclass(eq=False)
class Module:
    """Group of actions sharing a route prefix; identified by its defining filename."""

    name: str
    title: str = ""
    path: str = ""
    description: str = ""
    middlewares: List[Middleware] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    filename: str = ""
    actions: MutableSequence[Action] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "module",
            "name": self.name,
            "title": self.title,
            "path": self.path,
            "description": self.description,
            "middlewares": [middleware.to_dict() for middleware in self.middlewares],
            "notes": list(self.notes),
            "filename": self.filename,
            "actions": [action.to_dict() for action in self.actions],
        }


@dataclass(eq=False)
class Application:
    """Root of the specification tree; exactly one exists per source tree."""

    name: str = ""
    title: str = ""
    description: str = ""
    notes: List[str] = field(default_factory=list)
    address: str = ""
    author: str = ""
    contact: str = ""
    version: str = ""
    modules: Sequence[Module] = field(default_factory=list)
    typedefs: Dict[str, TypeDef] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "application",
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "notes": list(self.notes),
            "address": self.address,
            "author": self.author,
            "contact": self.contact,
            "version": self.version,
            "modules": [module.to_dict() for module in self.modules],
            "typedefs": {name: typedef.to_dict() for name, typedef in self.typedefs.items()},
        }


@dataclass
class FileResult:
    """Records produced by a single source file after structural association."""

    path: str
    filename: str
    application: Optional[Application] = None
    modules: List[Module] = field(default_factory=list)
    actions: List[Action] = field(default_factory=list)
    typedefs: Dict[str, TypeDef] = field(default_factory=dict)
