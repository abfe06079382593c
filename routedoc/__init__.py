"""Extract API specifications from JSDoc route annotations."""

from .errors import (
    DuplicateApplicationError,
    MalformedTagError,
    MissingApplicationError,
    RouteDocError,
    SourceParseError,
)
from .extractor import SpecExtractor, extract
from .models import Action, Application, Middleware, Module, Param, ReturnField, Route, TypeDef

__all__ = [
    "Action",
    "Application",
    "DuplicateApplicationError",
    "MalformedTagError",
    "Middleware",
    "MissingApplicationError",
    "Module",
    "Param",
    "ReturnField",
    "Route",
    "RouteDocError",
    "SourceParseError",
    "SpecExtractor",
    "TypeDef",
    "extract",
]
