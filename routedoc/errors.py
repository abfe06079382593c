"""Fatal errors raised while extracting a specification."""

from __future__ import annotations

from typing import Optional


class RouteDocError(RuntimeError):
    """Base class for errors that abort an extraction run."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class DuplicateApplicationError(RouteDocError):
    """A second @application block was found."""

    def __init__(self, *, path: Optional[str] = None) -> None:
        super().__init__(
            "Expect exact one application definition, given 2 or more.", path=path
        )


class MissingApplicationError(RouteDocError):
    """No @application block was found in the whole source tree."""

    def __init__(self, *, path: Optional[str] = None) -> None:
        super().__init__("Expect exact one application definition, but not given.", path=path)


class MalformedTagError(RouteDocError):
    """A @route or @middleware tag does not start with a `{token} rest` pair."""

    def __init__(self, title: str, raw: str, *, path: Optional[str] = None) -> None:
        self.title = title
        self.raw = raw
        text = f"@{title} {raw}".rstrip()
        super().__init__(f"{text!r} is not valid {title} definition", path=path)


class SourceParseError(RouteDocError):
    """The source file could not be parsed into a syntax tree."""

    def __init__(self, line: int, *, path: Optional[str] = None) -> None:
        self.line = line
        super().__init__(f"Syntax error near line {line}", path=path)


__all__ = [
    "DuplicateApplicationError",
    "MalformedTagError",
    "MissingApplicationError",
    "RouteDocError",
    "SourceParseError",
]
