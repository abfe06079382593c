"""Final assembly of the specification tree."""

from __future__ import annotations

from .aggregator import AggregateResult
from .models import Application


def assemble(result: AggregateResult) -> Application:
    """Attach modules and typedefs to the application and seal the lists."""
    for module in result.modules:
        module.actions = tuple(module.actions)  # type: ignore[assignment]
    application = result.application
    application.modules = tuple(result.modules)
    application.typedefs = dict(result.typedefs)
    return application


__all__ = ["assemble"]
