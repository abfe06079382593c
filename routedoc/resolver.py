"""Structural association of actions with the modules that enclose them."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import DuplicateApplicationError
from .index import DeclarationIndex
from .interpreter import Record
from .logging import get_logger
from .models import Action, Application, FileResult, Module, TypeDef
from .routes import join_paths

_LOGGER = get_logger("resolver")


def attach(module: Module, action: Action) -> bool:
    """Append ``action`` to ``module`` and compose its route path once.

    Returns False when the action is already in the module's list. The module
    path is prefixed onto the route only the first time an action is attached
    anywhere, so a later attachment never stacks a second prefix.
    """
    if any(existing is action for existing in module.actions):
        return False
    module.actions.append(action)
    if not action.route_composed:
        if module.path:
            action.route = replace(action.route, path=join_paths(module.path, action.route.path))
        action.route_composed = True
    return True


def find_enclosing_module(
    action_node: Any,
    modules: Sequence[Tuple[Module, Any]],
    index: DeclarationIndex,
) -> Optional[Module]:
    """Return the first module, in declaration order, whose node encloses ``action_node``."""
    for module, module_node in modules:
        if index.is_ancestor(module_node, action_node):
            return module
    return None


class AssociationResolver:
    """Reconciles the records of one file into a :class:`FileResult`."""

    def resolve(
        self,
        path: str,
        filename: str,
        records: Sequence[Tuple[Record, Any]],
        index: DeclarationIndex,
        typedefs: Optional[Dict[str, TypeDef]] = None,
    ) -> FileResult:
        """Group ``(record, declaration node)`` pairs and attach nested actions."""
        result = FileResult(path=path, filename=filename, typedefs=dict(typedefs or {}))
        module_nodes: List[Tuple[Module, Any]] = []
        action_nodes: List[Tuple[Action, Any]] = []

        for record, node in records:
            if isinstance(record, Application):
                if result.application is not None:
                    raise DuplicateApplicationError(path=path)
                result.application = record
            elif isinstance(record, Module):
                result.modules.append(record)
                module_nodes.append((record, node))
            elif isinstance(record, Action):
                result.actions.append(record)
                action_nodes.append((record, node))

        for action, node in action_nodes:
            module = find_enclosing_module(node, module_nodes, index)
            if module is None:
                _LOGGER.debug(
                    "No enclosing module for %s %s in %s",
                    action.route.method,
                    action.route.path,
                    path,
                )
                continue
            if attach(module, action):
                _LOGGER.debug("Attached %s to module %s by nesting", action.name, module.name)

        return result


__all__ = ["AssociationResolver", "attach", "find_enclosing_module"]
