"""Cross-file unification and filename-based association."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .errors import DuplicateApplicationError, MissingApplicationError
from .logging import get_logger
from .models import Action, Application, FileResult, Module, TypeDef
from .resolver import attach


@dataclass
class AggregateResult:
    """Everything collected from a source tree before assembly."""

    application: Application
    modules: List[Module] = field(default_factory=list)
    actions: List[Action] = field(default_factory=list)
    typedefs: Dict[str, TypeDef] = field(default_factory=dict)
    unassociated: List[Action] = field(default_factory=list)


class FileAggregator:
    """Merges per-file results and attaches sibling-declared actions by filename."""

    def __init__(self) -> None:
        self.logger = get_logger("aggregator")

    def aggregate(self, results: Iterable[FileResult]) -> AggregateResult:
        application: Optional[Application] = None
        modules: List[Module] = []
        actions: List[Action] = []
        typedefs: Dict[str, TypeDef] = {}

        for result in results:
            if result.application is not None:
                if application is not None:
                    raise DuplicateApplicationError(path=result.path)
                application = result.application
            modules.extend(result.modules)
            actions.extend(result.actions)
            for name, typedef in result.typedefs.items():
                if name in typedefs:
                    self.logger.warning("Typedef %s redefined in %s", name, result.path)
                typedefs[name] = typedef

        if application is None:
            raise MissingApplicationError()

        self._attach_by_filename(modules, actions)

        claimed = _claimed(modules)
        unassociated = [action for action in actions if id(action) not in claimed]
        for action in unassociated:
            self.logger.info(
                "Action %s (%s %s) in %s has no enclosing module",
                action.name,
                action.route.method,
                action.route.path,
                action.filename,
            )

        return AggregateResult(
            application=application,
            modules=modules,
            actions=actions,
            typedefs=typedefs,
            unassociated=unassociated,
        )

    def _attach_by_filename(self, modules: List[Module], actions: List[Action]) -> None:
        claimed = _claimed(modules)
        by_filename: Dict[str, List[Action]] = defaultdict(list)
        for action in actions:
            if id(action) not in claimed:
                by_filename[action.filename].append(action)

        for module in modules:
            for action in by_filename.get(module.filename, []):
                if id(action) in claimed:
                    continue
                if attach(module, action):
                    claimed.add(id(action))
                    self.logger.debug(
                        "Attached %s to module %s by filename %s",
                        action.name,
                        module.name,
                        module.filename,
                    )


def _claimed(modules: Iterable[Module]) -> Set[int]:
    return {id(action) for module in modules for action in module.actions}


__all__ = ["AggregateResult", "FileAggregator"]
