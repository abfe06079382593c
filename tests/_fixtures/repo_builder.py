"""Helper utilities for constructing temporary source trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from routedoc.aggregator import AggregateResult
from routedoc.extractor import SpecExtractor
from routedoc.models import Application


class RepoBuilder:
    """Utility for writing files into a throwaway source tree and extracting it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()
        self._extractor = SpecExtractor()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the tree."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def extract(self) -> Application:
        """Return the assembled specification of the tree."""
        return self._extractor.extract(self.root)

    def collect(self) -> AggregateResult:
        """Return the aggregate result before assembly."""
        return self._extractor.collect(self.root)

    def path(self) -> Path:
        """Return the tree root path."""
        return self.root


APPLICATION_SOURCE = """
/**
 * Order service
 * @application svc
 * @version 1.0
 * @author Platform Team
 */
module.exports = {};
"""


__all__ = ["APPLICATION_SOURCE", "RepoBuilder"]
