"""Extraction pipeline: files -> records -> associated specification."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .aggregator import AggregateResult, FileAggregator
from .assembler import assemble
from .config import RouteDocConfig, load_config
from .errors import RouteDocError
from .index import DeclarationIndex
from .interpreter import Record, TagInterpreter, parse_typedefs
from .jsdoc import parse_comment
from .logging import get_logger
from .models import Application, FileResult, TypeDef
from .naming import NameRegistry
from .resolver import AssociationResolver
from .scanner import SourceScanner
from .syntax import JavaScriptSyntax, func_name


class SpecExtractor:
    """Coordinates scanning, per-file resolution, aggregation and assembly."""

    def __init__(
        self,
        scanner: SourceScanner | None = None,
        syntax: JavaScriptSyntax | None = None,
        resolver: AssociationResolver | None = None,
        aggregator: FileAggregator | None = None,
    ) -> None:
        self.scanner = scanner
        self.syntax = syntax or JavaScriptSyntax()
        self.resolver = resolver or AssociationResolver()
        self.aggregator = aggregator or FileAggregator()
        self.logger = get_logger("extractor")

    def extract(self, path: str | Path) -> Application:
        """Return the assembled specification for a source tree."""
        application = assemble(self.collect(path))
        self.logger.info(
            "Extracted application %s with %d module(s)",
            application.name or "<unnamed>",
            len(application.modules),
        )
        return application

    def collect(self, path: str | Path) -> AggregateResult:
        """Parse and aggregate every source file without sealing the result."""
        root = Path(path).expanduser().resolve()
        self.logger.info("Starting extraction for %s", root)
        config = self.load_config(root)
        scanner = self.scanner or SourceScanner(config.extensions, config.exclude_paths)
        files = scanner.scan(root)
        self.logger.debug("Scanner discovered %d source file(s)", len(files))

        interpreter = TagInterpreter(NameRegistry())
        results = (self.parse_file(file, interpreter) for file in files)
        return self.aggregator.aggregate(results)

    def load_config(self, root: Path) -> RouteDocConfig:
        return load_config(root.parent if root.is_file() else root)

    def parse_file(self, path: Path, interpreter: TagInterpreter | None = None) -> FileResult:
        """Interpret every documentation block in one file and resolve nesting."""
        interpreter = interpreter or TagInterpreter()
        filename = path.stem
        try:
            source = path.read_text(encoding="utf-8", errors="replace")
            tree = self.syntax.parse(source)
            index = DeclarationIndex(self.syntax.doc_blocks(tree))

            records: List[Tuple[Record, Any]] = []
            typedefs: Dict[str, TypeDef] = {}
            for block in index.blocks:
                doc = parse_comment(block.text)
                typedefs.update(parse_typedefs(doc))
                declaration = index.declaration_of(block)
                for record in interpreter.interpret(
                    doc, filename=filename, funcname=func_name(declaration)
                ):
                    records.append((record, declaration))

            self.logger.debug(
                "Parsed %s: %d block(s), %d record(s)", path, len(index.blocks), len(records)
            )
            return self.resolver.resolve(str(path), filename, records, index, typedefs)
        except RouteDocError as exc:
            if exc.path is None:
                exc.path = str(path)
            raise


def extract(path: str | Path, extractor: Optional[SpecExtractor] = None) -> Application:
    """Convenience wrapper returning the specification for ``path``."""
    return (extractor or SpecExtractor()).extract(path)


__all__ = ["SpecExtractor", "extract"]
