"""
Reads and writes `*.class.json` class documents under a set of source roots.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from returns.result import Failure, Result, Success

from ..app import config
from ..errors import ModelLoadError
from ..model.graph import ClassGraph
from ..model.nodes import ClassNode
from ..utils.load_json import dump_json, load_json
from ._internal.codec import CLASS, EXTERNAL_TYPES, encode_class
from ._internal.collectors import collect_partial, collect_with_context
from ._internal.parsers import BasicParser, DictParser, OptionalParser, TransformParser, parse
from .modules import module_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassDocument:
    path: Path
    classes: list[ClassNode]
    external_types: list[str]


def _document_parser(path: Path) -> DictParser[ClassDocument]:
    classes = TransformParser(
        BasicParser[list[Any]](lambda x: isinstance(x, list), "list"),
        lambda items: collect_with_context(items, CLASS, error_context="class"),
    )
    return DictParser(
        {"classes": classes, "external_types": OptionalParser(EXTERNAL_TYPES, [])},
        lambda classes, external_types: ClassDocument(path, classes, list(external_types)),
    )


class ClassDocumentStore:
    """The class model of every document found under `roots`."""

    def __init__(self, roots: Sequence[Path]):
        self.roots = [Path(root) for root in roots]

    def discover(self) -> list[Path]:
        found: dict[Path, None] = {}
        pattern = f"*{config.CLASS_DOCUMENT_SUFFIX}"
        for root in self.roots:
            for path in sorted(root.rglob(pattern)):
                if config.SNAPSHOT_DIR_NAME not in path.parts:
                    found[path.resolve()] = None
        return list(found)

    def read_document(self, path: Path) -> Result[ClassDocument, str]:
        module = module_of(path)

        def annotate(document: ClassDocument) -> Result[ClassDocument, str]:
            for node in document.classes:
                node.source_file = path
                node.module = module
            return Success(document)

        return load_json(path).bind(lambda raw: parse(raw, _document_parser(path))).bind(annotate)

    def load(self) -> Result[ClassGraph, ModelLoadError]:
        """Decode every document into one graph, or fail listing every bad document."""
        paths = self.discover()
        documents, errors = collect_partial(paths, self.read_document)
        if errors:
            return Failure(ModelLoadError("Could not load class documents:\n" + "\n".join(errors)))

        graph = ClassGraph()
        for document in documents:
            graph.external_types.update(document.external_types)
            for node in document.classes:
                if node.qualified_name in graph:
                    return Failure(
                        ModelLoadError(
                            f"Class {node.qualified_name} is declared in more than one document"
                        )
                    )
                graph.add(node)
        problems = graph.validate()
        if problems:
            return Failure(ModelLoadError("Malformed class hierarchy:\n" + "\n".join(problems)))
        logger.info("Loaded %d classes from %d documents", len(graph), len(documents))
        return Success(graph)

    def files_for(self, classes: Iterable[ClassNode]) -> list[Path]:
        files: dict[Path, None] = {}
        for node in classes:
            if node.source_file is None:
                logger.warning("%s has no source document and will not be written", node.qualified_name)
                continue
            files[node.source_file] = None
        return list(files)

    def write(self, graph: ClassGraph, classes: Iterable[ClassNode]) -> Result[list[Path], ModelLoadError]:
        """Re-serialize every document holding one of `classes`."""
        written: list[Path] = []
        for path in self.files_for(classes):
            raw = load_json(path)
            if isinstance(raw, Failure):
                return Failure(ModelLoadError(f"Could not re-read {path}: {raw.failure()}"))
            document = raw.unwrap()
            members = [node for node in graph if node.source_file == path]
            document["classes"] = [encode_class(node) for node in members]
            result = dump_json(path, document)
            if isinstance(result, Failure):
                return Failure(ModelLoadError(f"Could not write {path}: {result.failure()}"))
            written.append(path)
            logger.info("Wrote %s", path)
        return Success(written)


__all__ = ["ClassDocument", "ClassDocumentStore"]
