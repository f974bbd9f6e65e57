"""
Source cache.

Parses each TypeScript file exactly once, keyed by absolute path, and keeps
its classes and import table for every later lookup.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future

from . import typescript as ts
from .classifier import EntityClassifier
from .ir_nodes import EntityClass, ImportedSource
from .module_resolver import ModuleResolver

logger = logging.getLogger(__name__)


class SourceCache:
    """Compute-once cache of parsed source files.

    Concurrent requests for a path that is not cached yet share a single
    parse: the first caller parses and publishes the result, the others wait
    for it. Unreadable files are cached as None.
    """

    def __init__(self, resolver: ModuleResolver, classifier: EntityClassifier):
        self.resolver = resolver
        self.classifier = classifier
        self._lock = threading.Lock()
        self._sources: dict[str, Future] = {}

    def import_source(self, filepath: str) -> ImportedSource | None:
        """
        Return the parsed source of a file.

        Args:
            filepath: Path of the file, made absolute before lookup

        Returns:
            The cached ImportedSource, or None if the file cannot be read
        """
        filepath = os.path.abspath(filepath)

        with self._lock:
            future = self._sources.get(filepath)
            owner = future is None
            if owner:
                future = Future()
                self._sources[filepath] = future

        if owner:
            try:
                future.set_result(self._load(filepath))
            except Exception as e:
                future.set_exception(e)
        return future.result()

    def get(self, filepath: str) -> ImportedSource | None:
        """Return an already loaded source without parsing."""
        with self._lock:
            future = self._sources.get(os.path.abspath(filepath))
        if future is None or not future.done():
            return None
        return future.result()

    def __contains__(self, filepath: str) -> bool:
        with self._lock:
            return os.path.abspath(filepath) in self._sources

    def __len__(self) -> int:
        with self._lock:
            return len(self._sources)

    def _load(self, filepath: str) -> ImportedSource | None:
        try:
            with open(filepath, encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot read %s: %s", filepath, e)
            return None

        tree = ts.parse_typescript(content)
        if tree.root_node.has_error:
            logger.debug("Syntax errors in %s, continuing with a partial tree", filepath)

        source = ImportedSource(
            filepath=filepath,
            tree=tree,
            imports=self._extract_imports(tree.root_node, os.path.dirname(filepath)),
        )
        for element in self._extract_classes(tree.root_node, filepath):
            source.elements[element.name] = element

        logger.debug("Parsed %s: %d classes, %d imports", filepath, len(source.elements), len(source.imports))
        return source

    def _extract_classes(self, root, filepath: str) -> list[EntityClass]:
        classes = []
        for class_node, export_node in ts.iter_top_level_classes(root):
            extends, implements = ts.heritage_names(class_node)
            element = EntityClass(
                name=ts.class_name(class_node),
                source_path=filepath,
                node=class_node,
                decorators=ts.class_decorator_names(class_node, export_node),
                extends=extends,
                implements=implements,
            )
            element.is_entity = self.classifier.is_entity(element)
            classes.append(element)
        return classes

    def _extract_imports(self, root, base_dir: str) -> dict[str, str]:
        imports: dict[str, str] = {}
        for specifier, names in ts.iter_imports(root):
            filepath = self.resolver.resolve_module(specifier, base_dir)
            for name in names:
                imports[name] = filepath
        return imports
