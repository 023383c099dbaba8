"""
TOML-backed class catalog.

Serves as both the class index and the annotation reader for command-line
builds. A catalog lists the classes contained in the build, the packages it
imports, and the component metadata attached to each class::

    imports = ["org.osgi.service.log"]

    [[classes]]
    name = "com.acme.impl.Greeter"
    methods = ["activate", "setLog", "unsetLog"]

    [classes.component]
    "provide:" = "com.acme.api.Greeting"
    log = "org.osgi.service.log.LogService"
"""

from __future__ import annotations

import fnmatch
import logging
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .errors import AnnotationReadError, ConfigError
from .ir import ClassDescriptor

logger = logging.getLogger(__name__)


class CatalogClassIndex:
    """
    In-memory class index.

    A class exists if the catalog contains it or if its package is imported.
    """

    def __init__(self, classes: Iterable[ClassDescriptor] = (), imports: Iterable[str] = ()):
        self.classes: dict[str, ClassDescriptor] = {c.name: c for c in classes}
        self.imports: frozenset[str] = frozenset(imports)

    @classmethod
    def from_descriptors(
        cls, *descriptors: ClassDescriptor, imports: Iterable[str] = ()
    ) -> CatalogClassIndex:
        return cls(descriptors, imports)

    def find_annotated(self, pattern: str) -> list[ClassDescriptor]:
        matches = [
            descriptor
            for name, descriptor in sorted(self.classes.items())
            if descriptor.is_annotated and fnmatch.fnmatchcase(name, pattern)
        ]
        logger.debug("Pattern %s matched %d annotated class(es)", pattern, len(matches))
        return matches

    def class_exists(self, name: str) -> bool:
        if name in self.classes:
            return True
        package = name.rpartition(".")[0]
        return bool(package) and package in self.imports

    def method_names(self, class_name: str) -> set[str]:
        descriptor = self.classes.get(class_name)
        if descriptor is None:
            return set()
        return set(descriptor.methods)

    def read_component_attributes(self, descriptor: ClassDescriptor) -> dict[str, str]:
        if descriptor.component is None:
            raise AnnotationReadError(f"Class {descriptor.name} has no component metadata")
        return dict(descriptor.component)


def _stringify(value: Any) -> str:
    """Render a TOML value in header syntax."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(_stringify(item) for item in value)
    return str(value)


def _load_class(entry: dict[str, Any], index: int) -> ClassDescriptor:
    name = entry.get("name")
    if not name:
        raise ConfigError(f"Catalog class entry #{index + 1} has no name")

    component = entry.get("component")
    if component is not None:
        if not isinstance(component, dict):
            raise ConfigError(f"Catalog class {name}: 'component' must be a table")
        component = {key: _stringify(value) for key, value in component.items()}

    return ClassDescriptor(
        name=name,
        methods=frozenset(entry.get("methods", [])),
        component=component,
    )


def load_catalog(path: Path) -> CatalogClassIndex:
    """
    Load a class catalog from a TOML file.

    Raises:
        ConfigError: If the file is missing or malformed
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Class catalog not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid class catalog {path}: {e}") from e

    classes = [_load_class(entry, i) for i, entry in enumerate(data.get("classes", []))]
    logger.debug("Loaded %d class(es) from %s", len(classes), path)
    return CatalogClassIndex(classes, data.get("imports", []))
