"""
Component metadata sources.

A component's attributes can come from the manifest header clause or from
metadata attached to a discovered class. Both are exposed through
:class:`MetadataSource` and combined with :func:`merge_sources`, where the
manifest wins every conflict except ``properties:``, which is concatenated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from . import directives
from .ir import ClassDescriptor, ComponentOrigin

# =============================================================================
# Collaborator Protocols
# =============================================================================


@runtime_checkable
class ClassIndex(Protocol):
    """Read-only view of the classes available to a build."""

    def find_annotated(self, pattern: str) -> list[ClassDescriptor]:
        """Classes carrying component metadata whose name matches ``pattern``."""
        ...

    def class_exists(self, name: str) -> bool:
        """Whether ``name`` is contained in or imported by the build."""
        ...

    def method_names(self, class_name: str) -> set[str]:
        """Method names of a class; empty when unknown."""
        ...


@runtime_checkable
class AnnotationReader(Protocol):
    """Extracts header-vocabulary attributes from class metadata."""

    def read_component_attributes(self, descriptor: ClassDescriptor) -> dict[str, str]:
        ...


# =============================================================================
# Metadata Sources
# =============================================================================


class MetadataSource(ABC):
    """Something that contributes attributes to a component."""

    origin: ComponentOrigin

    @abstractmethod
    def attributes(self) -> dict[str, str]:
        """Return a fresh, mutable copy of the contributed attributes."""


class ManifestSource(MetadataSource):
    """Attributes written on the header clause."""

    origin = ComponentOrigin.MANIFEST

    def __init__(self, attributes: Mapping[str, str]):
        self._attributes = dict(attributes)

    def attributes(self) -> dict[str, str]:
        return dict(self._attributes)


class AnnotationSource(MetadataSource):
    """Attributes derived from a discovered class's component metadata."""

    origin = ComponentOrigin.ANNOTATION

    def __init__(self, reader: AnnotationReader, descriptor: ClassDescriptor):
        self.reader = reader
        self.descriptor = descriptor

    def attributes(self) -> dict[str, str]:
        """
        Read the class metadata.

        Raises:
            AnnotationReadError: If the reader cannot extract the metadata
        """
        return dict(self.reader.read_component_attributes(self.descriptor))

    @property
    def component_name(self) -> str:
        """Name declared by the metadata, falling back to the class name."""
        return self.attributes().get(directives.NAME) or self.descriptor.name


def merge_properties(*values: str | None) -> str:
    """Concatenate ``properties:`` values, dropping empty ones."""
    return ",".join(value for value in values if value)


def merge_sources(manifest: MetadataSource, annotation: MetadataSource) -> dict[str, str]:
    """
    Overlay manifest attributes on annotation-derived ones.

    ``properties:`` from both sources is concatenated, manifest first.
    Neither source is modified.
    """
    overrides = manifest.attributes()
    merged = annotation.attributes()

    properties = merge_properties(
        overrides.pop(directives.PROPERTIES, None),
        merged.pop(directives.PROPERTIES, None),
    )
    if properties:
        merged[directives.PROPERTIES] = properties

    merged.update(overrides)
    return merged
