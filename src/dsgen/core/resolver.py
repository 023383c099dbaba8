"""
Component resolution.

Turns header clauses into resolved components:

- ``OSGI-INF/foo.xml`` style clauses are external descriptors and pass
  through untouched.
- Any other clause name is a class-name pattern. Annotated classes matching
  the pattern each become a component, with the clause attributes laid on
  top of the class metadata. Without matches (or with
  ``noannotations:=true``) the clause itself becomes one component.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from . import directives
from .diagnostics import Diagnostics
from .errors import AnnotationReadError
from .header import print_clauses
from .ir import (
    EMPTY_ATTRIBUTES,
    ClassDescriptor,
    ComponentClause,
    ComponentOrigin,
    ResolvedComponent,
)
from .sources import AnnotationReader, AnnotationSource, ClassIndex, ManifestSource, merge_sources

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """
    Result of resolving a header.

    Attributes:
        header_clauses: Clauses of the rewritten header, keyed by resource
            path. Generated components map to an empty attribute set.
        components: Components that need a generated descriptor
        passthrough_text: Clause text of external descriptor references as
            written, keyed by resource path
    """

    header_clauses: dict[str, Mapping[str, str]] = field(default_factory=dict)
    components: list[ResolvedComponent] = field(default_factory=list)
    passthrough_text: dict[str, str] = field(default_factory=dict)

    def final_attributes(self) -> dict[str, Mapping[str, str]]:
        """Resource path to the attributes each resource was built from."""
        generated = {c.resource_path: c.attributes for c in self.components}
        return {path: generated.get(path, attrs) for path, attrs in self.header_clauses.items()}

    def rewritten_header(self) -> str:
        """
        Render the rewritten header.

        Generated components appear as their resource path; external
        references keep the clause text they were written with.
        """
        parts = []
        for path, attributes in self.header_clauses.items():
            text = self.passthrough_text.get(path)
            parts.append(text if text else print_clauses({path: attributes}))
        return ",".join(parts)


class ComponentResolver:
    """Resolves header clauses against a class index."""

    def __init__(
        self,
        class_index: ClassIndex,
        annotation_reader: AnnotationReader,
        diagnostics: Diagnostics,
    ):
        self.class_index = class_index
        self.annotation_reader = annotation_reader
        self.diagnostics = diagnostics

    def resolve(self, clauses: Iterable[ComponentClause]) -> Resolution:
        resolution = Resolution()
        for clause in clauses:
            with self.diagnostics.scoped(clause.key):
                self._resolve_clause(clause, resolution)
        return resolution

    def _resolve_clause(self, clause: ComponentClause, resolution: Resolution) -> None:
        if clause.is_resource_reference:
            logger.debug("Passing through descriptor reference %s", clause.key)
            resolution.header_clauses[clause.key] = dict(clause.attributes)
            resolution.passthrough_text[clause.key] = clause.text
            return

        manifest = ManifestSource(clause.attributes)

        matches: list[ClassDescriptor] = []
        if not directives.is_true(clause.attributes.get(directives.NOANNOTATIONS)):
            matches = self.class_index.find_annotated(clause.key)

        if not matches:
            component = self._make_component(
                clause.key, clause.key, manifest.attributes(), ComponentOrigin.MANIFEST
            )
            self._add(resolution, component)
            return

        for descriptor in matches:
            annotation = AnnotationSource(self.annotation_reader, descriptor)
            try:
                name = annotation.component_name
                attributes = merge_sources(manifest, annotation)
            except AnnotationReadError as e:
                self.diagnostics.resolution_error(
                    "Invalid Service-Component header: %s %s, throws %s",
                    clause.key,
                    clause.attributes,
                    e.message,
                )
                continue

            component = self._make_component(
                name, descriptor.name, attributes, ComponentOrigin.ANNOTATION
            )
            self._add(resolution, component)

    def _make_component(
        self,
        name: str,
        implementation: str,
        attributes: dict[str, str],
        origin: ComponentOrigin,
    ) -> ResolvedComponent:
        """
        Build a component, applying ``name:`` and ``implementation:`` overrides.

        ``implementation`` is the class the clause or annotation was found on;
        renaming the component does not change it. The discovered methods are
        those of the final implementation class plus any ``.descriptors:``
        list.
        """
        name = attributes.get(directives.NAME) or name
        implementation = attributes.get(directives.IMPLEMENTATION) or implementation

        methods = set(self.class_index.method_names(implementation))
        methods.update(directives.split_list(attributes.get(directives.DESCRIPTORS)))

        if not self.class_index.class_exists(implementation):
            self.diagnostics.resolution_error(
                "No implementation found for Service-Component entry: %s", implementation
            )

        return ResolvedComponent(
            name=name,
            implementation=implementation,
            attributes=attributes,
            methods=frozenset(methods),
            origin=origin,
        )

    def _add(self, resolution: Resolution, component: ResolvedComponent) -> None:
        path = component.resource_path
        if path in resolution.header_clauses:
            self.diagnostics.resolution_error(
                "Duplicate component %s, only the first definition is generated", component.name
            )
            return
        logger.debug("Resolved component %s (%s)", component.name, component.origin.value)
        resolution.header_clauses[path] = EMPTY_ATTRIBUTES
        resolution.components.append(component)


def resolve_clauses(
    clauses: Iterable[ComponentClause],
    class_index: ClassIndex,
    annotation_reader: AnnotationReader,
    diagnostics: Diagnostics,
) -> Resolution:
    """Convenience wrapper around :class:`ComponentResolver`."""
    return ComponentResolver(class_index, annotation_reader, diagnostics).resolve(clauses)
