"""
Service-Component build pipeline.

Parses a header, resolves its clauses, emits a descriptor per component and
rewrites the header to point at the generated resources.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .diagnostics import Diagnostics
from .emitter import DescriptorEmitter
from .header import parse_clauses
from .ir import ResolvedComponent
from .resolver import ComponentResolver
from .sources import AnnotationReader, ClassIndex

logger = logging.getLogger(__name__)

SERVICE_COMPONENT = "Service-Component"


@dataclass
class BuildResult:
    """
    Result of one build.

    Attributes:
        resources: Generated descriptors keyed by resource path
        header: Rewritten Service-Component header
        components: Components the descriptors were generated from
        diagnostics: Everything recorded along the way
    """

    resources: dict[str, str] = field(default_factory=dict)
    header: str = ""
    components: list[ResolvedComponent] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def success(self) -> bool:
        """Whether the build finished without errors."""
        return not self.diagnostics.has_errors


def build_components(
    header: str,
    class_index: ClassIndex,
    annotation_reader: AnnotationReader | None = None,
) -> BuildResult:
    """
    Compile a Service-Component header.

    Args:
        header: Raw header value
        class_index: Classes available to the build
        annotation_reader: Reader for class metadata; defaults to the class
            index when it can read annotations itself

    Returns:
        BuildResult with descriptors, the rewritten header and diagnostics

    Raises:
        ParseError: If the header is malformed. Nothing is generated then.
    """
    if annotation_reader is None:
        if not isinstance(class_index, AnnotationReader):
            raise TypeError("annotation_reader is required for this class index")
        annotation_reader = class_index

    clauses = parse_clauses(header)

    result = BuildResult()
    resolution = ComponentResolver(class_index, annotation_reader, result.diagnostics).resolve(
        clauses
    )
    emitter = DescriptorEmitter(class_index, result.diagnostics)

    for component in resolution.components:
        with result.diagnostics.scoped(component.name):
            result.resources[component.resource_path] = emitter.emit(component)

    result.components = resolution.components
    result.header = resolution.rewritten_header()

    logger.info(
        "Generated %d descriptor(s) with %d error(s) and %d warning(s)",
        len(result.resources),
        len(result.diagnostics.errors),
        len(result.diagnostics.warnings),
    )
    return result
