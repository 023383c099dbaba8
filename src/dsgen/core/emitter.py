"""
Component descriptor emission.

Renders a :class:`ResolvedComponent` as a Declarative Services XML document.
Element order is fixed (implementation, service, properties, references)
because some runtimes are order sensitive, and the output is byte-identical
for identical input.
"""

from __future__ import annotations

import logging
import re
from xml.sax.saxutils import escape

from . import directives
from .diagnostics import Diagnostics
from .ir import Cardinality, PropertyEntry, ReferenceDescriptor, ResolvedComponent
from .properties import parse_properties
from .references import ReferenceInterpreter
from .sources import ClassIndex
from .versioning import namespace_for

logger = logging.getLogger(__name__)

XML_DECLARATION = "<?xml version='1.0' encoding='utf-8'?>"
INDENT = "  "

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_ATTRIBUTE_ENTITIES = {"'": "&apos;", '"': "&quot;"}


def xml_attr(name: str, value: str) -> str:
    return f" {name}='{escape(value, _ATTRIBUTE_ENTITIES)}'"


class DescriptorEmitter:
    """
    Builds descriptor documents.

    Invalid attribute values are recorded as validation errors but still
    written, so the descriptor always reflects what the header said.
    """

    def __init__(self, class_index: ClassIndex, diagnostics: Diagnostics):
        self.class_index = class_index
        self.diagnostics = diagnostics
        self.references = ReferenceInterpreter(class_index, diagnostics)

    def emit(self, component: ResolvedComponent) -> str:
        """
        Render one component.

        Args:
            component: Resolved component

        Returns:
            The XML document, newline terminated
        """
        lines = [XML_DECLARATION, self._component_open(component)]
        lines.append(f"{INDENT}<implementation{xml_attr('class', component.implementation)}/>")
        lines.extend(self._service(component))
        lines.extend(
            self._property(entry)
            for entry in parse_properties(component.get(directives.PROPERTIES), self.diagnostics)
        )
        lines.extend(self._reference(ref) for ref in self.references.interpret(component))
        lines.append("</component>")

        logger.debug("Emitted descriptor for %s", component.name)
        return "\n".join(lines) + "\n"

    # -------------------------------------------------------------------------
    # Elements
    # -------------------------------------------------------------------------

    def _component_open(self, component: ResolvedComponent) -> str:
        parts = ["<component", xml_attr("name", component.name)]

        namespace = namespace_for(component.attributes, self.diagnostics)
        if namespace is not None:
            parts.append(xml_attr("xmlns", namespace))

        for key, attribute, allowed in directives.COMPONENT_ATTRIBUTES:
            value = component.get(key)
            if value is None:
                continue
            self._check_attribute(attribute, value, allowed)
            parts.append(xml_attr(attribute, value))

        parts.append(">")
        return "".join(parts)

    def _check_attribute(self, attribute: str, value: str, allowed: tuple[str, ...] | None) -> None:
        if allowed is None:
            return
        if allowed == (directives.IDENTIFIER,):
            if not IDENTIFIER_PATTERN.match(value):
                self.diagnostics.validation_error(
                    "Component attribute %s has value %s but is not a Java identifier",
                    attribute,
                    value,
                )
        elif value not in allowed:
            self.diagnostics.validation_error(
                "Component attribute %s has value %s but is not a member of %s",
                attribute,
                value,
                list(allowed),
            )

    def _service(self, component: ResolvedComponent) -> list[str]:
        provides = directives.split_list(component.get(directives.PROVIDE))
        servicefactory = directives.is_true(component.get(directives.SERVICEFACTORY))

        if servicefactory and directives.is_true(component.get(directives.IMMEDIATE)):
            self.diagnostics.warning(
                "For a Service Component, the immediate option and the servicefactory "
                "option are mutually exclusive for %s(%s)",
                component.name,
                component.implementation,
            )

        if not provides:
            if servicefactory:
                self.diagnostics.warning(
                    "The servicefactory:=true directive is set but no service is provided, "
                    "ignoring it"
                )
            return []

        opening = f"{INDENT}<service{xml_attr('servicefactory', 'true') if servicefactory else ''}>"
        lines = [opening]
        for interface in provides:
            lines.append(f"{INDENT * 2}<provide{xml_attr('interface', interface)}/>")
            if not self.class_index.class_exists(interface):
                self.diagnostics.resolution_error(
                    "Component definition provides a class that is neither imported "
                    "nor contained: %s",
                    interface,
                )
        lines.append(f"{INDENT}</service>")
        return lines

    def _property(self, entry: PropertyEntry) -> str:
        opening = f"{INDENT}<property{xml_attr('name', entry.name)}"
        if entry.type is not None:
            opening += xml_attr("type", entry.type)

        if not entry.is_multi_line:
            return f"{opening}{xml_attr('value', entry.values[0])}/>"

        body = "\n".join(escape(line) for line in entry.values)
        return f"{opening}>\n{body}\n{INDENT}</property>"

    def _reference(self, ref: ReferenceDescriptor) -> str:
        parts = [
            f"{INDENT}<reference",
            xml_attr("name", ref.name),
            xml_attr("interface", ref.interface),
        ]
        if ref.cardinality != Cardinality.MANDATORY_UNARY:
            parts.append(xml_attr("cardinality", ref.cardinality.value))
        if ref.bind is not None:
            parts.append(xml_attr("bind", ref.bind))
            if ref.unbind is not None:
                parts.append(xml_attr("unbind", ref.unbind))
        if ref.dynamic:
            parts.append(xml_attr("policy", "dynamic"))
        if ref.target is not None:
            parts.append(xml_attr("target", ref.target))
        parts.append("/>")
        return "".join(parts)


def emit_descriptor(
    component: ResolvedComponent, class_index: ClassIndex, diagnostics: Diagnostics
) -> str:
    """Convenience wrapper around :class:`DescriptorEmitter`."""
    return DescriptorEmitter(class_index, diagnostics).emit(component)
