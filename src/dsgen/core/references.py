"""
Reference interpretation.

Every non-directive attribute of a component clause declares a service
reference::

    log=org.osgi.service.log.LogService            bind setLog / unbind unsetLog
    http/addHttp=org.osgi.service.http.HttpService* bind addHttp / unbind removeHttp
    cm/bindCm/unbindCm=...ConfigurationAdmin?       explicit unbind

The last character of the interface may be a cardinality suffix, and the
interface may be followed by a parenthesised target filter.
"""

from __future__ import annotations

import logging
import re

from . import directives
from .diagnostics import Diagnostics
from .ir import BindMethods, Cardinality, ReferenceDescriptor, ResolvedComponent, UnbindOrigin
from .sources import ClassIndex

logger = logging.getLogger(__name__)

METHOD_SEPARATOR = "/"

# interface(filter) -- the filter keeps its parentheses
REFERENCE_PATTERN = re.compile(r"([^(]+)(\(.+\))?")

# suffix -> (optional, multiple, dynamic)
CARDINALITY_SUFFIXES: dict[str, tuple[bool, bool, bool]] = {
    "?": (True, False, True),
    "+": (False, True, True),
    "*": (True, True, True),
    "~": (True, False, False),
}


def calculate_unbind(bind: str) -> str:
    """``addX`` unbinds with ``removeX``, anything else with ``unX``."""
    if bind.startswith("add") and len(bind) > 3:
        return "remove" + bind[3:]
    return "un" + bind


def derive_bind_methods(key: str) -> BindMethods:
    """
    Derive the reference name and bind/unbind methods from an attribute key.

    Args:
        key: ``name``, ``name/bind`` or ``name/bind/unbind``

    Returns:
        BindMethods with the unbind method tagged calculated or explicit
    """
    if METHOD_SEPARATOR in key:
        parts = key.split(METHOD_SEPARATOR)
        name, bind = parts[0], parts[1]
        if not bind:
            return BindMethods(name=name)
        if len(parts) > 2 and parts[2]:
            return BindMethods(
                name=name, bind=bind, unbind=parts[2], unbind_origin=UnbindOrigin.EXPLICIT
            )
        return BindMethods(
            name=name,
            bind=bind,
            unbind=calculate_unbind(bind),
            unbind_origin=UnbindOrigin.CALCULATED,
        )

    if key[:1].islower():
        bind = "set" + key[0].upper() + key[1:]
        return BindMethods(
            name=key, bind=bind, unbind="un" + bind, unbind_origin=UnbindOrigin.CALCULATED
        )

    return BindMethods(name=key)


def split_cardinality(interface: str) -> tuple[str, tuple[bool, bool, bool] | None]:
    """Strip a trailing cardinality suffix, returning the flags it implies."""
    flags = CARDINALITY_SUFFIXES.get(interface[-1:])
    if flags is None:
        return interface, None
    return interface[:-1], flags


def split_target(interface: str) -> tuple[str, str | None]:
    """Split ``Interface(filter)`` into the interface and the raw filter."""
    match = REFERENCE_PATTERN.fullmatch(interface)
    if match is None:
        return interface, None
    return match.group(1).strip(), match.group(2)


class ReferenceInterpreter:
    """Builds reference descriptors from a resolved component's attributes."""

    def __init__(self, class_index: ClassIndex, diagnostics: Diagnostics):
        self.class_index = class_index
        self.diagnostics = diagnostics

    def interpret(self, component: ResolvedComponent) -> list[ReferenceDescriptor]:
        attributes = component.attributes
        optional = set(directives.split_list(attributes.get(directives.OPTIONAL)))
        multiple = set(directives.split_list(attributes.get(directives.MULTIPLE)))
        dynamic = set(directives.split_list(attributes.get(directives.DYNAMIC)))

        references: list[ReferenceDescriptor] = []
        seen: set[str] = set()

        for key, value in attributes.items():
            if directives.is_directive(key):
                if key not in directives.COMPONENT_DIRECTIVES:
                    self.diagnostics.resolution_error(
                        "Unrecognized directive in Service-Component header: %s", key
                    )
                continue

            methods = derive_bind_methods(key)
            name = methods.name
            interface = value.strip()

            if not name or not interface:
                self.diagnostics.resolution_error(
                    "Invalid interface name for reference in Service-Component: %s=%s",
                    key,
                    value,
                )
                continue
            if name in seen:
                self.diagnostics.resolution_error("Duplicate reference name %s", name)
                continue
            seen.add(name)

            methods = self._check_methods(methods, component.methods)

            interface, flags = split_cardinality(interface)
            is_optional = name in optional
            is_multiple = name in multiple
            is_dynamic = name in dynamic
            if flags is not None:
                is_optional = is_optional or flags[0]
                is_multiple = is_multiple or flags[1]
                is_dynamic = is_dynamic or flags[2]

            interface, target = split_target(interface)

            if not self.class_index.class_exists(interface):
                self.diagnostics.resolution_error(
                    "Component definition refers to a class that is neither imported "
                    "nor contained: %s",
                    interface,
                )

            references.append(
                ReferenceDescriptor(
                    name=name,
                    interface=interface,
                    bind=methods.bind,
                    unbind=methods.unbind,
                    unbind_origin=methods.unbind_origin,
                    cardinality=Cardinality.of(is_optional, is_multiple),
                    dynamic=is_dynamic,
                    target=target,
                )
            )

        logger.debug("Component %s declares %d reference(s)", component.name, len(references))
        return references

    def _check_methods(self, methods: BindMethods, available: frozenset[str]) -> BindMethods:
        """
        Verify bind/unbind methods against the discovered method set.

        Nothing is checked when no methods were discovered. A missing
        calculated unbind method is dropped rather than reported.
        """
        if not available:
            return methods

        if methods.bind is not None and methods.bind not in available:
            self.diagnostics.resolution_error(
                "The bind method %s for %s not defined", methods.bind, methods.name
            )

        if methods.unbind is not None and methods.unbind not in available:
            if methods.unbind_calculated:
                return methods.model_copy(update={"unbind": None, "unbind_origin": None})
            self.diagnostics.resolution_error(
                "The unbind method %s for %s not defined", methods.unbind, methods.name
            )
        return methods


def interpret_references(
    component: ResolvedComponent, class_index: ClassIndex, diagnostics: Diagnostics
) -> list[ReferenceDescriptor]:
    """Convenience wrapper around :class:`ReferenceInterpreter`."""
    return ReferenceInterpreter(class_index, diagnostics).interpret(component)
