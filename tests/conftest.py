"""Shared pytest fixtures for dsgen tests."""

import pytest

from dsgen.core.catalog import CatalogClassIndex
from dsgen.core.diagnostics import Diagnostics
from dsgen.core.ir import ClassDescriptor


@pytest.fixture
def diagnostics() -> Diagnostics:
    """Return an empty diagnostic collector."""
    return Diagnostics()


@pytest.fixture
def greeter_class() -> ClassDescriptor:
    """An annotated class with discovered methods."""
    return ClassDescriptor(
        name="com.acme.impl.Greeter",
        methods=frozenset({"activate", "setLog", "unsetLog", "addHttp", "removeHttp"}),
        component={
            "provide:": "com.acme.api.Greeting",
            "properties:": "lang=en",
            "log": "org.osgi.service.log.LogService",
        },
    )


@pytest.fixture
def clock_class() -> ClassDescriptor:
    """An annotated class that names its own component."""
    return ClassDescriptor(
        name="com.acme.impl.Clock",
        component={"name:": "acme.clock", "immediate:": "true"},
    )


@pytest.fixture
def class_index(greeter_class: ClassDescriptor, clock_class: ClassDescriptor) -> CatalogClassIndex:
    """Return a class index with a few contained classes and imported packages."""
    return CatalogClassIndex.from_descriptors(
        greeter_class,
        clock_class,
        ClassDescriptor(name="com.acme.Foo"),
        ClassDescriptor(name="com.acme.api.Greeting"),
        imports=["org.osgi.service.log", "org.osgi.service.http", "com.X"],
    )


@pytest.fixture
def empty_index() -> CatalogClassIndex:
    """Return a class index that knows no classes."""
    return CatalogClassIndex()
