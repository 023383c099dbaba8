"""Tests for the TOML class catalog."""

from pathlib import Path

import pytest

from dsgen.core.catalog import CatalogClassIndex, load_catalog
from dsgen.core.errors import AnnotationReadError, ConfigError
from dsgen.core.ir import ClassDescriptor
from dsgen.core.sources import AnnotationReader, ClassIndex

CATALOG = """
imports = ["org.osgi.service.log"]

[[classes]]
name = "com.acme.impl.Greeter"
methods = ["activate", "setLog", "unsetLog"]

[classes.component]
"provide:" = ["com.acme.api.Greeting", "com.acme.api.Other"]
"immediate:" = true
log = "org.osgi.service.log.LogService"

[[classes]]
name = "com.acme.api.Greeting"
"""


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "classes.toml"
    path.write_text(CATALOG, encoding="utf-8")
    return path


def test_load_catalog(catalog_file: Path) -> None:
    index = load_catalog(catalog_file)
    assert set(index.classes) == {"com.acme.impl.Greeter", "com.acme.api.Greeting"}
    greeter = index.classes["com.acme.impl.Greeter"]
    assert greeter.is_annotated
    assert greeter.component == {
        "provide:": "com.acme.api.Greeting,com.acme.api.Other",
        "immediate:": "true",
        "log": "org.osgi.service.log.LogService",
    }
    assert not index.classes["com.acme.api.Greeting"].is_annotated


def test_implements_collaborator_protocols(catalog_file: Path) -> None:
    index = load_catalog(catalog_file)
    assert isinstance(index, ClassIndex)
    assert isinstance(index, AnnotationReader)


def test_class_exists(catalog_file: Path) -> None:
    index = load_catalog(catalog_file)
    assert index.class_exists("com.acme.api.Greeting")
    assert index.class_exists("org.osgi.service.log.LogService")
    assert not index.class_exists("org.osgi.service.log.sub.Thing")
    assert not index.class_exists("com.acme.api.Missing")
    assert not index.class_exists("Unqualified")


def test_find_annotated(catalog_file: Path) -> None:
    index = load_catalog(catalog_file)
    assert [c.name for c in index.find_annotated("com.acme.*")] == ["com.acme.impl.Greeter"]
    assert [c.name for c in index.find_annotated("com.acme.impl.Greeter")] == [
        "com.acme.impl.Greeter"
    ]
    assert index.find_annotated("com.acme.api.*") == []


def test_method_names(catalog_file: Path) -> None:
    index = load_catalog(catalog_file)
    assert index.method_names("com.acme.impl.Greeter") == {"activate", "setLog", "unsetLog"}
    assert index.method_names("com.acme.Unknown") == set()


def test_read_plain_class_fails() -> None:
    index = CatalogClassIndex()
    with pytest.raises(AnnotationReadError):
        index.read_component_attributes(ClassDescriptor(name="a.B"))


def test_missing_catalog(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_catalog(tmp_path / "nope.toml")


def test_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "classes.toml"
    path.write_text("[[classes]\nname=", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid class catalog"):
        load_catalog(path)


def test_class_without_name(tmp_path: Path) -> None:
    path = tmp_path / "classes.toml"
    path.write_text('[[classes]]\nmethods = ["a"]\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="#1 has no name"):
        load_catalog(path)
