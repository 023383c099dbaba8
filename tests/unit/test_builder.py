"""End-to-end tests for the build pipeline."""

from pathlib import Path

import pytest

from dsgen.core.builder import build_components
from dsgen.core.catalog import CatalogClassIndex
from dsgen.core.errors import ParseError
from dsgen.core.ir import ClassDescriptor, DiagnosticKind
from dsgen.core.output import HEADER_FILE, write_resources


class IndexWithoutReader:
    """A class index that cannot read annotations."""

    def find_annotated(self, pattern: str) -> list[ClassDescriptor]:
        return []

    def class_exists(self, name: str) -> bool:
        return True

    def method_names(self, class_name: str) -> set[str]:
        return set()


def test_header_rewrite(class_index: CatalogClassIndex) -> None:
    header = 'com.acme.Foo;provide:="com.acme.api.Greeting",OSGI-INF/legacy.xml;x=1'
    result = build_components(header, class_index)
    assert result.success
    assert list(result.resources) == ["OSGI-INF/com.acme.Foo.xml"]
    assert result.header == "OSGI-INF/com.acme.Foo.xml,OSGI-INF/legacy.xml;x=1"


def test_passthrough_clause_written_verbatim(class_index: CatalogClassIndex) -> None:
    header = 'OSGI-INF/legacy.xml;foo; x = "a b",com.acme.Foo'
    result = build_components(header, class_index)
    assert result.header == 'OSGI-INF/legacy.xml;foo; x = "a b",OSGI-INF/com.acme.Foo.xml'


def test_bare_key_is_directive(class_index: CatalogClassIndex) -> None:
    result = build_components("com.acme.Foo;immediate;bogus", class_index)
    xml = result.resources["OSGI-INF/com.acme.Foo.xml"]
    assert "<component name='com.acme.Foo' immediate='true'>" in xml
    assert "<reference" not in xml
    [error] = result.diagnostics.errors
    assert error.message == "Unrecognized directive in Service-Component header: bogus:"


def test_wildcard_expands_to_resources(class_index: CatalogClassIndex) -> None:
    result = build_components('com.acme.impl.*;properties:="region=eu"', class_index)
    assert result.header == "OSGI-INF/acme.clock.xml,OSGI-INF/com.acme.impl.Greeter.xml"

    greeter = result.resources["OSGI-INF/com.acme.impl.Greeter.xml"]
    assert "<implementation class='com.acme.impl.Greeter'/>" in greeter
    assert "<property name='region' value='eu'/>" in greeter
    assert "<property name='lang' value='en'/>" in greeter
    assert "bind='setLog' unbind='unsetLog'" in greeter

    clock = result.resources["OSGI-INF/acme.clock.xml"]
    assert "<component name='acme.clock' immediate='true'>" in clock
    assert "<implementation class='com.acme.impl.Clock'/>" in clock
    assert result.success


def test_directive_sets_reference(class_index: CatalogClassIndex) -> None:
    result = build_components("Foo;dynamic:=bar;optional:=bar;bar=com.X.I", class_index)
    xml = result.resources["OSGI-INF/Foo.xml"]
    assert "cardinality='0..1'" in xml
    assert "policy='dynamic'" in xml
    # Foo itself is not a known class
    assert not result.success


def test_wildcard_without_matches(empty_index: CatalogClassIndex) -> None:
    result = build_components("com.acme.*", empty_index)
    xml = result.resources["OSGI-INF/com.acme.*.xml"]
    assert "<implementation class='com.acme.*'/>" in xml
    [error] = result.diagnostics.of_kind(DiagnosticKind.RESOLUTION)
    assert "No implementation found" in error.message


def test_errors_do_not_stop_other_components(class_index: CatalogClassIndex) -> None:
    result = build_components("com.nope.Missing;bogus:=1,com.acme.Foo;activate:=start", class_index)
    assert list(result.resources) == [
        "OSGI-INF/com.nope.Missing.xml",
        "OSGI-INF/com.acme.Foo.xml",
    ]
    errors = result.diagnostics.errors
    assert [e.component for e in errors] == ["com.nope.Missing", "com.nope.Missing"]
    assert "v1.1.0" in result.resources["OSGI-INF/com.acme.Foo.xml"]


def test_parse_error_produces_nothing(class_index: CatalogClassIndex) -> None:
    with pytest.raises(ParseError):
        build_components('com.acme.Foo;x="open', class_index)


def test_empty_header(class_index: CatalogClassIndex) -> None:
    result = build_components("", class_index)
    assert result.resources == {}
    assert result.header == ""
    assert result.success


def test_annotation_reader_required() -> None:
    with pytest.raises(TypeError):
        build_components("com.acme.Foo", IndexWithoutReader())


def test_separate_annotation_reader(class_index: CatalogClassIndex) -> None:
    result = build_components("com.acme.Foo", IndexWithoutReader(), class_index)
    assert list(result.resources) == ["OSGI-INF/com.acme.Foo.xml"]


def test_write_resources(class_index: CatalogClassIndex, tmp_path: Path) -> None:
    result = build_components("com.acme.impl.Clock,OSGI-INF/legacy.xml", class_index)
    written = write_resources(result, tmp_path)

    descriptor = tmp_path / "OSGI-INF" / "acme.clock.xml"
    assert descriptor in written
    assert descriptor.read_text(encoding="utf-8") == result.resources["OSGI-INF/acme.clock.xml"]
    header_file = tmp_path / HEADER_FILE
    assert header_file.read_text(encoding="utf-8") == (
        "OSGI-INF/acme.clock.xml,OSGI-INF/legacy.xml\n"
    )
