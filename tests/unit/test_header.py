"""Tests for Service-Component header parsing and printing."""

import pytest

from dsgen.core.errors import ParseError
from dsgen.core.header import parse_clauses, parse_header, print_clauses


class TestParseHeader:
    """Well-formed headers."""

    def test_empty_header(self) -> None:
        assert parse_header("") == {}
        assert parse_header("   ") == {}

    def test_single_name(self) -> None:
        assert parse_header("com.acme.Foo") == {"com.acme.Foo": {}}

    def test_directives_keep_marker(self) -> None:
        clauses = parse_header("Foo;dynamic:=bar;optional:=bar;bar=com.X.I")
        assert clauses == {
            "Foo": {"dynamic:": "bar", "optional:": "bar", "bar": "com.X.I"},
        }

    def test_attribute_order_preserved(self) -> None:
        clauses = parse_header("Foo;z=1;a=2;m:=3")
        assert list(clauses["Foo"]) == ["z", "a", "m:"]

    def test_clause_order_preserved(self) -> None:
        clauses = parse_header("b.B,a.A,OSGI-INF/c.xml")
        assert list(clauses) == ["b.B", "a.A", "OSGI-INF/c.xml"]

    def test_whitespace_is_ignored(self) -> None:
        clauses = parse_header(" Foo ; a = b ,\n Bar ")
        assert clauses == {"Foo": {"a": "b"}, "Bar": {}}

    def test_quoted_value_keeps_separators(self) -> None:
        clauses = parse_header('Foo;properties:="a=1,b=2";provide:="x.A, x.B"')
        assert clauses["Foo"]["properties:"] == "a=1,b=2"
        assert clauses["Foo"]["provide:"] == "x.A, x.B"

    def test_escaped_quote(self) -> None:
        clauses = parse_header('Foo;x="say \\"hi\\""')
        assert clauses["Foo"]["x"] == 'say "hi"'

    def test_bare_key_is_flag(self) -> None:
        clauses = parse_header("Foo;noannotations:;x=y")
        assert clauses["Foo"] == {"noannotations:": "true", "x": "y"}

    def test_bare_key_becomes_directive(self) -> None:
        clauses = parse_header("Foo;immediate;enabled:")
        assert clauses["Foo"] == {"immediate:": "true", "enabled:": "true"}

    def test_clause_text_kept(self) -> None:
        first, second = parse_clauses(' OSGI-INF/a.xml; foo ;x="a, b" ,Bar')
        assert first.text == 'OSGI-INF/a.xml; foo ;x="a, b"'
        assert second.text == "Bar"

    def test_empty_value(self) -> None:
        assert parse_header("Foo;log=")["Foo"] == {"log": ""}

    def test_target_filter_value(self) -> None:
        clauses = parse_header("Foo;http=org.osgi.service.http.HttpService(name=main)*")
        assert clauses["Foo"]["http"] == "org.osgi.service.http.HttpService(name=main)*"

    def test_parse_clauses_returns_models(self) -> None:
        clauses = parse_clauses("OSGI-INF/a.xml,com.acme.Foo")
        assert clauses[0].is_resource_reference
        assert not clauses[1].is_resource_reference


class TestParseErrors:
    """Malformed headers are rejected as a whole."""

    @pytest.mark.parametrize(
        "header",
        [
            'Foo;x="abc',
            'Foo;x="abc\\',
            "Foo;;x=1",
            "Foo;=1",
            ",Foo",
            "Foo,",
            "a=b",
            'Foo;x="a"b',
            'Fo"o',
        ],
    )
    def test_malformed(self, header: str) -> None:
        with pytest.raises(ParseError):
            parse_header(header)

    def test_duplicate_clause(self) -> None:
        with pytest.raises(ParseError, match="Duplicate clause 'Foo'"):
            parse_header("Foo,Bar,Foo")

    def test_duplicate_attribute(self) -> None:
        with pytest.raises(ParseError, match="Duplicate attribute 'a'"):
            parse_header("Foo;a=1;a=2")

    def test_error_points_at_column(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_header('Foo;x="abc')
        context = exc_info.value.context
        assert context is not None
        assert context.column == 7
        assert "      ^" in context.format()

    def test_error_on_later_line(self) -> None:
        with pytest.raises(ParseError, match=r"\(line 2, column 7\)") as exc_info:
            parse_header('Foo;a=1,\nBar;x="open')
        context = exc_info.value.context
        assert context is not None
        assert (context.line, context.column) == (2, 7)
        assert context.format() == '  Bar;x="open\n        ^'

    def test_bare_key_duplicates_directive(self) -> None:
        with pytest.raises(ParseError, match="Duplicate attribute 'immediate:'"):
            parse_header("Foo;immediate;immediate:=false")


class TestPrintClauses:
    """Printing clauses back into header syntax."""

    def test_generated_resources(self) -> None:
        header = print_clauses({"OSGI-INF/a.xml": {}, "OSGI-INF/b.xml": {}})
        assert header == "OSGI-INF/a.xml,OSGI-INF/b.xml"

    def test_quotes_when_needed(self) -> None:
        header = print_clauses({"Foo": {"provide:": "a.A,b.B", "x": "y", "e": ""}})
        assert header == 'Foo;provide:="a.A,b.B";x=y;e=""'

    def test_reparse(self) -> None:
        clauses = {
            "OSGI-INF/legacy.xml": {"x": "1"},
            "Foo": {"properties:": 'a=1,b="2"', "log": "org.X.Log"},
        }
        assert parse_header(print_clauses(clauses)) == clauses
