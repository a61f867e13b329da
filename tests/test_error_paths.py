"""Error-path and malformed input tests."""

import pytest

from turbomd import TurboMarkdown, parse, render
from turbomd.errors import (
    IncludeError,
    ParseError,
    RenderError,
    StructuralError,
    TurboError,
    UnsupportedConstructError,
    UnterminatedConstructError,
)
from turbomd.events import ListKind
from turbomd.location import SourceLocation


class TestParseErrorFormatting:
    def test_message_only(self) -> None:
        err = ParseError("unexpected line")
        assert str(err) == "unexpected line"
        assert err.lineno is None
        assert err.col_offset is None

    def test_with_line_and_column(self) -> None:
        err = ParseError("bad marker", lineno=10, col_offset=5)
        assert str(err) == "10:5 bad marker"

    def test_with_source_file(self) -> None:
        err = ParseError("bad marker", lineno=2, source_file="doc.tmd")
        assert str(err) == "doc.tmd:2 bad marker"

    def test_at_location(self) -> None:
        err = StructuralError.at("oops", SourceLocation(4, 2, "a.tmd"))
        assert isinstance(err, StructuralError)
        assert (err.lineno, err.col_offset, err.source_file) == (4, 2, "a.tmd")

    def test_at_without_location(self) -> None:
        assert str(UnsupportedConstructError.at("oops", None)) == "oops"


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [StructuralError, UnterminatedConstructError, UnsupportedConstructError],
    )
    def test_parse_errors(self, error: type[ParseError]) -> None:
        assert issubclass(error, ParseError)
        assert issubclass(error, TurboError)

    def test_include_and_render_errors(self) -> None:
        assert issubclass(IncludeError, TurboError)
        assert issubclass(RenderError, TurboError)
        assert str(IncludeError("a/b", "gone")) == "Include 'a/b': gone"


class TestMalformedInput:
    def test_indented_root_text(self) -> None:
        with pytest.raises(StructuralError) as exc_info:
            parse("fine\n   stray", source_file="doc.tmd")
        assert exc_info.value.lineno == 2
        assert exc_info.value.source_file == "doc.tmd"

    def test_unterminated_fence(self) -> None:
        with pytest.raises(UnterminatedConstructError, match="never closed"):
            parse("::: rust\nfn main() {}")

    def test_unknown_list_marker(self) -> None:
        with pytest.raises(UnsupportedConstructError):
            parse("-z nope")

    def test_unknown_marker_from_kind(self) -> None:
        with pytest.raises(UnsupportedConstructError):
            ListKind.from_marker("#")

    def test_unterminated_modifier_is_not_an_error(self) -> None:
        assert render(parse("*open")) == "<p><b>open</b></p>\n"

    def test_no_partial_output(self) -> None:
        md = TurboMarkdown()
        with pytest.raises(RenderError):
            md("# Title\n@[missing]")
