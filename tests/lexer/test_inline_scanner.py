"""Tests for the inline token scanner."""

import pytest

from turbomd.lexer import scan_inline
from turbomd.tokens import BreakToken, LinkToken, ModifierFlag, ModifierKind, TextToken

BOLD = ModifierFlag(ModifierKind.BOLD)


class TestModifiers:
    def test_bold_run(self) -> None:
        assert scan_inline("a *b*") == (TextToken("a "), BOLD, TextToken("b"), BOLD)

    @pytest.mark.parametrize(
        "char,kind",
        [
            ("*", ModifierKind.BOLD),
            ("_", ModifierKind.CURSIVE),
            ("~", ModifierKind.STRIKE),
            ("`", ModifierKind.CODE),
        ],
    )
    def test_each_marker(self, char: str, kind: ModifierKind) -> None:
        assert scan_inline(char) == (ModifierFlag(kind),)


class TestEscapes:
    @pytest.mark.parametrize("char", ["*", "_", "~", "`", "-", "[", "\\"])
    def test_escaped_character_is_literal(self, char: str) -> None:
        assert scan_inline(f"x\\{char}y") == (TextToken(f"x{char}y"),)

    def test_unknown_escape_keeps_backslash(self) -> None:
        assert scan_inline("a\\qb") == (TextToken("a\\qb"),)

    def test_raw_text(self) -> None:
        assert scan_inline("\\{*raw* [x](y)} done") == (TextToken("*raw* [x](y) done"),)

    def test_unclosed_raw_is_literal(self) -> None:
        assert scan_inline("\\{open") == (TextToken("\\{open"),)

    def test_trailing_backslash_is_break(self) -> None:
        assert scan_inline("end\\") == (TextToken("end"), BreakToken())

    def test_backslash_newline_is_break(self) -> None:
        assert scan_inline("a\\\nb") == (TextToken("a"), BreakToken(), TextToken("b"))


class TestLinks:
    def test_link_with_alias(self) -> None:
        assert scan_inline("see [site](https://x.org)!") == (
            TextToken("see "),
            LinkToken(alias="site", target="https://x.org"),
            TextToken("!"),
        )

    def test_empty_alias_is_none(self) -> None:
        assert scan_inline("[](u)") == (LinkToken(alias=None, target="u"),)

    def test_alias_is_not_interpreted(self) -> None:
        assert scan_inline("[*a*](b)") == (LinkToken(alias="*a*", target="b"),)

    def test_unmatched_bracket_is_text(self) -> None:
        assert scan_inline("[a] b") == (TextToken("[a] b"),)

    def test_link_cannot_span_lines(self) -> None:
        tokens = scan_inline("[a\\\n](b)")
        assert not any(isinstance(token, LinkToken) for token in tokens)
