"""Property-based tests for lexer and parse invariants using Hypothesis."""

from hypothesis import given, settings
from hypothesis import strategies as st

import turbomd
from turbomd.errors import ParseError, TurboError
from turbomd.lexer import Lexer, scan_inline, split_lines
from turbomd.tokens import TextToken

MARKUP = "-*_~`[]()\\{}#@:xa1iq \n"


class TestLexerInvariants:
    @given(st.text(alphabet=MARKUP, max_size=200))
    @settings(max_examples=200)
    def test_never_more_events_than_lines(self, source: str) -> None:
        """Every event owns at least one physical line."""
        try:
            events = list(Lexer(source).tokenize())
        except ParseError:
            return
        assert len(events) <= len(split_lines(source))

    @given(st.text(alphabet=MARKUP, max_size=200))
    @settings(max_examples=200)
    def test_parse_fails_only_with_turbo_errors(self, source: str) -> None:
        """Malformed input raises a TurboError, never anything else."""
        try:
            root = turbomd.parse(source)
            turbomd.render(root)
        except TurboError:
            pass

    @given(st.text(alphabet=st.characters(exclude_characters="*_~`[\\\n"), max_size=100))
    @settings(max_examples=100)
    def test_plain_text_is_a_single_token(self, text: str) -> None:
        tokens = scan_inline(text)
        if text:
            assert tokens == (TextToken(text),)
        else:
            assert tokens == ()
