"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from saplex import SAPL, SAPL_TEST, Category, LexConfig, Lexer

GRAMMARS = [SAPL, SAPL_TEST]

# Characters that drive state changes in the SAPL family
SAPL_ALPHABET = st.sampled_from(
    list('<>|()[]{}"\\/*.,;:@^=!&+-%~ \n\t0123456789e')
    + ["policy", "permit", "deny", "where", "subject", "in", "true", "null", "set", "pip"]
    + ["static-pip", "deny-overrides", "scenario", "given", "x", "a.b", "é", "\x01"]
)
SAPL_LIKE = st.lists(SAPL_ALPHABET, max_size=80).map("".join)


def tokenize(source: str, grammar, merge: bool = True):
    return list(Lexer(source, grammar, LexConfig(merge_adjacent=merge)).tokenize())


class TestCoverage:
    """Token values always reconstruct the source exactly."""

    @pytest.mark.parametrize("grammar", GRAMMARS, ids=lambda g: g.tag)
    @given(source=st.text(max_size=500))
    @settings(max_examples=150)
    def test_arbitrary_text(self, grammar, source: str) -> None:
        tokens = tokenize(source, grammar)
        assert "".join(t.value for t in tokens) == source

    @pytest.mark.parametrize("grammar", GRAMMARS, ids=lambda g: g.tag)
    @given(source=SAPL_LIKE)
    @settings(max_examples=300)
    def test_language_like_text(self, grammar, source: str) -> None:
        for merge in (True, False):
            tokens = tokenize(source, grammar, merge)
            assert "".join(t.value for t in tokens) == source

    @pytest.mark.parametrize("grammar", GRAMMARS, ids=lambda g: g.tag)
    @given(source=SAPL_LIKE)
    @settings(max_examples=200)
    def test_offsets_are_contiguous(self, grammar, source: str) -> None:
        position = 0
        for token in tokenize(source, grammar):
            assert token.offset == position
            assert token.value, "tokens are never empty"
            position = token.end
        assert position == len(source)


class TestTermination:
    @pytest.mark.parametrize("grammar", GRAMMARS, ids=lambda g: g.tag)
    @given(source=SAPL_LIKE)
    @settings(max_examples=200)
    def test_raw_token_count_bounded_by_length(self, grammar, source: str) -> None:
        tokens = tokenize(source, grammar, merge=False)
        assert len(tokens) <= len(source)

    @pytest.mark.parametrize("grammar", GRAMMARS, ids=lambda g: g.tag)
    @given(source=st.text(alphabet="<>()|", max_size=200))
    @settings(max_examples=100)
    def test_unbalanced_brackets(self, grammar, source: str) -> None:
        lexer = Lexer(source, grammar)
        tokens = list(lexer.tokenize())
        assert "".join(t.value for t in tokens) == source
        assert lexer.stack[0] == grammar.root.name


class TestDeterminism:
    @pytest.mark.parametrize("grammar", GRAMMARS, ids=lambda g: g.tag)
    @given(source=SAPL_LIKE)
    @settings(max_examples=100)
    def test_repeated_lexing_identical(self, grammar, source: str) -> None:
        assert tokenize(source, grammar) == tokenize(source, grammar)

    @given(st.integers(min_value=2, max_value=6), SAPL_LIKE)
    @settings(max_examples=30)
    def test_n_times_lexing(self, n: int, source: str) -> None:
        first = tokenize(source, SAPL)
        for _ in range(n - 1):
            assert tokenize(source, SAPL) == first


class TestMergedShape:
    @pytest.mark.parametrize("grammar", GRAMMARS, ids=lambda g: g.tag)
    @given(source=SAPL_LIKE)
    @settings(max_examples=200)
    def test_no_adjacent_duplicates(self, grammar, source: str) -> None:
        tokens = tokenize(source, grammar)
        for left, right in zip(tokens, tokens[1:]):
            if left.category is Category.ERROR:
                continue
            assert left.category is not right.category

    @pytest.mark.parametrize("grammar", GRAMMARS, ids=lambda g: g.tag)
    @given(source=SAPL_LIKE)
    @settings(max_examples=200)
    def test_errors_are_single_characters(self, grammar, source: str) -> None:
        for token in tokenize(source, grammar):
            if token.category is Category.ERROR:
                assert len(token.value) == 1


class TestBoundaryConditions:
    @pytest.mark.parametrize("length", [0, 1, 2, 10, 100, 1000])
    def test_various_source_lengths(self, length: int) -> None:
        source = "a" * length
        tokens = tokenize(source, SAPL)
        assert "".join(t.value for t in tokens) == source

    @pytest.mark.parametrize("depth", [1, 10, 100])
    def test_deeply_nested_finders(self, depth: int) -> None:
        source = "<a(" * depth
        lexer = Lexer(source, SAPL)
        list(lexer.tokenize())
        # Each "<" enters the finder, but inside arguments "<" is unknown
        assert lexer.stack == ("root", "attribute_finder", "attribute_args")

    @pytest.mark.parametrize("line_ending", ["\n", "\r\n"])
    def test_line_ending_styles(self, line_ending: str) -> None:
        source = f"// a{line_ending}policy{line_ending}"
        tokens = tokenize(source, SAPL)
        assert tokens[0].category is Category.COMMENT_SINGLE
        assert "".join(t.value for t in tokens) == source
