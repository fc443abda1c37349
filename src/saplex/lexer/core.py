"""Stack-based state-machine lexer.

Drives a Grammar over a source string: at each cursor position the rules of
the active state are tried in order and the first match wins. Matches emit
tokens and may push or pop states.

Guarantees:
- Coverage: the token values concatenate back to the source.
- Termination: every iteration advances the cursor, except zero-width
  transitions, which are bounded per offset.
- Tolerance: malformed input never raises; unmatched characters become
  single-character Error tokens.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; the Grammar is shared read-only.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from saplex.config import LexConfig, get_lex_config
from saplex.lexer.grammar import Grammar
from saplex.lexer.rules import Pop, Push, Transition
from saplex.profiling import get_lex_accumulator
from saplex.tokens import Category, Token
from saplex.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer:
    """State-machine lexer over one source string.

    Usage:
        >>> from saplex.grammars import SAPL
        >>> for token in Lexer('policy "p" permit', SAPL).tokenize():
        ...     print(token)
        Token(Keyword, 'policy', 0)
        Token(Text, ' ', 6)
        Token(String.Double, '"p"', 7)
        Token(Text, ' ', 10)
        Token(Keyword, 'permit', 11)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_grammar",
        "_config",
        "_pos",
        "_stack",  # State names, root at index 0
        "_error_count",
    )

    def __init__(
        self,
        source: str,
        grammar: Grammar,
        config: LexConfig | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Source text to lex
            grammar: Grammar of the source language
            config: Explicit configuration (defaults to the active context config)
        """
        self._source = source
        self._source_len = len(source)
        self._grammar = grammar
        self._config = config if config is not None else get_lex_config()
        self._pos = 0
        self._stack: list[str] = [grammar.root.name]
        self._error_count = 0

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def position(self) -> int:
        """Current cursor offset."""
        return self._pos

    @property
    def stack(self) -> tuple[str, ...]:
        """Snapshot of the state stack, root first."""
        return tuple(self._stack)

    @property
    def error_count(self) -> int:
        """Unmatched characters seen so far."""
        return self._error_count

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            Token objects in source order, covering the whole input.

        Complexity: O(n * rules-per-state) where n = len(source)
        """
        tokens = self._scan()
        if self._config.merge_adjacent:
            tokens = merge_adjacent(tokens)

        count = 0
        for token in tokens:
            count += 1
            yield token

        logger.debug(
            "Lexed %d chars as %s: %d tokens, %d unmatched",
            self._source_len,
            self._grammar.name,
            count,
            self._error_count,
        )
        acc = get_lex_accumulator()
        if acc is not None:
            acc.record_lex(
                source_length=self._source_len,
                token_count=count,
                error_count=self._error_count,
            )

    def _scan(self) -> Iterator[Token]:
        """Run the state machine, yielding one token per consuming match."""
        source = self._source
        source_len = self._source_len
        states = self._grammar.states
        trace = self._config.trace
        max_zero_width = self._config.max_zero_width_steps
        zero_width_steps = 0

        while self._pos < source_len:
            pos = self._pos
            found = states[self._stack[-1]].match(source, pos)

            if found is None:
                zero_width_steps = 0
                yield self._unmatched(pos)
                continue

            rule, end = found
            if end == pos:
                # Zero-width: transition only, bounded per offset
                zero_width_steps += 1
                if zero_width_steps > max_zero_width:
                    zero_width_steps = 0
                    yield self._unmatched(pos)
                    continue
                self._apply(rule.transition)
                continue

            zero_width_steps = 0
            token = Token(rule.category, source[pos:end], pos)
            self._pos = end
            self._apply(rule.transition)
            if trace is not None:
                trace(token.category, token.value, pos, len(self._stack))
            yield token

    def _unmatched(self, pos: int) -> Token:
        """Emit a one-character Error token and step past it."""
        char = self._source[pos]
        logger.debug(
            "No rule in state %r matches %r at offset %d",
            self._stack[-1],
            char,
            pos,
        )
        self._error_count += 1
        self._pos = pos + 1
        trace = self._config.trace
        if trace is not None:
            trace(Category.ERROR, char, pos, len(self._stack))
        return Token(Category.ERROR, char, pos)

    def _apply(self, transition: Transition | None) -> None:
        """Apply a stack transition."""
        if transition is None:
            return
        if isinstance(transition, Push):
            self._stack.append(transition.state)
        elif isinstance(transition, Pop):
            if len(self._stack) > 1:
                self._stack.pop()
            else:
                logger.debug("Ignoring pop at root state of %s", self._grammar.name)


def merge_adjacent(tokens: Iterable[Token]) -> Iterator[Token]:
    """Merge neighbouring tokens that share a category.

    Error tokens are never merged, so each unmatched character stays
    visible as its own token.

    Args:
        tokens: Token stream in source order

    Yields:
        Tokens with runs of equal categories collapsed
    """
    category: Category | None = None
    offset = 0
    parts: list[str] = []

    for token in tokens:
        if token.category is category and category is not Category.ERROR:
            parts.append(token.value)
            continue
        if category is not None:
            yield Token(category, "".join(parts), offset)
        category = token.category
        offset = token.offset
        parts = [token.value]

    if category is not None:
        yield Token(category, "".join(parts), offset)
