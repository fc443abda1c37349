"""Rules and state transitions.

A Rule pairs a regular expression with the category it emits and an
optional transition applied to the lexer's state stack on match.

Patterns use ASCII character classes and multi-line anchors, so ``\\d``
never matches non-ASCII digits and ``$`` matches at every line end.
Every built-in pattern is free of nested quantifiers, which keeps each
match linear in the length of the lexeme.

Thread Safety:
Rules and transitions are frozen and hold only compiled patterns.
Safe to share across threads.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from saplex.tokens import Category

PATTERN_FLAGS = re.ASCII | re.MULTILINE


@dataclass(frozen=True, slots=True)
class Push:
    """Push the named state onto the stack."""

    state: str


@dataclass(frozen=True, slots=True)
class Pop:
    """Pop the active state (never pops the root)."""


POP = Pop()

Transition = Push | Pop


@dataclass(frozen=True, slots=True)
class Rule:
    """One (pattern, category, transition) entry of a lexer state.

    Attributes:
        pattern: Regular expression source
        category: Category emitted for the matched lexeme
        transition: Stack change applied on match (None for no change)
        regex: Compiled pattern (derived from ``pattern``)

    Examples:
        >>> rule = Rule(r"\\s+", Category.TEXT)
        >>> rule.match("  b")
        2
        >>> rule.match("a  b") is None
        True

    """

    pattern: str
    category: Category
    transition: Transition | None = None
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", re.compile(self.pattern, PATTERN_FLAGS))

    def match(self, rest: str) -> int | None:
        """Match anchored at the start of the remaining input.

        The cursor is the start of ``rest``, so ``\\b`` and lookbehinds do
        not see the character before it: ``in`` right after ``1`` still
        starts a word.

        Args:
            rest: Source text from the cursor to the end

        Returns:
            Length of the match, or None if the rule does not apply.
        """
        m = self.regex.match(rest)
        if m is None:
            return None
        return m.end()

    @property
    def push_target(self) -> str | None:
        """Name of the state this rule pushes, if any."""
        if isinstance(self.transition, Push):
            return self.transition.state
        return None


def words(*names: str) -> str:
    """Build a word-bounded alternation pattern for keyword lists.

    Longer names come first so that ``deny-overrides`` wins over a
    shorter prefix in the same group.

    >>> words("set", "policy")
    '\\\\b(?:policy|set)\\\\b'
    """
    ordered = sorted(names, key=lambda n: (-len(n), n))
    return r"\b(?:" + "|".join(re.escape(n) for n in ordered) + r")\b"
