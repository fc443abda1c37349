"""Exception classes for saplex.

Only invalid *requests* raise. Malformed source content never does: an
unmatched character becomes an ``Error`` token and lexing continues.
"""

from __future__ import annotations


class SaplexError(Exception):
    """Base exception for all saplex errors.

    Subclass this for specific error categories.
    """

    pass


class UnknownGrammarError(SaplexError, LookupError):
    """No grammar is registered under the requested language tag.

    The caller decides the fallback policy; the lexer never guesses.
    """

    def __init__(self, tag: str) -> None:
        """Initialize with the tag that failed to resolve.

        Args:
            tag: Language tag, alias, filename or mimetype that was looked up
        """
        self.tag = tag
        super().__init__(f"No grammar registered for {tag!r}")


class GrammarDefinitionError(SaplexError):
    """A grammar definition is internally inconsistent.

    Raised at construction time, e.g. when a rule pushes a state the
    grammar does not define, or defines the same state twice.
    """

    def __init__(
        self,
        grammar: str,
        message: str,
        state: str | None = None,
    ) -> None:
        """Initialize grammar definition error.

        Args:
            grammar: Name of the grammar being built (e.g., "SAPL")
            message: Description of the problem
            state: Name of the offending state (optional)
        """
        self.grammar = grammar
        self.state = state

        location = f" (state {state!r})" if state else ""
        super().__init__(f"Grammar '{grammar}'{location}: {message}")
