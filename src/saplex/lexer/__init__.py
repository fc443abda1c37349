"""Data-driven state-machine lexer.

Languages are described as data (a Grammar of named States, each an
ordered tuple of Rules); one generic Lexer runs any of them.

Architecture:
lexer/
├── __init__.py          # Re-exports
├── rules.py             # Rule, Push/Pop transitions, words() helper
├── grammar.py           # State and Grammar (validated, immutable)
└── core.py              # Lexer (match loop, state stack, merging)

Usage:
    >>> from saplex.grammars import SAPL
    >>> from saplex.lexer import Lexer
    >>> [t.category.qualname for t in Lexer("deny", SAPL).tokenize()]
    ['Keyword']

"""

from saplex.lexer.core import Lexer, merge_adjacent
from saplex.lexer.grammar import Grammar, State
from saplex.lexer.rules import POP, Pop, Push, Rule, Transition, words

__all__ = [
    "POP",
    "Grammar",
    "Lexer",
    "Pop",
    "Push",
    "Rule",
    "State",
    "Transition",
    "merge_adjacent",
    "words",
]
