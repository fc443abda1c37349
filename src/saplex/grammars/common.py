"""Rules and states shared by the SAPL family of grammars.

Both languages use JSON-style double-quoted strings, C-style comments and
JSON-style numbers, so the sub-states are built here once.
"""

from __future__ import annotations

from saplex.lexer import POP, Push, Rule, State
from saplex.tokens import Category

# Integer part, optional fraction, optional exponent (JSON number grammar)
UNSIGNED_NUMBER = r"(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?"

IDENTIFIER = r"[a-zA-Z_$][a-zA-Z0-9_$]*"

COMBINING_ALGORITHMS = (
    "deny-overrides",
    "permit-overrides",
    "first-applicable",
    "only-one-applicable",
    "deny-unless-permit",
    "permit-unless-deny",
)

WHITESPACE = Rule(r"\s+", Category.TEXT)
LINE_COMMENT = Rule(r"//.*$", Category.COMMENT_SINGLE)
BLOCK_COMMENT_OPEN = Rule(r"/\*", Category.COMMENT_MULTILINE, Push("multiline_comment"))
STRING_OPEN = Rule(r'"', Category.STRING_DOUBLE, Push("string"))


def string_state(*, unicode_escapes: bool = True) -> State:
    """Body of a double-quoted string, entered after the opening quote.

    Args:
        unicode_escapes: Recognize ``\\uXXXX`` as an escape
    """
    rules = [
        Rule(r'"', Category.STRING_DOUBLE, POP),
        Rule(r'\\["\\/bfnrt]', Category.STRING_ESCAPE),
    ]
    if unicode_escapes:
        rules.append(Rule(r"\\u[0-9a-fA-F]{4}", Category.STRING_ESCAPE))
    rules.append(Rule(r'[^"\\]+', Category.STRING_DOUBLE))
    return State("string", tuple(rules))


MULTILINE_COMMENT = State(
    "multiline_comment",
    (
        Rule(r"\*/", Category.COMMENT_MULTILINE, POP),
        Rule(r"[^*]+", Category.COMMENT_MULTILINE),
        Rule(r"\*", Category.COMMENT_MULTILINE),
    ),
)
