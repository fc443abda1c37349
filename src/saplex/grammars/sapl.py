"""SAPL — Streaming Attribute Policy Language.

States:
- root: policy bodies, expressions, operators
- string / multiline_comment: shared sub-states
- attribute_finder: ``<name.path(args)>`` and ``|<...>`` lookups
- attribute_args: the argument list of an attribute finder

Rule order is the only disambiguation. Keyword and constant rules precede
the identifier rules; the function-name rules use a lookahead so the ``(``
is left for the punctuation rule; the bare identifier rule comes last of
the names and catches everything else.
"""

from __future__ import annotations

from saplex.grammars.common import (
    BLOCK_COMMENT_OPEN,
    COMBINING_ALGORITHMS,
    IDENTIFIER,
    LINE_COMMENT,
    MULTILINE_COMMENT,
    STRING_OPEN,
    UNSIGNED_NUMBER,
    WHITESPACE,
    string_state,
)
from saplex.lexer import POP, Grammar, Push, Rule, State, words
from saplex.tokens import Category

KEYWORDS = (
    "policy",
    "set",
    "permit",
    "deny",
    "where",
    "var",
    "import",
    "as",
    "schema",
    "enforced",
    "obligation",
    "advice",
    "transform",
    "for",
    "each",
)

LITERALS = ("true", "false", "null", "undefined")

BUILTINS = ("subject", "action", "resource", "environment")

# Reserved words: keywords plus literal keywords
SAPL_KEYWORDS: frozenset[str] = frozenset(KEYWORDS + LITERALS)

NUMBER = Rule(r"-?" + UNSIGNED_NUMBER, Category.NUMBER)

ROOT = State(
    "root",
    (
        WHITESPACE,
        LINE_COMMENT,
        BLOCK_COMMENT_OPEN,
        STRING_OPEN,
        NUMBER,
        Rule(words(*COMBINING_ALGORITHMS), Category.NAME_CONSTANT),
        Rule(words(*KEYWORDS), Category.KEYWORD),
        Rule(words(*LITERALS), Category.KEYWORD_CONSTANT),
        Rule(words(*BUILTINS), Category.NAME_BUILTIN),
        Rule(r"\|\||&&|==|!=|=~|<=|>=", Category.OPERATOR),
        Rule(r"\|?<", Category.OPERATOR, Push("attribute_finder")),
        Rule(r"\bin\b", Category.OPERATOR_WORD),
        Rule(r"\.\.|\|-|::", Category.OPERATOR),
        Rule(r"[|^&<>+\-*/%!]", Category.OPERATOR),
        Rule(r"@", Category.NAME_VARIABLE_INSTANCE),
        # Qualified call: time.dayOfWeek(
        Rule(rf"\b{IDENTIFIER}(?:\.{IDENTIFIER})+(?=\()", Category.NAME_FUNCTION),
        # Bare call: length(
        Rule(rf"\b{IDENTIFIER}(?=\()", Category.NAME_FUNCTION),
        # Leading ^ marks a relative reference in filters
        Rule(rf"\^?{IDENTIFIER}", Category.NAME),
        Rule(r"[{}()\[\]:;,.]", Category.PUNCTUATION),
    ),
)

ATTRIBUTE_FINDER = State(
    "attribute_finder",
    (
        Rule(r">", Category.OPERATOR, POP),
        Rule(r"\b[a-zA-Z_$][a-zA-Z0-9_$.]*", Category.NAME_DECORATOR),
        Rule(r"\(", Category.PUNCTUATION, Push("attribute_args")),
        WHITESPACE,
    ),
)

ATTRIBUTE_ARGS = State(
    "attribute_args",
    (
        Rule(r"\)", Category.PUNCTUATION, POP),
        Rule(r",", Category.PUNCTUATION),
        STRING_OPEN,
        NUMBER,
        Rule(words("true", "false", "null"), Category.KEYWORD_CONSTANT),
        Rule(IDENTIFIER, Category.NAME),
        WHITESPACE,
    ),
)

SAPL = Grammar(
    name="SAPL",
    tag="sapl",
    description="Streaming Attribute Policy Language",
    filenames=("*.sapl",),
    mimetypes=("text/x-sapl",),
    states=(
        ROOT,
        string_state(unicode_escapes=True),
        MULTILINE_COMMENT,
        ATTRIBUTE_FINDER,
        ATTRIBUTE_ARGS,
    ),
)
