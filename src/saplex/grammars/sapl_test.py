"""SAPL-Test — the test specification language for SAPL policies.

A flat grammar: everything happens in root apart from strings and block
comments. Identifiers may contain hyphens (``static-pip``,
``virtual-time``), so ``<``, ``>`` and ``-`` are plain punctuation here
rather than operators.
"""

from __future__ import annotations

from saplex.grammars.common import (
    BLOCK_COMMENT_OPEN,
    COMBINING_ALGORITHMS,
    LINE_COMMENT,
    MULTILINE_COMMENT,
    STRING_OPEN,
    UNSIGNED_NUMBER,
    WHITESPACE,
    string_state,
)
from saplex.lexer import Grammar, Rule, State, words
from saplex.tokens import Category

DECISIONS = ("permit", "deny", "indeterminate", "notApplicable")

PROVIDER_KINDS = ("pip", "static-pip", "function-library", "static-function-library")

STRUCTURE = ("requirement", "scenario", "given", "when", "expect", "then")

CONNECTIVES = (
    "attempts",
    "emits",
    "maps",
    "called",
    "wait",
    "matching",
    "equals",
    "containing",
    "with",
    "is",
    "of",
    "to",
    "on",
    "in",
    "where",
    "any",
)

VALUE_KINDS = (
    "text",
    "number",
    "boolean",
    "array",
    "object",
    "null",
    "blank",
    "empty",
    "regex",
    "length",
    "stream",
    "order",
    "error",
)

DOMAIN = (
    "policy",
    "set",
    "policies",
    "pdp",
    "function",
    "attribute",
    "decision",
    "obligation",
    "advice",
    "virtual-time",
    "environment",
)

LITERALS = ("true", "false", "null", "undefined")

ROOT = State(
    "root",
    (
        WHITESPACE,
        LINE_COMMENT,
        BLOCK_COMMENT_OPEN,
        STRING_OPEN,
        # Test literals may carry an explicit + sign
        Rule(r"[+-]?" + UNSIGNED_NUMBER, Category.NUMBER),
        Rule(words(*COMBINING_ALGORITHMS), Category.NAME_CONSTANT),
        Rule(words(*DECISIONS), Category.NAME_CONSTANT),
        Rule(words(*PROVIDER_KINDS), Category.KEYWORD_TYPE),
        Rule(words(*STRUCTURE), Category.KEYWORD_DECLARATION),
        Rule(words(*CONNECTIVES), Category.KEYWORD),
        Rule(words(*VALUE_KINDS), Category.KEYWORD_TYPE),
        Rule(words(*DOMAIN), Category.KEYWORD),
        Rule(words(*LITERALS), Category.KEYWORD_CONSTANT),
        Rule(r"[a-zA-Z_$][a-zA-Z0-9_$-]*", Category.NAME),
        Rule(r"[{}()\[\]:;,.<>-]", Category.PUNCTUATION),
    ),
)

SAPL_TEST = Grammar(
    name="SAPL-Test",
    tag="sapl-test",
    aliases=("sapltest",),
    description="Test language for SAPL policies",
    filenames=("*.sapltest",),
    mimetypes=("text/x-sapl-test",),
    states=(
        ROOT,
        string_state(unicode_escapes=False),
        MULTILINE_COMMENT,
    ),
)
