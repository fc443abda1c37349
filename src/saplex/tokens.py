"""Token and Category definitions for the saplex lexers.

The lexer produces a flat stream of Token objects that a renderer consumes.
Each Token has a category, the exact lexeme, and its start offset.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
Category is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """Lexical categories produced by the lexers.

    Values are dotted qualified names. A dotted name is a subtype of every
    prefix, so ``Name.Variable.Instance`` is a kind of ``Name.Variable``
    which is a kind of ``Name``.

    Organized by family:
    - Whitespace and errors (TEXT, ERROR)
    - Comments and strings
    - Literals and keywords
    - Operators, names, punctuation

    """

    TEXT = "Text"
    ERROR = "Error"

    COMMENT = "Comment"
    COMMENT_SINGLE = "Comment.Single"  # // line
    COMMENT_MULTILINE = "Comment.Multiline"  # /* block */

    STRING = "String"
    STRING_DOUBLE = "String.Double"  # "..."
    STRING_ESCAPE = "String.Escape"  # \n, \uXXXX

    NUMBER = "Number"

    KEYWORD = "Keyword"
    KEYWORD_CONSTANT = "Keyword.Constant"  # true, false, null
    KEYWORD_TYPE = "Keyword.Type"
    KEYWORD_DECLARATION = "Keyword.Declaration"

    OPERATOR = "Operator"
    OPERATOR_WORD = "Operator.Word"  # in

    NAME = "Name"
    NAME_BUILTIN = "Name.Builtin"  # subject, action, ...
    NAME_FUNCTION = "Name.Function"
    NAME_CONSTANT = "Name.Constant"
    NAME_VARIABLE = "Name.Variable"
    NAME_VARIABLE_INSTANCE = "Name.Variable.Instance"  # @
    NAME_DECORATOR = "Name.Decorator"  # attribute finder names

    PUNCTUATION = "Punctuation"

    @property
    def qualname(self) -> str:
        """Dotted display name (e.g. ``Comment.Single``)."""
        return self.value

    @property
    def parent(self) -> Category | None:
        """Enclosing category, or None for a top-level family."""
        head, sep, _ = self.value.rpartition(".")
        if not sep:
            return None
        return Category(head)

    def is_subtype_of(self, other: Category) -> bool:
        """True if this category equals ``other`` or is nested inside it."""
        return self is other or self.value.startswith(other.value + ".")

    @property
    def short_name(self) -> str:
        """Conventional highlighter CSS class for this category."""
        return _SHORT_NAMES[self]

    def __str__(self) -> str:
        return self.value


# Class names shared by Rouge and Pygments stylesheets
_SHORT_NAMES: dict[Category, str] = {
    Category.TEXT: "",
    Category.ERROR: "err",
    Category.COMMENT: "c",
    Category.COMMENT_SINGLE: "c1",
    Category.COMMENT_MULTILINE: "cm",
    Category.STRING: "s",
    Category.STRING_DOUBLE: "s2",
    Category.STRING_ESCAPE: "se",
    Category.NUMBER: "m",
    Category.KEYWORD: "k",
    Category.KEYWORD_CONSTANT: "kc",
    Category.KEYWORD_TYPE: "kt",
    Category.KEYWORD_DECLARATION: "kd",
    Category.OPERATOR: "o",
    Category.OPERATOR_WORD: "ow",
    Category.NAME: "n",
    Category.NAME_BUILTIN: "nb",
    Category.NAME_FUNCTION: "nf",
    Category.NAME_CONSTANT: "no",
    Category.NAME_VARIABLE: "nv",
    Category.NAME_VARIABLE_INSTANCE: "vi",
    Category.NAME_DECORATOR: "nd",
    Category.PUNCTUATION: "p",
}


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        category: Lexical category (from Category enum)
        value: The exact lexeme from source
        offset: Absolute start position in source

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    category: Category
    value: str
    offset: int

    @property
    def end(self) -> int:
        """Absolute end position (exclusive)."""
        return self.offset + len(self.value)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.category.value}, {val!r}, {self.offset})"
