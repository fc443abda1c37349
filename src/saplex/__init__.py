"""
saplex — Lexers for SAPL and SAPL-Test

Splits SAPL policies and SAPL-Test specifications into a flat, ordered
stream of classified tokens for syntax highlighting. Not a parser: no AST
is built and no policy semantics are checked.

Quick Start:
    >>> from saplex import lex
    >>> for token in lex('policy "test" permit', "sapl"):
    ...     print(token)
    Token(Keyword, 'policy', 0)
    Token(Text, ' ', 6)
    Token(String.Double, '"test"', 7)
    Token(Text, ' ', 13)
    Token(Keyword, 'permit', 14)

    >>> # Grammars are looked up by tag or alias
    >>> from saplex import get_grammar
    >>> get_grammar("sapltest").name
    'SAPL-Test'

Guarantees:
    - The token values concatenate back to the input exactly
    - Malformed input never raises; unmatched characters become Error tokens
    - Grammars are immutable and shared safely between threads
"""

from saplex.config import (
    LexConfig,
    get_lex_config,
    lex_config_context,
    reset_lex_config,
    set_lex_config,
)
from saplex.errors import GrammarDefinitionError, SaplexError, UnknownGrammarError
from saplex.grammars import SAPL, SAPL_KEYWORDS, SAPL_TEST
from saplex.lexer import POP, Grammar, Lexer, Push, Rule, State
from saplex.profiling import LexAccumulator, get_lex_accumulator, profiled_lex
from saplex.registry import (
    GrammarRegistry,
    GrammarRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
)
from saplex.serialization import from_json, to_json
from saplex.tokens import Category, Token

__version__ = "0.1.0"


def get_grammar(tag: str, *, registry: GrammarRegistry | None = None) -> Grammar:
    """Look up a grammar by language tag or alias.

    Args:
        tag: "sapl", "sapl-test" or "sapltest" with the default registry
        registry: Registry to search (uses defaults if None)

    Returns:
        The registered Grammar

    Raises:
        UnknownGrammarError: If no grammar is registered for the tag
    """
    if registry is None:
        registry = create_default_registry()
    return registry.find(tag)


def lex(
    source: str,
    language: str,
    *,
    registry: GrammarRegistry | None = None,
    config: LexConfig | None = None,
) -> list[Token]:
    """Lex source text into a token list.

    Args:
        source: Source text
        language: Language tag or alias
        registry: Registry to resolve the tag (uses defaults if None)
        config: Lex configuration (uses the active context config if None)

    Returns:
        Tokens in source order covering the whole input

    Raises:
        UnknownGrammarError: If the language tag is not registered

    Example:
        >>> [t.category.qualname for t in lex("subject.id", "sapl")]
        ['Name.Builtin', 'Punctuation', 'Name']
    """
    grammar = get_grammar(language, registry=registry)
    return list(Lexer(source, grammar, config).tokenize())


__all__ = [
    "POP",
    "SAPL",
    "SAPL_KEYWORDS",
    "SAPL_TEST",
    "Category",
    "Grammar",
    "GrammarDefinitionError",
    "GrammarRegistry",
    "GrammarRegistryBuilder",
    "LexAccumulator",
    "LexConfig",
    "Lexer",
    "Push",
    "Rule",
    "SaplexError",
    "State",
    "Token",
    "UnknownGrammarError",
    "create_default_registry",
    "create_registry_with_defaults",
    "from_json",
    "get_grammar",
    "get_lex_config",
    "get_lex_accumulator",
    "lex",
    "lex_config_context",
    "profiled_lex",
    "reset_lex_config",
    "set_lex_config",
    "to_json",
]
