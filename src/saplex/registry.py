"""Grammar registry for lookup by language tag.

The registry maps language tags and aliases to Grammar instances. It is
built once and only read afterwards; there is no way to override a
registered tag at runtime.

Thread Safety:
GrammarRegistry is immutable after creation. Safe to share.
Use GrammarRegistryBuilder for mutable construction.

Example:
    >>> from saplex.grammars import SAPL, SAPL_TEST
    >>> registry = GrammarRegistryBuilder().register(SAPL).register(SAPL_TEST).build()
    >>> registry.find("sapltest").name
    'SAPL-Test'
"""

from __future__ import annotations

from saplex.errors import UnknownGrammarError
from saplex.lexer.grammar import Grammar
from saplex.utils.logger import get_logger

logger = get_logger(__name__)


def _key(tag: str) -> str:
    return tag.strip().lower()


class GrammarRegistry:
    """Immutable registry of grammars.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_grammars", "_by_tag", "_by_mimetype")

    def __init__(
        self,
        grammars: tuple[Grammar, ...],
        by_tag: dict[str, Grammar],
        by_mimetype: dict[str, Grammar],
    ) -> None:
        """Initialize registry with pre-built mappings.

        Use GrammarRegistryBuilder to create instances.
        """
        self._grammars = grammars
        self._by_tag = by_tag
        self._by_mimetype = by_mimetype

    def get(self, tag: str) -> Grammar | None:
        """Get grammar for a language tag or alias.

        Args:
            tag: Language tag (e.g., "sapl", "sapl-test", "sapltest")

        Returns:
            Grammar if registered, None otherwise
        """
        return self._by_tag.get(_key(tag))

    def find(self, tag: str) -> Grammar:
        """Get grammar for a language tag or alias.

        Raises:
            UnknownGrammarError: If no grammar is registered for the tag
        """
        grammar = self.get(tag)
        if grammar is None:
            raise UnknownGrammarError(tag)
        return grammar

    def find_by_filename(self, filename: str) -> Grammar | None:
        """Get the first grammar whose filename globs match ``filename``."""
        for grammar in self._grammars:
            if grammar.matches_filename(filename):
                return grammar
        return None

    def find_by_mimetype(self, mimetype: str) -> Grammar | None:
        """Get grammar registered for a mimetype (parameters are ignored)."""
        return self._by_mimetype.get(_key(mimetype.split(";", 1)[0]))

    def has(self, tag: str) -> bool:
        """Check if a tag or alias is registered."""
        return _key(tag) in self._by_tag

    @property
    def tags(self) -> frozenset[str]:
        """All registered tags and aliases."""
        return frozenset(self._by_tag.keys())

    @property
    def grammars(self) -> tuple[Grammar, ...]:
        """All registered grammars, in registration order."""
        return self._grammars

    def __contains__(self, tag: str) -> bool:
        """Support 'tag in registry' syntax."""
        return self.has(tag)

    def __len__(self) -> int:
        """Number of registered grammars."""
        return len(self._grammars)


class GrammarRegistryBuilder:
    """Mutable builder for GrammarRegistry.

    Registration order is precedence for filename lookup.

    Example:
        >>> from saplex.grammars import SAPL
        >>> builder = GrammarRegistryBuilder()
        >>> _ = builder.register(SAPL)
        >>> builder.build().has("sapl")
        True
    """

    __slots__ = ("_grammars", "_by_tag", "_by_mimetype")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._grammars: list[Grammar] = []
        self._by_tag: dict[str, Grammar] = {}
        self._by_mimetype: dict[str, Grammar] = {}

    def register(self, grammar: Grammar) -> GrammarRegistryBuilder:
        """Register a grammar under its tag and aliases.

        Args:
            grammar: Grammar to register

        Returns:
            Self for chaining

        Raises:
            ValueError: If a tag or alias is already registered
        """
        keys = [_key(tag) for tag in grammar.tags]
        for key in keys:
            if key in self._by_tag:
                existing = self._by_tag[key]
                msg = f"Language tag '{key}' already registered by grammar '{existing.name}'"
                raise ValueError(msg)

        for key in keys:
            self._by_tag[key] = grammar
        for mimetype in grammar.mimetypes:
            self._by_mimetype.setdefault(_key(mimetype), grammar)

        self._grammars.append(grammar)
        logger.debug("Registered grammar %s for tags %s", grammar.name, ", ".join(keys))
        return self

    def register_all(self, grammars: list[Grammar]) -> GrammarRegistryBuilder:
        """Register multiple grammars.

        Returns:
            Self for chaining
        """
        for grammar in grammars:
            self.register(grammar)
        return self

    def build(self) -> GrammarRegistry:
        """Build immutable registry from registered grammars."""
        return GrammarRegistry(
            grammars=tuple(self._grammars),
            by_tag=dict(self._by_tag),
            by_mimetype=dict(self._by_mimetype),
        )

    def __len__(self) -> int:
        """Number of registered grammars."""
        return len(self._grammars)


# Cached singleton (GrammarRegistry is immutable)
_DEFAULT_REGISTRY: GrammarRegistry | None = None


def create_default_registry() -> GrammarRegistry:
    """Get the default grammar registry (cached singleton).

    Returns:
        Registry with SAPL ("sapl") and SAPL-Test ("sapl-test", "sapltest")
    """
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = create_registry_with_defaults().build()
    return _DEFAULT_REGISTRY


def create_registry_with_defaults() -> GrammarRegistryBuilder:
    """Create a builder pre-populated with the built-in grammars.

    Use this to add further languages next to SAPL and SAPL-Test::

        builder = create_registry_with_defaults()
        builder.register(my_grammar)
        registry = builder.build()
    """
    from saplex.grammars import BUILTIN_GRAMMARS

    builder = GrammarRegistryBuilder()
    builder.register_all(list(BUILTIN_GRAMMARS))
    return builder
