"""Lexer states and grammars.

A State is a named, ordered tuple of Rules. A Grammar bundles the states
of one language with its registration metadata (tag, aliases, file
associations).

Thread Safety:
State and Grammar are immutable after creation. Safe to share.
Construction validates the state graph, so a Grammar that exists can
always be lexed with.

"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from saplex.errors import GrammarDefinitionError
from saplex.lexer.rules import Rule


@dataclass(frozen=True, slots=True)
class State:
    """Named, ordered rule set.

    Rule order is priority: the first rule that matches at the cursor
    wins, even when a later rule would match a longer lexeme.

    Attributes:
        name: State name referenced by Push transitions
        rules: Rules in priority order
    """

    name: str
    rules: tuple[Rule, ...]

    def match(self, text: str, pos: int) -> tuple[Rule, int] | None:
        """Find the first rule matching at ``pos``.

        Rules see ``text[pos:]``, so the cursor is the start of the input
        for anchors and word boundaries.

        Returns:
            (rule, end) for the winning rule, or None if no rule applies.
        """
        rest = text[pos:]
        for rule in self.rules:
            length = rule.match(rest)
            if length is not None:
                return rule, pos + length
        return None

    def __len__(self) -> int:
        return len(self.rules)


class Grammar:
    """Complete, immutable definition of one language.

    Examples:
        >>> from saplex.tokens import Category
        >>> grammar = Grammar(
        ...     name="Demo",
        ...     tag="demo",
        ...     states=[State("root", (Rule(r"\\s+", Category.TEXT),))],
        ... )
        >>> grammar.root.name
        'root'

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = (
        "_name",
        "_tag",
        "_aliases",
        "_filenames",
        "_mimetypes",
        "_description",
        "_states",
        "_root_name",
    )

    def __init__(
        self,
        name: str,
        tag: str,
        states: Iterable[State],
        *,
        root: str = "root",
        aliases: Iterable[str] = (),
        filenames: Iterable[str] = (),
        mimetypes: Iterable[str] = (),
        description: str = "",
    ) -> None:
        """Build and validate a grammar.

        Args:
            name: Display title (e.g., "SAPL")
            tag: Primary language tag used for lookup
            states: State definitions; names must be unique
            root: Name of the state lexing starts in
            aliases: Additional lookup tags
            filenames: Glob patterns of associated files (e.g., "*.sapl")
            mimetypes: Associated mimetypes
            description: One-line description of the language

        Raises:
            GrammarDefinitionError: If state names repeat, the root state is
                missing, or a rule pushes an undefined state.
        """
        by_name: dict[str, State] = {}
        for state in states:
            if state.name in by_name:
                raise GrammarDefinitionError(name, "state defined twice", state.name)
            by_name[state.name] = state

        if root not in by_name:
            raise GrammarDefinitionError(name, f"root state {root!r} is not defined")

        for state in by_name.values():
            for rule in state.rules:
                target = rule.push_target
                if target is not None and target not in by_name:
                    raise GrammarDefinitionError(
                        name,
                        f"rule {rule.pattern!r} pushes undefined state {target!r}",
                        state.name,
                    )

        self._name = name
        self._tag = tag
        self._aliases = tuple(aliases)
        self._filenames = tuple(filenames)
        self._mimetypes = tuple(mimetypes)
        self._description = description
        self._states: Mapping[str, State] = MappingProxyType(by_name)
        self._root_name = root

    @property
    def name(self) -> str:
        return self._name

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def aliases(self) -> tuple[str, ...]:
        return self._aliases

    @property
    def tags(self) -> tuple[str, ...]:
        """Primary tag followed by aliases."""
        return (self._tag, *self._aliases)

    @property
    def filenames(self) -> tuple[str, ...]:
        return self._filenames

    @property
    def mimetypes(self) -> tuple[str, ...]:
        return self._mimetypes

    @property
    def description(self) -> str:
        return self._description

    @property
    def states(self) -> Mapping[str, State]:
        """Read-only view of states by name."""
        return self._states

    @property
    def root(self) -> State:
        """State lexing starts in."""
        return self._states[self._root_name]

    def state(self, name: str) -> State:
        """Get a state by name."""
        return self._states[name]

    def matches_filename(self, filename: str) -> bool:
        """Check whether a file name matches one of the filename globs.

        Only the final path component is compared.
        """
        basename = filename.replace("\\", "/").rsplit("/", 1)[-1]
        return any(fnmatch.fnmatchcase(basename, pattern) for pattern in self._filenames)

    def __repr__(self) -> str:
        return f"Grammar({self._name!r}, tag={self._tag!r}, states={list(self._states)})"
