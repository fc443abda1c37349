"""Tests for grammar registration and lookup."""

from __future__ import annotations

import pytest

from saplex import (
    SAPL,
    SAPL_TEST,
    GrammarRegistryBuilder,
    UnknownGrammarError,
    create_default_registry,
    create_registry_with_defaults,
)
from saplex.lexer import Grammar, Rule, State
from saplex.tokens import Category


def make_grammar(tag: str = "demo", **kwargs) -> Grammar:
    return Grammar(
        name=kwargs.pop("name", "Demo"),
        tag=tag,
        states=[State("root", (Rule(r"\w+", Category.NAME),))],
        **kwargs,
    )


class TestDefaultRegistry:
    def test_tags(self) -> None:
        registry = create_default_registry()
        assert registry.tags == frozenset({"sapl", "sapl-test", "sapltest"})
        assert registry.grammars == (SAPL, SAPL_TEST)
        assert len(registry) == 2

    def test_is_cached(self) -> None:
        assert create_default_registry() is create_default_registry()

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("sapl", "SAPL"),
            ("SAPL", "SAPL"),
            (" sapl ", "SAPL"),
            ("sapl-test", "SAPL-Test"),
            ("sapltest", "SAPL-Test"),
            ("SaplTest", "SAPL-Test"),
        ],
    )
    def test_lookup_is_case_insensitive(self, tag: str, expected: str) -> None:
        assert create_default_registry().find(tag).name == expected

    def test_get_unknown_returns_none(self) -> None:
        assert create_default_registry().get("xacml") is None

    def test_find_unknown_raises(self) -> None:
        with pytest.raises(UnknownGrammarError) as exc_info:
            create_default_registry().find("xacml")
        assert exc_info.value.tag == "xacml"

    def test_contains(self) -> None:
        registry = create_default_registry()
        assert "sapltest" in registry
        assert "json" not in registry
        assert registry.has("SAPL")

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("access.sapl", SAPL),
            ("specs/access.sapltest", SAPL_TEST),
            ("README.md", None),
        ],
    )
    def test_find_by_filename(self, filename: str, expected: Grammar | None) -> None:
        assert create_default_registry().find_by_filename(filename) is expected

    @pytest.mark.parametrize(
        ("mimetype", "expected"),
        [
            ("text/x-sapl", SAPL),
            ("Text/X-SAPL; charset=utf-8", SAPL),
            ("text/x-sapl-test", SAPL_TEST),
            ("text/plain", None),
        ],
    )
    def test_find_by_mimetype(self, mimetype: str, expected: Grammar | None) -> None:
        assert create_default_registry().find_by_mimetype(mimetype) is expected


class TestBuilder:
    def test_empty_builder(self) -> None:
        builder = GrammarRegistryBuilder()
        assert len(builder) == 0
        registry = builder.build()
        assert len(registry) == 0
        assert registry.get("sapl") is None

    def test_chaining(self) -> None:
        registry = GrammarRegistryBuilder().register(SAPL).register(SAPL_TEST).build()
        assert registry.find("sapltest") is SAPL_TEST

    def test_duplicate_tag_rejected(self) -> None:
        builder = GrammarRegistryBuilder().register(SAPL)
        with pytest.raises(ValueError, match="already registered by grammar 'SAPL'"):
            builder.register(make_grammar("Sapl"))

    def test_duplicate_alias_rejected_without_partial_registration(self) -> None:
        builder = GrammarRegistryBuilder().register(SAPL_TEST)
        with pytest.raises(ValueError):
            builder.register(make_grammar("fresh", aliases=("sapltest",)))
        assert not builder.build().has("fresh")
        assert len(builder) == 1

    def test_registry_is_independent_of_builder(self) -> None:
        builder = GrammarRegistryBuilder().register(SAPL)
        registry = builder.build()
        builder.register(SAPL_TEST)
        assert "sapl-test" not in registry
        assert "sapl-test" in builder.build()

    def test_extend_defaults(self) -> None:
        demo = make_grammar(filenames=("*.demo",), mimetypes=("text/x-demo",))
        registry = create_registry_with_defaults().register(demo).build()
        assert registry.find("demo") is demo
        assert registry.find("sapl") is SAPL
        assert registry.find_by_filename("x.demo") is demo
        assert registry.find_by_mimetype("text/x-demo") is demo
        # The cached default is unaffected
        assert "demo" not in create_default_registry()

    def test_first_registered_wins_filename_lookup(self) -> None:
        first = make_grammar("one", name="One", filenames=("*.x",))
        second = make_grammar("two", name="Two", filenames=("*.x",))
        registry = GrammarRegistryBuilder().register_all([first, second]).build()
        assert registry.find_by_filename("a.x") is first
