"""Shared helpers for saplex tests."""

from __future__ import annotations

import pytest

from saplex import lex


def pairs(source: str, language: str = "sapl", **kwargs: object) -> list[tuple[str, str]]:
    """Lex and reduce tokens to (qualname, value) pairs."""
    return [(t.category.qualname, t.value) for t in lex(source, language, **kwargs)]


@pytest.fixture
def sapl_pairs():
    return lambda source: pairs(source, "sapl")


@pytest.fixture
def sapltest_pairs():
    return lambda source: pairs(source, "sapl-test")
