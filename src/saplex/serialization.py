"""Token stream serialization — JSON hand-off to renderers.

Converts token sequences to/from JSON-compatible dicts. Useful for:
- Passing lexed code to a renderer in another process
- Caching highlighted snippets between site builds
- Debugging and inspection

Each token becomes ``{"category": "Name.Function", "offset": 4, "value": "f"}``.
All output is deterministic (sorted keys).

Example:
    from saplex import lex
    from saplex.serialization import to_json, from_json

    tokens = lex('policy "p" permit', "sapl")
    restored = from_json(to_json(tokens))
    assert restored == tokens

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Iterable
from typing import Any

from saplex.tokens import Category, Token


def to_dict(token: Token) -> dict[str, Any]:
    """Convert one token to a JSON-compatible dict."""
    return {
        "category": token.category.qualname,
        "value": token.value,
        "offset": token.offset,
    }


def to_dicts(tokens: Iterable[Token]) -> list[dict[str, Any]]:
    """Convert a token stream to a list of dicts."""
    return [to_dict(token) for token in tokens]


def to_json(tokens: Iterable[Token], *, indent: int | None = None) -> str:
    """Serialize a token stream to a JSON array string.

    Args:
        tokens: Tokens in source order.
        indent: JSON indentation (None for compact output).

    """
    return json.dumps(to_dicts(tokens), indent=indent, sort_keys=True, ensure_ascii=False)


def from_dict(data: dict[str, Any]) -> Token:
    """Rebuild a token from a dict produced by to_dict.

    Raises:
        ValueError: If the category name is unknown.
        KeyError: If a required field is missing.

    """
    return Token(
        category=Category(data["category"]),
        value=data["value"],
        offset=data["offset"],
    )


def from_dicts(data: Iterable[dict[str, Any]]) -> list[Token]:
    """Rebuild a token list from dicts."""
    return [from_dict(item) for item in data]


def from_json(json_str: str) -> list[Token]:
    """Deserialize a JSON array string to a token list."""
    return from_dicts(json.loads(json_str))
