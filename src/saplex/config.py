"""ContextVar-based lex configuration for saplex.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A Lexer reads the active config once, at construction.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from saplex import lex
    from saplex.config import LexConfig, lex_config_context

    # Keep every raw rule match as its own token
    with lex_config_context(LexConfig(merge_adjacent=False)):
        tokens = lex('policy "p" permit', "sapl")

    # Watch the state machine
    def trace(category, lexeme, offset, depth):
        log.debug("%s %r @%d depth=%d", category, lexeme, offset, depth)

    with lex_config_context(LexConfig(trace=trace)):
        lex("var x = <a.b>;", "sapl")

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from saplex.tokens import Category

# (category, lexeme, offset, state_stack_depth)
TraceHook = Callable[[Category, str, int, int], None]


@dataclass(frozen=True, slots=True)
class LexConfig:
    """Immutable lex configuration.

    Attributes:
        merge_adjacent: Merge neighbouring tokens of the same category
            (Error tokens are never merged)
        trace: Optional callback invoked for every raw rule match with
            (category, lexeme, offset, state_stack_depth)
        max_zero_width_steps: Zero-width transitions allowed at one offset
            before the lexer gives up on that character

    """

    merge_adjacent: bool = True
    trace: TraceHook | None = None
    max_zero_width_steps: int = 16

    def __post_init__(self) -> None:
        if self.max_zero_width_steps < 1:
            msg = f"max_zero_width_steps must be >= 1, got {self.max_zero_width_steps}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> LexConfig:
        """Create LexConfig from dictionary.

        Only includes keys that are valid LexConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> LexConfig.from_dict({"merge_adjacent": False, "theme": "x"})
            LexConfig(merge_adjacent=False, trace=None, max_zero_width_steps=16)

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexConfig = LexConfig()

_lex_config: ContextVar[LexConfig] = ContextVar(
    "lex_config",
    default=_DEFAULT_CONFIG,
)


def get_lex_config() -> LexConfig:
    """Get current lex configuration (thread-local)."""
    return _lex_config.get()


def set_lex_config(config: LexConfig) -> None:
    """Set lex configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _lex_config.set(config)


def reset_lex_config() -> None:
    """Reset to the default configuration."""
    _lex_config.set(_DEFAULT_CONFIG)


@contextmanager
def lex_config_context(config: LexConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with lex_config_context(LexConfig(merge_adjacent=False)):
        ...     get_lex_config().merge_adjacent
        False

    """
    previous = _lex_config.get()
    _lex_config.set(config)
    try:
        yield
    finally:
        _lex_config.set(previous)


__all__ = [
    "LexConfig",
    "TraceHook",
    "get_lex_config",
    "set_lex_config",
    "reset_lex_config",
    "lex_config_context",
]
