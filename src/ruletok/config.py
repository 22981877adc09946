"""ContextVar-based lexer configuration for ruletok.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A Lexer created without an explicit config reads the context config once,
at construction.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from ruletok.config import LexerConfig, lexer_config_context

    with lexer_config_context(LexerConfig(skip_types=frozenset({"WS"}))):
        tokens = Lexer(rules).load(source).tokenize()

"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Immutable lexer configuration.

    Attributes:
        flags: ``re`` flags applied when compiling every rule
        skip_types: Token types consumed but never emitted (e.g. whitespace)
        emit_eof: Emit one trailing EOF sentinel token at end of input

    """

    flags: int = 0
    skip_types: frozenset[str] = field(default_factory=frozenset)
    emit_eof: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> LexerConfig:
        """Create LexerConfig from dictionary.

        Unknown keys are silently ignored. ``skip_types`` may be a single type
        name or any iterable of strings; ``flags`` may be an int or a list of
        ``re`` flag names.

        Example:
            >>> config = LexerConfig.from_dict({
            ...     "flags": ["IGNORECASE"],
            ...     "skip_types": ["WS", "COMMENT"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.flags == re.IGNORECASE
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "flags" in filtered:
            filtered["flags"] = parse_flags(filtered["flags"])
        if "skip_types" in filtered:
            skip_types = filtered["skip_types"]
            if isinstance(skip_types, str):
                skip_types = [skip_types]
            filtered["skip_types"] = frozenset(skip_types)
        return cls(**filtered)


def parse_flags(value: int | str | Iterable[str]) -> int:
    """Convert flag names like ``"IGNORECASE"`` or ``"I"`` to an ``re`` flag int.

    Raises:
        ValueError: If a name is not an ``re`` flag.
    """
    if isinstance(value, int):
        return value
    names = [value] if isinstance(value, str) else list(value)
    flags = 0
    for name in names:
        flag = re.RegexFlag.__members__.get(name.upper())
        if flag is None:
            raise ValueError(f"unknown re flag: {name!r}")
        flags |= flag
    return int(flags)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexerConfig = LexerConfig()

_lexer_config: ContextVar[LexerConfig] = ContextVar(
    "lexer_config",
    default=_DEFAULT_CONFIG,
)


def get_lexer_config() -> LexerConfig:
    """Get current lexer configuration (thread-local)."""
    return _lexer_config.get()


def set_lexer_config(config: LexerConfig) -> None:
    """Set lexer configuration for current context.

    Args:
        config: LexerConfig instance to use for this context.

    """
    _lexer_config.set(config)


def reset_lexer_config() -> None:
    """Reset to default configuration."""
    _lexer_config.set(_DEFAULT_CONFIG)


@contextmanager
def lexer_config_context(config: LexerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: LexerConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Restores the previous
        config even if an exception is raised.

    """
    previous = _lexer_config.get()
    _lexer_config.set(config)
    try:
        yield
    finally:
        _lexer_config.set(previous)


__all__ = [
    "LexerConfig",
    "get_lexer_config",
    "lexer_config_context",
    "parse_flags",
    "reset_lexer_config",
    "set_lexer_config",
]
