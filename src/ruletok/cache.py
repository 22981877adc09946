"""Content-addressed cache of compiled matchers.

Provides rules_hash -> CompiledMatcher caching so engines built from the
same rule list (for example one per request or per worker) compile once.

Thread Safety:
    DictMatcherCache is not thread-safe. For parallel use, wrap get/put in a
    threading.Lock or use a cache implementation with internal locking.

Example:
    >>> from ruletok import Lexer, Rule, DictMatcherCache
    >>> cache = DictMatcherCache()
    >>> rules = [Rule("WORD", "WORD", r"\\w+")]
    >>> a = Lexer(rules, cache=cache).compile()
    >>> b = Lexer(rules, cache=cache).compile()  # Cache hit, no re-compile
    >>> len(cache)
    1
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from ruletok.utils.hashing import hash_parts

if TYPE_CHECKING:
    from ruletok.lexer.compiler import CompiledMatcher
    from ruletok.rules import Rule


class MatcherCache(Protocol):
    """Protocol for compiled-matcher caches.

    Key is ``hash_rules(rules, flags)``. CompiledMatcher is immutable and
    safe to share across threads.
    """

    def get(self, key: str) -> CompiledMatcher | None:
        """Return cached matcher if present, else None."""
        ...

    def put(self, key: str, matcher: CompiledMatcher) -> None:
        """Store matcher in cache."""
        ...


class DictMatcherCache:
    """In-memory matcher cache using a dict.

    Not thread-safe. For parallel use, wrap with a lock.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[str, CompiledMatcher] = {}

    def get(self, key: str) -> CompiledMatcher | None:
        """Return cached matcher if present, else None."""
        return self._data.get(key)

    def put(self, key: str, matcher: CompiledMatcher) -> None:
        """Store matcher in cache."""
        self._data[key] = matcher

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def hash_rules(rules: Iterable[Rule], flags: int = 0) -> str:
    """Compute cache key for an ordered rule list and ``re`` flags.

    Rule order is part of the key: the same rules in a different order
    tokenize differently.

    Args:
        rules: Rules in precedence order
        flags: ``re`` flags used at compile time

    Returns:
        Hex digest of SHA256 hash
    """
    parts = [str(int(flags))]
    for rule in rules:
        parts.extend((rule.type, rule.name, rule.pattern))
    return hash_parts(parts)


__all__ = [
    "DictMatcherCache",
    "MatcherCache",
    "hash_rules",
]
