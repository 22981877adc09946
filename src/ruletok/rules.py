"""Rule descriptors and the ordered rule arena.

A Rule names one token category and carries an un-anchored ``re`` fragment.
Fragments are never validated here; a malformed pattern surfaces as
PatternError when the lexer compiles.

RuleSet stores rules in an append-only arena with stable ids. Matching
precedence is an explicit ordered tuple of those ids, so prepending and
appending never renumber existing rules.

Example:
    >>> rules = RuleSet([Rule("IDENT", "IDENT", r"[a-z]+")])
    >>> rules.prepend([Rule("KEYWORD", "IF", "if")])
    (1,)
    >>> [rule.name for rule in rules]
    ['IF', 'IDENT']

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Rule:
    """Descriptor of one token category.

    Attributes:
        type: Type tag copied onto every token this rule produces
        name: Rule name; also the basis of the compiled branch name
        pattern: Un-anchored ``re`` fragment matched at the cursor

    """

    type: str
    name: str
    pattern: str

    @classmethod
    def of(cls, name: str, pattern: str, type: str | None = None) -> Rule:
        """Build a rule whose type defaults to its name."""
        return cls(type if type is not None else name, name, pattern)


class RuleSet:
    """Ordered, append-only arena of rules.

    Thread Safety:
        Not thread-safe for mutation. The lexer compiles from an immutable
        snapshot (``ordered()``), which may be shared freely.

    """

    __slots__ = ("_arena", "_order", "_version")

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._arena: list[Rule] = []
        self._order: tuple[int, ...] = ()
        self._version = 0
        self.append(rules)

    def _add(self, rules: Iterable[Rule]) -> tuple[int, ...]:
        ids = []
        for rule in rules:
            if not isinstance(rule, Rule):
                raise TypeError(f"expected Rule, got {type(rule).__name__}")
            self._arena.append(rule)
            ids.append(len(self._arena) - 1)
        return tuple(ids)

    def prepend(self, rules: Iterable[Rule]) -> tuple[int, ...]:
        """Insert rules ahead of every current rule, keeping their order.

        Returns:
            Arena ids of the inserted rules
        """
        ids = self._add(rules)
        if ids:
            self._order = ids + self._order
            self._version += 1
        return ids

    def append(self, rules: Iterable[Rule]) -> tuple[int, ...]:
        """Insert rules after every current rule, keeping their order.

        Returns:
            Arena ids of the inserted rules
        """
        ids = self._add(rules)
        if ids:
            self._order = self._order + ids
            self._version += 1
        return ids

    @property
    def version(self) -> int:
        """Mutation counter; changes whenever precedence changes."""
        return self._version

    def ids(self) -> tuple[int, ...]:
        """Arena ids in precedence order."""
        return self._order

    def position(self, rule_id: int) -> int:
        """Precedence rank (0 = tried first) of the rule with ``rule_id``."""
        return self._order.index(rule_id)

    def ordered(self) -> tuple[Rule, ...]:
        """Immutable snapshot of the rules in precedence order."""
        arena = self._arena
        return tuple(arena[i] for i in self._order)

    def __getitem__(self, rule_id: int) -> Rule:
        return self._arena[rule_id]

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        names = ", ".join(rule.name for rule in self)
        return f"RuleSet([{names}])"
