"""Compile an ordered rule list into one composite matcher.

Each rule's fragment is wrapped in its own named group and the groups are
joined with ordered alternation::

    (?P<IF>if)|(?P<IDENT>[a-z]+)|(?P<IDENT__2>[A-Z]+)

Matching uses ``pattern.match(buffer, pos)``, which is anchored at ``pos``
and never searches ahead. Python's ``re`` alternation is ordered choice: the
first branch able to match wins even when a later branch would match more
text. Callers order ``"=="`` ahead of ``"="`` themselves.

Which rule matched is resolved through ``branch_table``, a tuple indexed by
regex group number and built here in rule order. The wrapper group always
closes last, so ``match.lastindex`` names it.

Fragments are written as if they stood alone. Numeric backreferences such
as ``(['"]).*?\\1`` are shifted past the groups of earlier rules, and a
leading ``(?i)`` becomes the scoped group ``(?i:...)`` so the flag stays
inside its rule.

Thread Safety:
CompiledMatcher is immutable once built; compiled ``re`` patterns are
reentrant, so one matcher may serve many concurrent sessions.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ruletok.errors import PatternError
from ruletok.rules import Rule

# Never matches; used when the rule list is empty.
_NEVER = "(?!)"

_NON_IDENT = re.compile(r"\W")

# Inline global flags; only legal at the start of a whole pattern
_LEADING_FLAGS = re.compile(r"\(\?([aiLmsux]+)\)")

# After a backslash: three octal digits are an escape, otherwise one or two
# digits are a group reference (same reading as the re parser)
_ESCAPED_DIGITS = re.compile(r"[1-7][0-7]{2}|([1-9][0-9]?)")
_CONDITIONAL = re.compile(r"\(\?\(([0-9]+)\)")

# Python patterns cannot spell a numeric backreference past this
_MAX_BACKREF = 99


def branch_name(name: str, occurrence: int = 1) -> str:
    """Group name for the ``occurrence``-th rule called ``name``.

    Characters that are not valid in a group name become ``_``.

    Example:
        >>> branch_name("IDENT"), branch_name("IDENT", 2), branch_name("2-op")
        ('IDENT', 'IDENT__2', '_2_op')
    """
    base = _NON_IDENT.sub("_", name) or "_"
    if not (base[0].isalpha() or base[0] == "_"):
        base = "_" + base
    if occurrence > 1:
        return f"{base}__{occurrence}"
    return base


@dataclass(frozen=True, slots=True, eq=False)
class CompiledMatcher:
    """Composite matcher plus the tables that map a match back to its rule.

    Attributes:
        pattern: The compiled alternation
        rules: Rules in precedence order
        branches: Branch (group) name for each rule, same order as ``rules``
        branch_map: Branch name -> ``(type, name)`` of its rule
        branch_table: Regex group index -> rule index (None for inner groups)
        flags: ``re`` flags the pattern was compiled with

    """

    pattern: re.Pattern[str]
    rules: tuple[Rule, ...]
    branches: tuple[str, ...]
    branch_map: dict[str, tuple[str, str]]
    branch_table: tuple[int | None, ...]
    flags: int = 0

    def match(self, buffer: str, pos: int) -> tuple[int, int] | None:
        """Match at exactly ``pos``.

        Returns:
            ``(rule_index, end)`` of the winning branch, or None when no
            branch matches at ``pos``.
        """
        m = self.pattern.match(buffer, pos)
        if m is None:
            return None
        rule_index = self.branch_table[m.lastindex]
        return rule_index, m.end()

    def __len__(self) -> int:
        return len(self.rules)

    def __repr__(self) -> str:
        return f"CompiledMatcher({len(self.rules)} rules, flags={self.flags})"


def compile_rules(rules: Sequence[Rule], flags: int = 0) -> CompiledMatcher:
    """Build the composite matcher for ``rules`` in the given order.

    Args:
        rules: Rules in precedence order (index 0 is tried first)
        flags: ``re`` flags applied to every fragment

    Returns:
        CompiledMatcher for the rules

    Raises:
        PatternError: If a fragment is malformed, uses a group name that
            collides with a branch name, has a backreference that cannot be
            renumbered, or breaks the composite pattern.
    """
    rules = tuple(rules)
    branches: list[str] = []
    branch_map: dict[str, tuple[str, str]] = {}
    table: list[int | None] = [None]
    parts: list[str] = []
    spans: list[tuple[int, int]] = []
    inner_names: list[tuple[int, str]] = []
    occurrences: dict[str, int] = {}
    offset = 0
    closer = _closer(verbose=bool(flags & re.VERBOSE))

    for index, rule in enumerate(rules):
        try:
            fragment = re.compile(rule.pattern, flags)
        except re.error as exc:
            raise PatternError(rule, index, exc) from exc

        occurrence = occurrences.get(rule.name, 0) + 1
        branch = branch_name(rule.name, occurrence)
        while branch in branch_map:
            occurrence += 1
            branch = branch_name(rule.name, occurrence)
        occurrences[rule.name] = occurrence

        letters, body = _split_flags(rule.pattern)
        verbose = bool(flags & re.VERBOSE) or "x" in letters
        if fragment.groups:
            try:
                body = _renumber(body, len(table), verbose)
            except re.error as exc:
                raise PatternError(rule, index, exc) from exc
        if letters:
            body = f"(?{letters}:{body}{_closer(verbose=verbose)}"

        branches.append(branch)
        branch_map[branch] = (rule.type, rule.name)
        table.append(index)
        table.extend([None] * fragment.groups)
        inner_names.extend((index, group) for group in fragment.groupindex)

        part = f"(?P<{branch}>{body}{closer}"
        spans.append((offset, offset + len(part)))
        parts.append(part)
        offset += len(part) + 1  # "|"

    for index, group in inner_names:
        if group in branch_map:
            raise PatternError(
                rules[index],
                index,
                f"group name {group!r} collides with a rule branch name",
            )

    source = "|".join(parts) if parts else _NEVER
    try:
        pattern = re.compile(source, flags)
    except re.error as exc:
        index = _locate(spans, exc.pos)
        if index is None:
            raise
        raise PatternError(rules[index], index, exc) from exc

    return CompiledMatcher(
        pattern=pattern,
        rules=rules,
        branches=tuple(branches),
        branch_map=branch_map,
        branch_table=tuple(table),
        flags=flags,
    )


def _closer(*, verbose: bool) -> str:
    # A verbose-mode comment would otherwise swallow the closing paren
    return "\n)" if verbose else ")"


def _split_flags(pattern: str) -> tuple[str, str]:
    """Strip leading ``(?imsx)``-style groups from ``pattern``.

    Returns:
        ``(letters, rest)``; ``letters`` is empty when there are none
    """
    letters = ""
    pos = 0
    while m := _LEADING_FLAGS.match(pattern, pos):
        letters += m.group(1)
        pos = m.end()
    return "".join(dict.fromkeys(letters)), pattern[pos:]


def _renumber(pattern: str, shift: int, verbose: bool) -> str:
    """Shift numeric group references in ``pattern`` by ``shift``.

    Rewrites ``\\N`` backreferences and ``(?(N)...)`` conditionals so they
    still point at the fragment's own groups once it sits inside the
    composite pattern. Digits escaped inside a character class are octal
    escapes and stay as they are.

    Raises:
        re.error: If a shifted reference is past what ``re`` can spell
    """
    out: list[str] = []
    pos, end = 0, len(pattern)
    in_class = False

    def shifted(group: str) -> int:
        number = int(group) + shift
        if number > _MAX_BACKREF:
            raise re.error(
                f"group reference {group} cannot be addressed in the combined "
                f"pattern (would be group {number})"
            )
        return number

    while pos < end:
        char = pattern[pos]
        if char == "\\":
            ref = None if in_class else _ESCAPED_DIGITS.match(pattern, pos + 1)
            if ref is not None and ref.group(1):
                # Non-capturing wrapper keeps following digits out of the number
                out.append(f"(?:\\{shifted(ref.group(1))})")
                pos = ref.end()
            else:
                out.append(pattern[pos : pos + 2])
                pos += 2
            continue

        if in_class:
            in_class = char != "]"
            out.append(char)
            pos += 1
        elif char == "[":
            in_class = True
            start = pos
            pos += 1
            if pattern.startswith("^", pos):
                pos += 1
            if pattern.startswith("]", pos):
                pos += 1  # literal "]" first in a class
            out.append(pattern[start:pos])
        elif char == "#" and verbose:
            newline = pattern.find("\n", pos)
            stop = end if newline == -1 else newline + 1
            out.append(pattern[pos:stop])
            pos = stop
        elif cond := _CONDITIONAL.match(pattern, pos):
            out.append(f"(?({shifted(cond.group(1))})")
            pos = cond.end()
        else:
            out.append(char)
            pos += 1

    return "".join(out)


def _locate(spans: list[tuple[int, int]], pos: int | None) -> int | None:
    """Index of the branch whose text contains ``pos``."""
    if pos is None:
        return None
    for index, (start, end) in enumerate(spans):
        if start <= pos < end:
            return index
    return None
