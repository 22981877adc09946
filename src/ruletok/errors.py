"""Exception classes for ruletok.

Two failure classes exist and never overlap:
- PatternError: a rule fragment is malformed; raised by compile().
- LexicalError: no rule matches at the cursor; raised while tokenizing.

The lexer never recovers from either. Skipping characters after a
LexicalError is a policy for the caller.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ruletok.location import SourceLocation
    from ruletok.rules import Rule


class RuletokError(Exception):
    """Base exception for all ruletok errors.

    Subclass this for specific error categories.
    """

    pass


class LexicalError(RuletokError):
    """No rule matches the input at the current position.

    Carries the offending character and the 1-based line/column where
    it sits, plus the absolute offset.
    """

    def __init__(
        self,
        char: str,
        line: int,
        col: int,
        pos: int = 0,
        source_file: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize lexical error.

        Args:
            char: The character no rule could match
            line: Line of the character (1-indexed)
            col: Column of the character (1-indexed)
            pos: Absolute offset of the character (0-indexed)
            source_file: Path to source file (optional)
            message: Override for the default description
        """
        self.char = char
        self.line = line
        self.col = col
        self.pos = pos
        self.source_file = source_file

        prefix = f"{source_file}:" if source_file else ""
        if message is None:
            message = f"Invalid token {char!r}"
        super().__init__(f"{prefix}{message} at ({line}:{col})")

    @property
    def location(self) -> SourceLocation:
        """Location of the offending character."""
        from ruletok.location import SourceLocation

        return SourceLocation(
            lineno=self.line,
            col_offset=self.col,
            offset=self.pos,
            end_offset=self.pos + len(self.char),
            source_file=self.source_file,
        )


class EmptyMatchError(LexicalError):
    """A rule matched the empty string, so the cursor cannot advance."""

    def __init__(
        self,
        rule: Rule,
        char: str,
        line: int,
        col: int,
        pos: int = 0,
        source_file: str | None = None,
    ) -> None:
        self.rule = rule
        super().__init__(
            char,
            line,
            col,
            pos,
            source_file,
            message=f"Rule '{rule.name}' matched the empty string before {char!r}",
        )


class PatternError(RuletokError):
    """A rule's pattern fragment failed to compile.

    The underlying ``re.error`` is chained as ``__cause__``.
    """

    def __init__(self, rule: Rule, rule_index: int, error: re.error | str) -> None:
        """Initialize pattern error.

        Args:
            rule: The rule whose pattern is malformed
            rule_index: Precedence index of the rule
            error: The ``re.error`` (or description) reported by the regex engine
        """
        self.rule = rule
        self.rule_index = rule_index
        self.error = error
        super().__init__(
            f"Rule '{rule.name}' (#{rule_index}) has an invalid pattern "
            f"{rule.pattern!r}: {error}"
        )
