"""Token definition for the ruletok lexer.

The lexer produces a sequence of Token objects that a parser consumes.
Each Token has a type tag, the name of the rule that produced it, the
matched text, and the position where the match began.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand,
so tokens whose location is never read cost no extra allocation.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ruletok.location import SourceLocation

# Type and name tag of the optional end-of-input sentinel token.
EOF = "EOF"


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: Type tag of the rule that matched (e.g. "KEYWORD")
        name: Name of the rule that matched (e.g. "IF")
        value: The exact matched substring
        line: Line where the match began (1-indexed)
        col: Column where the match began (1-indexed)
        pos: Absolute offset where the match began (0-indexed)

    Example:
            >>> tok = Token("NUMBER", "INT", "42", 1, 5, 4)
            >>> str(tok)
            'Token(type=NUMBER, value=42)'
            >>> tok.end
            6

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.
        The lazy location cache uses an idempotent write.

    """

    type: str
    name: str
    value: str
    line: int
    col: int
    pos: int
    source_file: str | None = field(default=None, repr=False, compare=False)
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def end(self) -> int:
        """Offset just past the last matched character."""
        return self.pos + len(self.value)

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached).

        The end line/column are derived from the token's own text, so
        multi-line tokens report where they actually stop.

        Returns:
            SourceLocation object for this token.
        """
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from ruletok.location import SourceLocation

        value = self.value
        newlines = value.count("\n")
        if newlines:
            end_line = self.line + newlines
            end_col = len(value) - value.rfind("\n")
        else:
            end_line = self.line
            end_col = self.col + len(value)

        loc = SourceLocation(
            lineno=self.line,
            col_offset=self.col,
            offset=self.pos,
            end_offset=self.end,
            end_lineno=end_line,
            end_col_offset=end_col,
            source_file=self.source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __str__(self) -> str:
        return f"Token(type={self.type}, value={self.value})"

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        label = self.type if self.type == self.name else f"{self.type}:{self.name}"
        return f"Token({label}, {val!r}, {self.line}:{self.col})"
