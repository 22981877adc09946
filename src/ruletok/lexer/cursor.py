"""Input cursor: scan position, line and column over one source buffer.

Thread Safety:
An InputCursor belongs to exactly one tokenization session.
Never share one between threads.

"""

from __future__ import annotations


class InputCursor:
    """Mutable scan state over an immutable source buffer.

    Invariants: ``0 <= pos <= len(buffer)``, ``line >= 1``, ``col >= 1``.

    Usage:
            >>> cursor = InputCursor("ab\\ncd")
            >>> cursor.advance_to(4)
            >>> (cursor.pos, cursor.line, cursor.col)
            (4, 2, 2)

    """

    __slots__ = ("buffer", "pos", "line", "col", "_length")

    def __init__(self, buffer: str) -> None:
        self.buffer = buffer
        self._length = len(buffer)
        self.pos = 0
        self.line = 1
        self.col = 1

    def at_end(self) -> bool:
        return self.pos >= self._length

    def peek(self) -> str:
        """Current character, or empty string at end of input."""
        if self.pos >= self._length:
            return ""
        return self.buffer[self.pos]

    @property
    def remaining(self) -> int:
        """Number of characters not yet consumed."""
        return self._length - self.pos

    def snapshot(self) -> tuple[int, int, int]:
        """Current ``(pos, line, col)``."""
        return self.pos, self.line, self.col

    def advance_to(self, new_pos: int) -> None:
        """Move forward to ``new_pos``, updating line and column.

        Every newline in the consumed span ``[pos, new_pos)`` advances the
        line; the column restarts after the last one.

        Args:
            new_pos: Target offset, ``pos <= new_pos <= len(buffer)``

        Raises:
            ValueError: If ``new_pos`` moves backwards or past the end.
        """
        pos = self.pos
        if new_pos < pos or new_pos > self._length:
            raise ValueError(
                f"cannot advance cursor from {pos} to {new_pos} "
                f"(buffer length {self._length})"
            )
        if new_pos == pos:
            return

        # Count newlines in consumed span using C-optimized str.count
        buffer = self.buffer
        newline_count = buffer.count("\n", pos, new_pos)
        if newline_count:
            last_nl = buffer.rfind("\n", pos, new_pos)
            self.line += newline_count
            self.col = new_pos - last_nl  # chars after last newline + 1
        else:
            self.col += new_pos - pos

        self.pos = new_pos

    def __repr__(self) -> str:
        return f"InputCursor(pos={self.pos}, line={self.line}, col={self.col})"
