"""LexAccumulator: opt-in profiling for tokenization.

This module provides accumulated metrics while lexing:
- Total elapsed time
- Source length tokenized
- Tokens emitted
- Matcher compilations

Zero overhead when disabled (get_lex_accumulator() returns None).

Example:
    from ruletok import Lexer
    from ruletok.profiling import profiled_lex

    with profiled_lex() as metrics:
        Lexer(rules).load(source).tokenize()

    print(metrics.summary())
    # {"total_ms": 0.4, "source_length": 120, "token_count": 31, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class LexAccumulator:
    """Accumulated metrics during tokenization.

    Attributes:
        start_time: Profiling start timestamp.
        source_length: Characters of source loaded.
        token_count: Tokens emitted by next_token(), whether called directly,
            through iter_tokens() or through tokenize(). Skipped tokens and
            the EOF sentinel are excluded.
        compile_count: Matcher compilations (cache hits excluded).
        tokenize_calls: Number of tokenize() calls recorded.

    """

    start_time: float = field(default_factory=perf_counter)
    source_length: int = 0
    token_count: int = 0
    compile_count: int = 0
    tokenize_calls: int = 0

    def record_load(self, source_length: int) -> None:
        self.source_length += source_length

    def record_compile(self) -> None:
        self.compile_count += 1

    def record_token(self) -> None:
        self.token_count += 1

    def record_tokenize(self) -> None:
        """Record a finished tokenize() call; its tokens are already counted."""
        self.tokenize_calls += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of lexing metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "source_length": self.source_length,
            "token_count": self.token_count,
            "compile_count": self.compile_count,
            "tokenize_calls": self.tokenize_calls,
        }


_accumulator: ContextVar[LexAccumulator | None] = ContextVar(
    "lex_accumulator",
    default=None,
)


def get_lex_accumulator() -> LexAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_lex() -> Iterator[LexAccumulator]:
    """Context manager for profiled lexing.

    Creates a LexAccumulator and makes it available via
    get_lex_accumulator() for the duration of the with block.

    Yields:
        LexAccumulator that will be populated while lexing.

    """
    acc = LexAccumulator()
    token: Token[LexAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
