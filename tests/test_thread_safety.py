"""Thread safety tests for shared compiled matchers.

A compiled Lexer may hand out sessions to many threads; each session owns
its cursor while all share the immutable matcher. These tests use real
threads to catch actual interference.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

from ruletok import DictMatcherCache, Lexer, Rule, tokenize

RULES = [
    Rule("IDENT", "KEY", r"[a-z_]+"),
    Rule("OP", "ASSIGN", r"="),
    Rule("NUMBER", "INT", r"\d+"),
    Rule("WS", "NEWLINE", r"\n"),
    Rule("WS", "SPACE", r" +"),
]


def _expected(i: int) -> list[tuple[str, int, int]]:
    """(value, line, col) for the document built by _doc(i)."""
    return [
        ("key", 1, 1), (" ", 1, 4), ("=", 1, 5), (" ", 1, 6), (str(i), 1, 7),
        ("\n", 1, 7 + len(str(i))),
        ("other", 2, 1), ("=", 2, 6), (str(i * 2), 2, 7),
    ]


def _doc(i: int) -> str:
    return f"key = {i}\nother={i * 2}"


class TestSharedMatcher:
    """Sessions over one compiled matcher do not interfere."""

    def test_concurrent_sessions(self) -> None:
        lexer = Lexer(RULES).compile()

        def work(i: int) -> tuple[int, list[tuple[str, int, int]]]:
            tokens = lexer.session(_doc(i)).tokenize()
            return i, [(t.value, t.line, t.col) for t in tokens]

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(work, i) for i in range(200)]
            for future in as_completed(futures):
                i, observed = future.result()
                assert observed == _expected(i)

    def test_concurrent_lazy_sessions(self) -> None:
        """Interleaved lazy iteration keeps each session's cursor separate."""
        lexer = Lexer(RULES).compile()
        sessions = [lexer.session(_doc(i)) for i in range(20)]
        iterators = [s.iter_tokens() for s in sessions]
        collected: list[list[str]] = [[] for _ in sessions]
        active = True
        while active:
            active = False
            for idx, it in enumerate(iterators):
                token = next(it, None)
                if token is not None:
                    collected[idx].append(token.value)
                    active = True
        for i, values in enumerate(collected):
            assert "".join(values) == _doc(i)

    def test_concurrent_tokenize_with_locked_cache(self) -> None:
        import threading

        lock = threading.Lock()
        cache = DictMatcherCache()

        class LockedCache:
            def get(self, key):
                with lock:
                    return cache.get(key)

            def put(self, key, matcher):
                with lock:
                    cache.put(key, matcher)

        locked = LockedCache()
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(
                executor.map(lambda i: tokenize(_doc(i), RULES, cache=locked), range(50))
            )
        assert len(cache) == 1
        for i, tokens in enumerate(results):
            assert "".join(t.value for t in tokens) == _doc(i)
