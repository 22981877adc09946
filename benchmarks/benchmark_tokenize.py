"""Benchmark tokenization throughput.

Compares cold compile + tokenize against tokenizing with a warm matcher
cache, and eager tokenize() against lazy iter_tokens().

Run with:
    pytest benchmarks/benchmark_tokenize.py -v --benchmark-only
"""

try:
    import pytest

    from ruletok import DictMatcherCache, Lexer, LexerConfig

    @pytest.mark.benchmark(group="tokenize")
    def test_benchmark_cold_tokenize(benchmark, ini_rules, large_document):
        """Compile and tokenize from scratch every round."""

        def run():
            Lexer(ini_rules).load(large_document).tokenize()

        benchmark(run)

    @pytest.mark.benchmark(group="tokenize")
    def test_benchmark_cached_tokenize(benchmark, ini_rules, large_document):
        """Reuse the compiled matcher through a cache."""
        cache = DictMatcherCache()

        def run():
            Lexer(ini_rules, cache=cache).load(large_document).tokenize()

        benchmark(run)

    @pytest.mark.benchmark(group="tokenize")
    def test_benchmark_lazy_iteration(benchmark, ini_rules, large_document):
        """Consume iter_tokens() without building a list."""
        lexer = Lexer(ini_rules).compile()

        def run():
            for _ in lexer.load(large_document).iter_tokens():
                pass

        benchmark(run)

    @pytest.mark.benchmark(group="tokenize-skip")
    def test_benchmark_skip_whitespace(benchmark, ini_rules, large_document):
        """Tokenize with whitespace and comments filtered out."""
        config = LexerConfig(skip_types=frozenset({"WS", "COMMENT"}))
        lexer = Lexer(ini_rules, config=config).compile()

        def run():
            lexer.load(large_document).tokenize()

        benchmark(run)

except ImportError:
    pass  # pytest not available
