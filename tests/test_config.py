"""Tests for ContextVar-based lexer configuration.

Validates the frozen dataclass, get/set/reset, the context manager and
thread isolation.
"""

import re
from threading import Thread

import pytest

from ruletok import (
    Lexer,
    LexerConfig,
    Rule,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from ruletok.config import parse_flags

WS_RULES = [Rule("WORD", "WORD", r"\w+"), Rule("WS", "SPACE", r"\s+")]


class TestLexerConfigDataclass:
    """Test LexerConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = LexerConfig()
        assert config.flags == 0
        assert config.skip_types == frozenset()
        assert config.emit_eof is False

    def test_immutability(self) -> None:
        config = LexerConfig()
        with pytest.raises(AttributeError):
            config.emit_eof = True  # type: ignore[misc]

    def test_from_dict(self) -> None:
        config = LexerConfig.from_dict({
            "flags": ["IGNORECASE", "m"],
            "skip_types": ["WS", "COMMENT"],
            "emit_eof": True,
            "unknown_key": "ignored",
        })
        assert config.flags == re.IGNORECASE | re.MULTILINE
        assert config.skip_types == frozenset({"WS", "COMMENT"})
        assert config.emit_eof is True

    def test_from_dict_single_skip_type(self) -> None:
        """A bare string is one type name, not a set of characters."""
        config = LexerConfig.from_dict({"skip_types": "WS"})
        assert config.skip_types == frozenset({"WS"})

    def test_from_dict_int_flags(self) -> None:
        assert LexerConfig.from_dict({"flags": re.VERBOSE}).flags == re.VERBOSE

    def test_from_empty_dict(self) -> None:
        assert LexerConfig.from_dict({}) == LexerConfig()


class TestParseFlags:

    def test_single_name(self) -> None:
        assert parse_flags("DOTALL") == re.DOTALL

    def test_short_alias(self) -> None:
        assert parse_flags(["I", "X"]) == re.IGNORECASE | re.VERBOSE

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            parse_flags(["NOT_A_FLAG"])


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_lexer_config()

    def test_default_config(self) -> None:
        assert get_lexer_config() == LexerConfig()

    def test_set_and_get(self) -> None:
        custom = LexerConfig(emit_eof=True)
        set_lexer_config(custom)
        assert get_lexer_config() is custom

    def test_reset(self) -> None:
        set_lexer_config(LexerConfig(emit_eof=True))
        reset_lexer_config()
        assert get_lexer_config().emit_eof is False

    def test_lexer_reads_context_config(self) -> None:
        set_lexer_config(LexerConfig(skip_types=frozenset({"WS"})))
        tokens = Lexer(WS_RULES).load("a b").tokenize()
        assert [t.value for t in tokens] == ["a", "b"]

    def test_explicit_config_wins(self) -> None:
        set_lexer_config(LexerConfig(skip_types=frozenset({"WS"})))
        tokens = Lexer(WS_RULES, config=LexerConfig()).load("a b").tokenize()
        assert [t.value for t in tokens] == ["a", " ", "b"]

    def test_config_captured_at_construction(self) -> None:
        lexer = Lexer(WS_RULES)
        set_lexer_config(LexerConfig(skip_types=frozenset({"WS"})))
        assert len(lexer.load("a b").tokenize()) == 3


class TestContextManager:

    def test_temporary_config(self) -> None:
        with lexer_config_context(LexerConfig(emit_eof=True)):
            assert get_lexer_config().emit_eof is True
        assert get_lexer_config().emit_eof is False

    def test_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with lexer_config_context(LexerConfig(emit_eof=True)):
                raise RuntimeError("boom")
        assert get_lexer_config().emit_eof is False

    def test_nested(self) -> None:
        outer = LexerConfig(flags=re.IGNORECASE)
        inner = LexerConfig(emit_eof=True)
        with lexer_config_context(outer):
            with lexer_config_context(inner):
                assert get_lexer_config() is inner
            assert get_lexer_config() is outer


class TestThreadIsolation:

    def test_each_thread_sees_its_own_config(self) -> None:
        """Threads setting different configs never see each other's."""
        results: dict[int, list[str]] = {}

        def worker(thread_id: int, config: LexerConfig) -> None:
            set_lexer_config(config)
            tokens = Lexer(WS_RULES).load("a b c").tokenize()
            results[thread_id] = [t.value for t in tokens]

        configs = [
            LexerConfig(skip_types=frozenset({"WS"})),
            LexerConfig(),
            LexerConfig(skip_types=frozenset({"WORD"})),
        ]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results[0] == ["a", "b", "c"]
        assert results[1] == ["a", " ", "b", " ", "c"]
        assert results[2] == [" ", " "]
