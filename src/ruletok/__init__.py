"""
ruletok — Rule-driven lexical tokenizer engine

Turns source text into an ordered sequence of classified tokens, given an
ordered list of regex rules. Built as a front end for hand-written parsers
of small languages, config formats and DSLs. Zero runtime dependencies.

Quick Start:
    >>> from ruletok import Lexer, Rule
    >>> lexer = Lexer([
    ...     Rule("NUMBER", "INT", r"\\d+"),
    ...     Rule("OP", "PLUS", r"\\+"),
    ...     Rule("WS", "SPACE", r"[ \\t]+"),
    ... ])
    >>> [t.value for t in lexer.load("1 + 22").tokenize()]
    ['1', ' ', '+', ' ', '22']

    >>> # Keywords win over identifiers when prepended
    >>> lexer = Lexer([Rule("IDENT", "IDENT", r"[a-z]+")])
    >>> lexer.extend(prepend_rules=[Rule("KEYWORD", "IF", "if")])
    Lexer(2 rules, stale)
    >>> lexer.load("if").tokenize()[0].type
    'KEYWORD'

Precedence is rule order, never match length: put ``"=="`` ahead of ``"="``.
"""

from collections.abc import Iterable

from ruletok.cache import DictMatcherCache, MatcherCache, hash_rules
from ruletok.config import (
    LexerConfig,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from ruletok.errors import EmptyMatchError, LexicalError, PatternError, RuletokError
from ruletok.lexer import CompiledMatcher, InputCursor, Lexer, compile_rules
from ruletok.location import SourceLocation
from ruletok.profiling import LexAccumulator, get_lex_accumulator, profiled_lex
from ruletok.rules import Rule, RuleSet
from ruletok.serialization import (
    rules_from_dicts,
    rules_from_json,
    token_to_dict,
    tokens_to_json,
)
from ruletok.tokens import EOF, Token

__version__ = "0.1.0"


def tokenize(
    source: str,
    rules: Iterable[Rule],
    *,
    source_file: str | None = None,
    config: LexerConfig | None = None,
    cache: MatcherCache | None = None,
) -> list[Token]:
    """Tokenize ``source`` with ``rules`` in one call.

    Args:
        source: Text to tokenize
        rules: Rules in precedence order
        source_file: Optional source file path for error messages
        config: Lexer configuration (uses the context config if None)
        cache: Optional compiled-matcher cache. Pass one when tokenizing
            many sources with the same rules to compile only once.

    Returns:
        Tokens in source order

    Raises:
        PatternError: If a rule pattern is malformed
        LexicalError: If no rule matches somewhere in ``source``

    Example:
        >>> [t.name for t in tokenize("ab", [Rule("L", "LETTER", "[a-z]")])]
        ['LETTER', 'LETTER']

    """
    lexer = Lexer(rules, config=config, cache=cache)
    return lexer.compile().load(source, source_file).tokenize()


__all__ = [
    # Main API
    "tokenize",
    "Lexer",
    "Rule",
    "RuleSet",
    "Token",
    "EOF",
    "InputCursor",
    "CompiledMatcher",
    "compile_rules",
    # Errors
    "RuletokError",
    "LexicalError",
    "EmptyMatchError",
    "PatternError",
    # Location
    "SourceLocation",
    # Configuration
    "LexerConfig",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
    # Caching
    "MatcherCache",
    "DictMatcherCache",
    "hash_rules",
    # Profiling
    "LexAccumulator",
    "get_lex_accumulator",
    "profiled_lex",
    # Serialization
    "rules_from_dicts",
    "rules_from_json",
    "token_to_dict",
    "tokens_to_json",
]
