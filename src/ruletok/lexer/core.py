"""Rule-driven lexer engine.

The engine owns an ordered RuleSet, compiles it into one composite matcher,
and drives that matcher over an InputCursor to produce Tokens.

Precedence is list order (ordered choice), never match length. The matcher
is recompiled lazily whenever the rule set changed since the last compile,
so ``extend()`` never needs a manual ``compile()`` afterwards.

Thread Safety:
A Lexer holds one cursor and is not safe to share between threads. Compile
once, then call ``session()`` to get an independent Lexer per thread; all
sessions share the immutable compiled matcher.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from ruletok.cache import MatcherCache, hash_rules
from ruletok.config import LexerConfig, get_lexer_config
from ruletok.errors import EmptyMatchError, LexicalError, RuletokError
from ruletok.lexer.compiler import CompiledMatcher, compile_rules
from ruletok.lexer.cursor import InputCursor
from ruletok.profiling import get_lex_accumulator
from ruletok.rules import Rule, RuleSet
from ruletok.tokens import EOF, Token
from ruletok.utils.logger import get_logger

logger = get_logger(__name__)

# Option spellings accepted by extend(options)
_EXTEND_KEYS = {
    "prependRules": "prepend",
    "prepend_rules": "prepend",
    "appendRules": "append",
    "append_rules": "append",
}


class Lexer:
    """Ordered-choice lexer over a caller-supplied rule list.

    Usage:
            >>> lexer = Lexer([
            ...     Rule("OP", "EQ", "=="),
            ...     Rule("OP", "ASSIGN", "="),
            ...     Rule("IDENT", "IDENT", r"[a-z]+"),
            ... ])
            >>> [t.value for t in lexer.load("a==b").tokenize()]
            ['a', '==', 'b']

    """

    __slots__ = (
        "_rules",
        "_matcher",
        "_compiled_version",  # RuleSet.version the matcher was built from
        "_config",
        "_cache",
        "_cursor",
        "_source_file",
        "_eof_emitted",
    )

    def __init__(
        self,
        rules: Iterable[Rule] = (),
        *,
        config: LexerConfig | None = None,
        cache: MatcherCache | None = None,
    ) -> None:
        """Initialize lexer with a base rule list.

        Args:
            rules: Rules in precedence order (first is tried first)
            config: Lexer configuration; defaults to the context config
            cache: Optional compiled-matcher cache shared between lexers
        """
        self._rules = RuleSet(rules)
        self._matcher: CompiledMatcher | None = None
        self._compiled_version = -1
        self._config = config if config is not None else get_lexer_config()
        self._cache = cache
        self._cursor: InputCursor | None = None
        self._source_file: str | None = None
        self._eof_emitted = False

    # =========================================================================
    # Rules and compilation
    # =========================================================================

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Rules in precedence order."""
        return self._rules.ordered()

    @property
    def rule_set(self) -> RuleSet:
        return self._rules

    @property
    def config(self) -> LexerConfig:
        return self._config

    @property
    def stale(self) -> bool:
        """True when the matcher does not reflect the current rules."""
        return self._matcher is None or self._compiled_version != self._rules.version

    def extend(
        self,
        options: Mapping[str, Iterable[Rule]] | None = None,
        *,
        prepend_rules: Iterable[Rule] | None = None,
        append_rules: Iterable[Rule] | None = None,
    ) -> Lexer:
        """Add rules ahead of or behind the current ones.

        Prepended rules take precedence over every existing rule; appended
        rules are tried after every existing rule. Each list keeps its own
        order. Options may also be passed as a mapping with the keys
        ``prependRules``/``appendRules`` (or their snake_case spellings).

        Returns:
            self, for chaining

        Raises:
            TypeError: On an unrecognized option key.
        """
        prepend: list[Rule] = list(prepend_rules or ())
        append: list[Rule] = list(append_rules or ())
        if options is not None:
            for key, value in options.items():
                target = _EXTEND_KEYS.get(key)
                if target is None:
                    raise TypeError(f"extend() got an unexpected option {key!r}")
                (prepend if target == "prepend" else append).extend(value or ())

        self._rules.prepend(prepend)
        self._rules.append(append)
        if prepend or append:
            logger.debug(
                "Extended lexer: %d prepended, %d appended, %d rules total",
                len(prepend),
                len(append),
                len(self._rules),
            )
        return self

    def compile(self) -> Lexer:
        """Build the composite matcher if the rules changed since last time.

        Idempotent; safe to call repeatedly.

        Returns:
            self, for chaining

        Raises:
            PatternError: If a rule's pattern is malformed.
        """
        if not self.stale:
            return self

        rules = self._rules.ordered()
        flags = self._config.flags
        key = None
        matcher = None
        if self._cache is not None:
            key = hash_rules(rules, flags)
            matcher = self._cache.get(key)

        if matcher is None:
            matcher = compile_rules(rules, flags)
            acc = get_lex_accumulator()
            if acc is not None:
                acc.record_compile()
            if self._cache is not None and key is not None:
                self._cache.put(key, matcher)
            logger.debug("Compiled %d rules", len(rules))
        else:
            logger.debug("Reused cached matcher for %d rules", len(rules))

        self._matcher = matcher
        self._compiled_version = self._rules.version
        return self

    @property
    def matcher(self) -> CompiledMatcher:
        """The compiled matcher, compiling first if stale."""
        self.compile()
        assert self._matcher is not None
        return self._matcher

    # =========================================================================
    # Input
    # =========================================================================

    def load(self, source: str, source_file: str | None = None) -> Lexer:
        """Start a fresh tokenization session over ``source``.

        Args:
            source: Text to tokenize
            source_file: Optional file path for locations and error messages

        Returns:
            self, for chaining
        """
        self._cursor = InputCursor(source)
        self._source_file = source_file
        self._eof_emitted = False
        acc = get_lex_accumulator()
        if acc is not None:
            acc.record_load(len(source))
        return self

    @property
    def cursor(self) -> InputCursor | None:
        return self._cursor

    def session(self, source: str, source_file: str | None = None) -> Lexer:
        """Independent lexer over ``source`` sharing this compiled matcher.

        Each session owns its own cursor, so sessions may run on different
        threads concurrently.
        """
        matcher = self.matcher
        other = Lexer(self._rules.ordered(), config=self._config, cache=self._cache)
        other._matcher = matcher
        other._compiled_version = other._rules.version
        return other.load(source, source_file)

    # =========================================================================
    # Matching
    # =========================================================================

    def next_token(self) -> Token | None:
        """Match one token at the cursor and advance past it.

        Tokens whose type is in ``config.skip_types`` are consumed silently.

        Returns:
            The next Token, or None at end of input. With ``emit_eof`` set, a
            single EOF token precedes the first None.

        Raises:
            LexicalError: If no rule matches at the cursor.
            PatternError: If recompiling after extend() fails.
        """
        cursor = self._cursor
        if cursor is None:
            raise RuletokError("No source loaded; call load() before next_token()")
        matcher = self.matcher
        skip_types = self._config.skip_types

        while not cursor.at_end():
            token = self._match(matcher, cursor)
            if token.type not in skip_types:
                acc = get_lex_accumulator()
                if acc is not None:
                    acc.record_token()
                return token

        if self._config.emit_eof and not self._eof_emitted:
            self._eof_emitted = True
            return Token(
                EOF, EOF, "", cursor.line, cursor.col, cursor.pos, self._source_file
            )
        return None

    def _match(self, matcher: CompiledMatcher, cursor: InputCursor) -> Token:
        pos, line, col = cursor.snapshot()
        result = matcher.match(cursor.buffer, pos)
        if result is None:
            raise LexicalError(cursor.peek(), line, col, pos, self._source_file)

        index, end = result
        rule = matcher.rules[index]
        if end == pos:
            raise EmptyMatchError(rule, cursor.peek(), line, col, pos, self._source_file)

        token = Token(
            rule.type,
            rule.name,
            cursor.buffer[pos:end],
            line,
            col,
            pos,
            self._source_file,
        )
        cursor.advance_to(end)
        return token

    def tokenize(self) -> list[Token]:
        """Tokenize the rest of the loaded source.

        Returns:
            All remaining tokens in order. Empty input gives an empty list.

        Raises:
            LexicalError: On the first unmatched character; no partial result.
        """
        tokens = list(self.iter_tokens())
        acc = get_lex_accumulator()
        if acc is not None:
            acc.record_tokenize()
        return tokens

    def iter_tokens(self) -> Iterator[Token]:
        """Lazily yield the remaining tokens, one match per step.

        Same tokens as tokenize(); suspends between tokens and resumes from
        the cursor. Not restartable.
        """
        while (token := self.next_token()) is not None:
            yield token

    def __iter__(self) -> Iterator[Token]:
        return self.iter_tokens()

    def __repr__(self) -> str:
        state = "stale" if self.stale else "compiled"
        return f"Lexer({len(self._rules)} rules, {state})"
