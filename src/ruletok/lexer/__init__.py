"""Rule-driven lexer engine for ruletok.

The engine compiles an ordered rule list into one composite regex and
matches it at the cursor, one token per step.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, InputCursor, CompiledMatcher
├── core.py              # Lexer (extend, compile, load, next_token, tokenize)
├── compiler.py          # Composite matcher and branch table
└── cursor.py            # InputCursor (offset, line, column)

Usage:
    >>> from ruletok import Rule
    >>> from ruletok.lexer import Lexer
    >>> lexer = Lexer([Rule("WORD", "WORD", r"[a-z]+"), Rule("WS", "NL", "\\n")])
    >>> for token in lexer.load("ab\\ncd").tokenize():
    ...     print(repr(token))
    Token(WORD, 'ab', 1:1)
    Token(WS:NL, '\\n', 1:3)
    Token(WORD, 'cd', 2:1)

"""

from ruletok.lexer.compiler import CompiledMatcher, branch_name, compile_rules
from ruletok.lexer.core import Lexer
from ruletok.lexer.cursor import InputCursor

__all__ = ["CompiledMatcher", "InputCursor", "Lexer", "branch_name", "compile_rules"]
