"""Layer keywords over an identifier rule with extend()."""

from ruletok import LexicalError, Lexer, Rule

lexer = Lexer([
    Rule("IDENT", "IDENT", r"[A-Za-z_]\w*"),
    Rule("WS", "SPACE", r"[ \t\n]+"),
])
lexer.extend(prepend_rules=[
    Rule("KEYWORD", "IF", r"if\b"),
    Rule("KEYWORD", "ELSE", r"else\b"),
])

for token in lexer.load("if ready\nelse wait"):
    print(token)

try:
    lexer.load("if ok\n  $x").tokenize()
except LexicalError as exc:
    print(f"{exc} (char {exc.char!r})")
