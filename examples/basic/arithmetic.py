"""Tokenize arithmetic in a few lines — ordered rules, zero deps."""

from ruletok import LexerConfig, Rule, tokenize

rules = [
    Rule("NUMBER", "FLOAT", r"\d+\.\d+"),
    Rule("NUMBER", "INT", r"\d+"),
    Rule("OP", "POW", r"\*\*"),  # before "*" so "**" stays one token
    Rule("OP", "MUL", r"\*"),
    Rule("OP", "ADD", r"\+"),
    Rule("OP", "SUB", r"-"),
    Rule("PAREN", "LPAREN", r"\("),
    Rule("PAREN", "RPAREN", r"\)"),
    Rule("WS", "SPACE", r"\s+"),
]

config = LexerConfig(skip_types=frozenset({"WS"}))
for token in tokenize("2 ** (3.5 + 40) * 7", rules, config=config):
    print(repr(token))
