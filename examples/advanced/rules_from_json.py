"""Load a grammar from JSON and dump tokens in the external shape."""

from ruletok import Lexer, rules_from_json, tokens_to_json

GRAMMAR = """
[
  {"name": "COMMENT", "pattern": "#[^\\\\n]*"},
  {"type": "KEYWORD", "name": "TRUE", "pattern": "true\\\\b"},
  {"type": "IDENT", "name": "IDENT", "pattern": "[a-z]+"},
  {"type": "OP", "name": "ASSIGN", "pattern": "="},
  {"type": "WS", "name": "WS", "pattern": "\\\\s+"}
]
"""

rules = rules_from_json(GRAMMAR)
tokens = Lexer(rules).load("debug = true # on").tokenize()
print(tokens_to_json(tokens, indent=2))
