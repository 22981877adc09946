"""Compile once, tokenize 1000 sources in parallel sessions."""

from concurrent.futures import ThreadPoolExecutor

from ruletok import Lexer, Rule

lexer = Lexer([
    Rule("IDENT", "KEY", r"[a-z_]+"),
    Rule("OP", "ASSIGN", r"="),
    Rule("NUMBER", "INT", r"\d+"),
    Rule("WS", "WS", r"\s+"),
]).compile()

docs = [f"key_{chr(97 + i % 26)} = {i}\n" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(lambda doc: lexer.session(doc).tokenize(), docs))

print(f"Tokenized {len(results)} sources in parallel")
print("First:", results[0])
