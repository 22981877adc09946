"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

from ruletok import Rule


@pytest.fixture
def ini_rules() -> list[Rule]:
    """Rules for a small INI-like config language."""
    return [
        Rule("COMMENT", "COMMENT", r"[;#][^\n]*"),
        Rule("PUNCT", "LBRACKET", r"\["),
        Rule("PUNCT", "RBRACKET", r"\]"),
        Rule("OP", "EQ", r"=="),
        Rule("OP", "ASSIGN", r"="),
        Rule("NUMBER", "FLOAT", r"\d+\.\d+"),
        Rule("NUMBER", "INT", r"\d+"),
        Rule("STRING", "STRING", r'"(?:[^"\\\n]|\\.)*"'),
        Rule("KEYWORD", "BOOL", r"(?:true|false)\b"),
        Rule("IDENT", "IDENT", r"[A-Za-z_][A-Za-z0-9_.\-]*"),
        Rule("WS", "NEWLINE", r"\n"),
        Rule("WS", "SPACE", r"[ \t]+"),
    ]


@pytest.fixture
def large_document() -> str:
    """Generate a large INI-like document (~100KB)."""
    sections = []
    for i in range(500):
        sections.append(f"""
# Section {i}
[server_{i}]
host = "10.0.{i % 256}.1"
port = {8000 + i}
ratio = {i}.5
enabled = true
name = node-{i}  ; trailing comment
""")
    return "\n".join(sections)
