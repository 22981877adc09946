"""Serialization for tokens and rule lists.

Tokens serialize to the external shape downstream consumers depend on::

    {"type": str, "name": str, "value": str, "line": int, "col": int, "pos": int}

Rule lists serialize to ``{"type", "name", "pattern"}`` dicts, so grammars
can live in JSON or config files. ``type`` defaults to ``name`` on load.

All JSON output is deterministic (sorted keys).

Thread Safety:
    All functions are pure, safe to call from any thread.

"""

import json
from collections.abc import Iterable
from typing import Any

from ruletok.rules import Rule
from ruletok.tokens import Token

_TOKEN_FIELDS = ("type", "name", "value", "line", "col", "pos")


def token_to_dict(token: Token) -> dict[str, Any]:
    """Convert a Token to its external dict shape."""
    return {f: getattr(token, f) for f in _TOKEN_FIELDS}


def token_from_dict(data: dict[str, Any]) -> Token:
    """Rebuild a Token from its external dict shape.

    Raises:
        KeyError: If a required field is missing.
    """
    return Token(
        type=data["type"],
        name=data["name"],
        value=data["value"],
        line=int(data["line"]),
        col=int(data["col"]),
        pos=int(data["pos"]),
    )


def tokens_to_json(tokens: Iterable[Token], *, indent: int | None = None) -> str:
    """Serialize tokens to a JSON array string."""
    return json.dumps(
        [token_to_dict(t) for t in tokens],
        indent=indent,
        sort_keys=True,
        ensure_ascii=False,
    )


def tokens_from_json(json_str: str) -> list[Token]:
    """Deserialize tokens produced by tokens_to_json()."""
    return [token_from_dict(item) for item in json.loads(json_str)]


def rule_to_dict(rule: Rule) -> dict[str, str]:
    return {"type": rule.type, "name": rule.name, "pattern": rule.pattern}


def rule_from_dict(data: dict[str, Any]) -> Rule:
    """Build a Rule from ``{"name", "pattern", "type"?}``.

    Raises:
        KeyError: If ``name`` or ``pattern`` is missing.
    """
    return Rule.of(data["name"], data["pattern"], data.get("type"))


def rules_to_dicts(rules: Iterable[Rule]) -> list[dict[str, str]]:
    return [rule_to_dict(r) for r in rules]


def rules_from_dicts(items: Iterable[dict[str, Any]]) -> list[Rule]:
    """Build an ordered rule list; list order becomes precedence order."""
    return [rule_from_dict(item) for item in items]


def rules_from_json(json_str: str) -> list[Rule]:
    """Load an ordered rule list from a JSON array of rule objects."""
    return rules_from_dicts(json.loads(json_str))


def rules_to_json(rules: Iterable[Rule], *, indent: int | None = None) -> str:
    return json.dumps(rules_to_dicts(rules), indent=indent, sort_keys=True)


__all__ = [
    "rule_from_dict",
    "rule_to_dict",
    "rules_from_dicts",
    "rules_from_json",
    "rules_to_dicts",
    "rules_to_json",
    "token_from_dict",
    "token_to_dict",
    "tokens_from_json",
    "tokens_to_json",
]
