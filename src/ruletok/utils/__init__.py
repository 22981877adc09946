"""Utility modules for ruletok.

Provides:
- hashing: hash_str, hash_parts for cache keys
- logger: get_logger for logging
"""

from ruletok.utils.hashing import hash_parts, hash_str
from ruletok.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_parts",
    "hash_str",
]
