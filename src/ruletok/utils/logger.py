"""Logger lookup under the ``ruletok`` namespace.

Everything ruletok logs goes below the ``ruletok`` logger, so one call
controls it all:

    >>> import logging
    >>> logging.getLogger("ruletok").setLevel(logging.DEBUG)

What is logged, all at DEBUG:
    - ``ruletok.lexer.core``: matcher builds, cache reuse and rule-list
      extensions

Matching and token emission are never logged; they run once per token.
No handlers are installed here. Attach them in the application.
"""

from __future__ import annotations

import logging

_ROOT = "ruletok"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the ruletok namespace.

    Module names already under ``ruletok`` are used as they are. Anything
    else (an example script, a caller's helper) is nested under it.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("ruletok.lexer.core").name
        'ruletok.lexer.core'
        >>> get_logger("tools.dsl").name
        'ruletok.tools.dsl'
    """
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")
