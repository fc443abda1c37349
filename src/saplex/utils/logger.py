"""Logger access for saplex modules.

All saplex loggers live under the ``saplex`` namespace. Raising that one
logger to DEBUG shows grammar registration and every unmatched character
the lexer skips::

    import logging

    logging.basicConfig(format="%(name)s: %(message)s")
    logging.getLogger("saplex").setLevel(logging.DEBUG)

    lex("policy ~", "sapl")
    # saplex.lexer.core: No rule in state 'root' matches '~' at offset 7
    # saplex.lexer.core: Lexed 8 chars as SAPL: 3 tokens, 1 unmatched

Example:
    >>> get_logger("saplex.registry").name
    'saplex.registry'
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the saplex namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("grammars.sapl").name
        'saplex.grammars.sapl'
    """
    if not (name == "saplex" or name.startswith("saplex.")):
        name = f"saplex.{name}"
    return logging.getLogger(name)
