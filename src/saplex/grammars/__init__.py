"""Built-in grammars.

- SAPL: policy language (tag ``sapl``)
- SAPL_TEST: test specification language (tag ``sapl-test``, alias ``sapltest``)

Both are module-level singletons, built and validated once at import.
"""

from saplex.grammars.sapl import SAPL, SAPL_KEYWORDS
from saplex.grammars.sapl_test import SAPL_TEST

BUILTIN_GRAMMARS = (SAPL, SAPL_TEST)

__all__ = ["BUILTIN_GRAMMARS", "SAPL", "SAPL_KEYWORDS", "SAPL_TEST"]
