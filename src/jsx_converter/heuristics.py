"""Text heuristics applied to compiler output.

Both helpers are pattern based, not syntax aware. Call sites only depend on
these two functions, so either can be replaced by a real parser later.
"""

from __future__ import annotations

import re

# "<", one word character, then whitespace, ">" or "/". Multi-letter tags such
# as "<div>" do not match, while comparisons like "a <b >" and string literals
# like "'<p>'" do. Both misclassifications are accepted.
_MARKUP_PATTERN = re.compile(r"<\w[\s>/]")

_STANDALONE_TYPE_IMPORT = re.compile(r"import\s+type\s+[^;]+;")
_NAMED_TYPE_IMPORT = re.compile(
    r"import\s*\{[^}]*\btype\s[^}]*\}\s*from\s*['\"][^'\"]+['\"]\s*;?"
)


def looks_like_markup(text: str) -> bool:
    """Return ``True`` when ``text`` contains an opening-tag-like pattern."""
    return _MARKUP_PATTERN.search(text) is not None


def strip_type_imports(text: str) -> str:
    """Remove ``import type ...;`` statements and named imports using ``type``."""
    text = _STANDALONE_TYPE_IMPORT.sub("", text)
    return _NAMED_TYPE_IMPORT.sub("", text)
