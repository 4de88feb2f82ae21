"""
Text normalization shared by reference table loading and matching.
"""

import re

_DASHES_RE = re.compile(r"[‐‑‒–—―-]")
_DISALLOWED_RE = re.compile(r"[^a-z0-9 -]")


def normalize(text: str) -> str:
    """
    Normalize free text for fuzzy comparison.

    Lower-cases, unifies dash variants to '-', spells out '&' as 'and' and
    drops everything outside [a-z0-9 -]. Idempotent; '' stays ''.
    """
    text = (text or "").lower()
    text = _DASHES_RE.sub("-", text)
    text = text.replace("&", "and")
    return _DISALLOWED_RE.sub("", text)
