"""Text folding shared by the providers' matchers."""

from __future__ import annotations

import re
import unicodedata

_WS = re.compile(r"\s+")


def norm(s: str | None) -> str:
    """Fold ``s`` for matching: NFKD, strip accents, lowercase, collapse whitespace.

    Control characters become spaces.
    """
    if not s:
        return ""
    decomposed = unicodedata.normalize("NFKD", s)
    chars = []
    for ch in decomposed:
        if unicodedata.combining(ch):
            continue
        if unicodedata.category(ch).startswith("C"):
            chars.append(" ")
            continue
        chars.append(ch)
    return _WS.sub(" ", "".join(chars).lower()).strip()


def starts_with_token(hay: str | None, q: str) -> bool:
    return bool(hay) and norm(hay).startswith(norm(q))


def strip_command_prefix(query: str, aliases) -> str:
    """Remove the first matching slash alias from the start of ``query``.

    ``aliases`` must be ordered longest first so ``/emoji`` wins over ``/em``.
    """
    q = query.strip()
    for alias in aliases:
        if q.startswith(alias):
            return q[len(alias):].strip()
    return q
