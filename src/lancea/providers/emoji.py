from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from lancea.errors import ProviderError
from lancea.providers.base import make_key, split_key
from lancea.providers.clipboard import ClipboardWriter
from lancea.providers.emoji_catalog import EMOJI_CATALOG
from lancea.schemas.envelope import Preview, ResultItem
from lancea.text import norm, strip_command_prefix
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

PROVIDER_ID = "emoji"
ALIASES = ("/emoji", "/em")

SCORE_SHORTCODE = 1.0
SCORE_NAME_PREFIX = 0.9
SCORE_KEYWORD = 0.8
SCORE_KEYWORD_PREFIX = 0.6
SCORE_SUBSTRING = 0.4
SCORE_BROWSE = 0.1


@dataclass(frozen=True)
class EmojiRecord:
    key: str
    glyph: str
    name: str
    shortcodes: Tuple[str, ...]
    keywords: Tuple[str, ...]

    def score(self, q: str) -> Optional[float]:
        """Score a folded, non-empty query against this record; None means no match."""
        if any(sc.strip(":").lower() == q for sc in self.shortcodes):
            return SCORE_SHORTCODE
        name = norm(self.name)
        if name.startswith(q) or any(w.startswith(q) for w in name.split()):
            return SCORE_NAME_PREFIX
        kws = [norm(k) for k in self.keywords]
        if q in kws:
            return SCORE_KEYWORD
        if any(k.startswith(q) for k in kws):
            return SCORE_KEYWORD_PREFIX
        if q in name or any(q in k for k in kws) or any(q in sc.lower() for sc in self.shortcodes):
            return SCORE_SUBSTRING
        return None


class EmojiProvider:
    """Fixed-catalog provider backed by the bundled emoji table.

    Actions: ``copy_glyph`` and ``copy_shortcode``. The text goes to the
    optional clipboard writer; without one the client does the copying.
    """

    id = PROVIDER_ID

    def __init__(self, catalog: Iterable[tuple] = EMOJI_CATALOG, clipboard: ClipboardWriter | None = None, aliases: Tuple[str, ...] = ALIASES):
        records = [EmojiRecord(key, glyph, name, tuple(sc), tuple(kw)) for key, glyph, name, sc, kw in catalog]
        self._records: Tuple[EmojiRecord, ...] = tuple(records)
        self._by_key: Dict[str, EmojiRecord] = {r.key: r for r in records}
        self.clipboard = clipboard
        self.aliases = tuple(sorted(aliases, key=len, reverse=True))
        logger.debug("EmojiProvider loaded %s records", len(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def _lookup(self, key: str) -> Optional[EmojiRecord]:
        provider_id, local_id = split_key(key)
        if provider_id and provider_id != PROVIDER_ID:
            return None
        return self._by_key.get(local_id)

    def _to_item(self, rec: EmojiRecord, score: float) -> ResultItem:
        return ResultItem(
            key=make_key(PROVIDER_ID, rec.key),
            title=rec.name,
            provider_id=PROVIDER_ID,
            score=score,
            extras={
                "glyph": rec.glyph,
                "shortcodes": list(rec.shortcodes),
                "keywords": list(rec.keywords),
            },
        )

    def search(self, query: str) -> List[ResultItem]:
        q = norm(strip_command_prefix(query or "", self.aliases))
        if not q:
            # browsing: whole catalog at a flat low score
            return [self._to_item(r, SCORE_BROWSE) for r in self._records]

        scored: List[Tuple[float, EmojiRecord]] = []
        for rec in self._records:
            s = rec.score(q)
            if s is not None:
                scored.append((s, rec))
        scored.sort(key=lambda t: (-t[0], t[1].name))
        logger.debug("emoji search %r -> %s hits", q, len(scored))
        return [self._to_item(rec, s) for s, rec in scored]

    def preview(self, key: str) -> Optional[Preview]:
        rec = self._lookup(key)
        if rec is None:
            return None
        return Preview(
            preview_kind="card",
            data={
                "glyph": rec.glyph,
                "title": rec.name,
                "shortcodes": list(rec.shortcodes),
                "keywords": list(rec.keywords),
            },
        )

    def execute(self, action: str, key: str) -> bool:
        rec = self._lookup(key)
        if rec is None:
            return False
        if action == "copy_glyph":
            text = rec.glyph
        elif action == "copy_shortcode":
            text = rec.shortcodes[0] if rec.shortcodes else f":{rec.key}:"
        else:
            return False
        try:
            if self.clipboard is not None:
                self.clipboard(text)
        except ProviderError as e:
            logger.warning("copy failed for %s: %s", key, e)
            return False
        return True
