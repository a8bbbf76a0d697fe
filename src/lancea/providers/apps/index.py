from __future__ import annotations

import configparser
from difflib import SequenceMatcher
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from lancea.providers.apps.desktop import AppRecord, application_dirs, iter_desktop_files, parse_desktop_file
from lancea.text import norm, starts_with_token
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

SCORE_PREFIX = 1.0
SCORE_SUBSTRING = 0.35
FUZZY_MIN, FUZZY_MAX = 0.1, 0.7
FUZZY_THRESHOLD = 0.6


def fuzzy_ratio(q: str, hay: str) -> float:
    """Best similarity of ``q`` against any run of words in ``hay`` with the same word count."""
    words = hay.split()
    n = max(1, len(q.split()))
    best = 0.0
    for i in range(max(1, len(words) - n + 1)):
        window = " ".join(words[i:i + n])
        if not window:
            continue
        r = SequenceMatcher(None, q, window).ratio()
        if r > best:
            best = r
    return best


def score_record(app: AppRecord, q: str) -> Optional[float]:
    """Score a folded query against one application; None when it does not match."""
    if (starts_with_token(app.name, q)
            or starts_with_token(app.generic_name, q)
            or starts_with_token(app.comment, q)):
        return SCORE_PREFIX
    r = fuzzy_ratio(q, app.search_blob)
    if r >= FUZZY_THRESHOLD:
        return min(max(r * FUZZY_MAX, FUZZY_MIN), FUZZY_MAX)
    if q in app.search_blob:
        return SCORE_SUBSTRING
    return None


class AppIndex:
    """Immutable, deduplicated inventory of installed applications keyed by desktop id."""

    def __init__(self, records: Iterable[AppRecord] = ()):
        by_id: Dict[str, AppRecord] = {}
        for rec in records:
            # first scanned record wins
            by_id.setdefault(rec.desktop_id, rec)
        self._by_id = by_id
        self._records: Tuple[AppRecord, ...] = tuple(sorted(by_id.values(), key=lambda r: r.desktop_id))

    @classmethod
    def scan(cls, dirs: List[Path] | None = None, lang: str | None = None) -> "AppIndex":
        dirs = application_dirs() if dirs is None else [Path(d) for d in dirs]
        records: List[AppRecord] = []
        skipped = 0
        for path in iter_desktop_files(dirs):
            try:
                rec = parse_desktop_file(path, lang)
            except (OSError, UnicodeError, configparser.Error) as e:
                skipped += 1
                logger.debug("skipping unreadable desktop entry %s: %s", path, e)
                continue
            if rec is not None:
                records.append(rec)
        index = cls(records)
        logger.info("indexed %s applications from %s dirs (%s unreadable)", len(index), len(dirs), skipped)
        return index

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def get(self, desktop_id: str) -> Optional[AppRecord]:
        return self._by_id.get(desktop_id)

    def search(self, q: str, limit: int) -> List[Tuple[float, AppRecord]]:
        q = norm(q)
        scored: List[Tuple[float, AppRecord]] = []
        for app in self._records:
            s = score_record(app, q)
            if s is not None:
                scored.append((s, app))
        scored.sort(key=lambda t: (-t[0], t[1].title[:64]))
        return scored[:limit]
