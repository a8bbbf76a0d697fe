from __future__ import annotations

from typing import List, Optional, Protocol, Tuple, runtime_checkable

from lancea.schemas.envelope import Preview, ResultItem
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)


@runtime_checkable
class Provider(Protocol):
    """Capability interface every data source implements.

    ``id`` is a stable lowercase identifier, used as the result key prefix
    and as the search selector.

    ``search(query)`` receives the raw input text (slash alias included),
    strips its own aliases and returns items in final presentation order.
    It must not touch engine state.

    ``preview(key)`` returns None for a key this provider does not know.

    ``execute(action, key)`` returns True on success, False for an unknown
    action or key. Expected "not found" conditions never raise.
    """

    id: str

    def search(self, query: str) -> List[ResultItem]:
        ...

    def preview(self, key: str) -> Optional[Preview]:
        ...

    def execute(self, action: str, key: str) -> bool:
        ...


def split_key(key: str) -> Tuple[str, str]:
    """Split ``"<providerId>:<localId>"`` on the first colon.

    A key without a colon yields ``("", key)``.
    """
    provider_id, sep, local_id = (key or "").partition(":")
    if not sep:
        return "", provider_id
    return provider_id, local_id


def make_key(provider_id: str, local_id: str) -> str:
    return f"{provider_id}:{local_id}"


class GuardedProvider:
    """Wraps a provider so internal faults stay at the provider boundary.

    An exception from ``search``/``preview``/``execute`` is logged and turned
    into an empty result list, an absent preview or ``False``.
    """

    def __init__(self, inner: Provider):
        self.inner = inner
        self.id = inner.id

    def search(self, query: str) -> List[ResultItem]:
        try:
            return list(self.inner.search(query))
        except Exception:
            logger.exception("provider %s failed to search %r", self.id, query)
            return []

    def preview(self, key: str) -> Optional[Preview]:
        try:
            return self.inner.preview(key)
        except Exception:
            logger.exception("provider %s failed to preview %s", self.id, key)
            return None

    def execute(self, action: str, key: str) -> bool:
        try:
            return bool(self.inner.execute(action, key))
        except Exception:
            logger.exception("provider %s failed to execute %s on %s", self.id, action, key)
            return False

    def __getattr__(self, name):
        # expose provider extras (e.g. rescan) through the guard
        return getattr(self.inner, name)

    def __repr__(self) -> str:
        return f"GuardedProvider({self.inner!r})"


def guard_provider(provider: Provider) -> GuardedProvider:
    if isinstance(provider, GuardedProvider):
        return provider
    return GuardedProvider(provider)
