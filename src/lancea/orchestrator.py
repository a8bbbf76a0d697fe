from __future__ import annotations

import threading
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Sequence

from lancea.errors import ConfigError
from lancea.providers.base import Provider
from lancea.schemas.envelope import CancelArgs, EndBatch, Envelope, ResetBatch, ResultItem, SearchArgs
from lancea.schemas.events import BaseEvent, ResultsUpdated
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

EventSink = Callable[[BaseEvent], None]

# one stream per call for now; the value still correlates events with the call
PLACEHOLDER_TOKEN = 1
MAX_EPOCH = 2**64 - 1


class EpochCounter:
    """Process-scoped search epoch; the only way to move it is ``next``."""

    def __init__(self, start: int = 0):
        self._value = int(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            if self._value >= MAX_EPOCH:
                raise OverflowError("epoch counter exhausted")
            self._value += 1
            return self._value

    @property
    def current(self) -> int:
        return self._value


class CancellationRegistry:
    """Per-epoch cancellation flags offered to long-running providers.

    Providers are not required to check them. Only the most recent
    ``max_epochs`` flags are kept.
    """

    def __init__(self, max_epochs: int = 1024):
        self.max_epochs = int(max_epochs)
        self._flags: "OrderedDict[int, threading.Event]" = OrderedDict()
        self._lock = threading.Lock()

    def flag(self, epoch: int) -> threading.Event:
        with self._lock:
            ev = self._flags.get(epoch)
            if ev is None:
                ev = threading.Event()
                self._flags[epoch] = ev
                while len(self._flags) > self.max_epochs:
                    self._flags.popitem(last=False)
            return ev

    def cancel(self, epoch: int) -> None:
        self.flag(epoch).set()

    def is_cancelled(self, epoch: int) -> bool:
        with self._lock:
            ev = self._flags.get(epoch)
        return ev is not None and ev.is_set()


class SearchOrchestrator:
    """Owns the epoch counter and the provider registry and drives result streaming.

    ``search`` selects one provider (the first requested one, or the default
    provider when that is missing or unknown), runs it under a timeout and
    emits a Reset batch followed by an End batch through ``emit``. Both events
    carry the same ``(epoch, providerId, token)`` triple.
    """

    def __init__(
        self,
        providers: Mapping[str, Provider],
        default_provider_id: str,
        timeout_s: float = 2.0,
        executor: ThreadPoolExecutor | None = None,
        max_workers: int = 8,
        cancellations: CancellationRegistry | None = None,
    ):
        if default_provider_id not in providers:
            raise ConfigError(f"default provider '{default_provider_id}' is not registered")
        # read-only after construction, no locking needed for lookups
        self._providers = MappingProxyType(dict(providers))
        self.default_provider_id = default_provider_id
        self.timeout_s = float(timeout_s)
        self._epochs = EpochCounter()
        self.cancellations = cancellations or CancellationRegistry()
        self._owns_executor = executor is None
        # a timed-out search is not interrupted and holds its worker until the provider returns
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lancea-provider")

    @property
    def providers(self) -> Mapping[str, Provider]:
        return self._providers

    @property
    def current_epoch(self) -> int:
        return self._epochs.current

    def next_epoch(self) -> int:
        return self._epochs.next()

    def _resolve_epoch(self, pinned: Optional[int]) -> int:
        # only previously issued epochs are reusable
        if pinned and pinned <= self._epochs.current:
            return pinned
        if pinned:
            logger.debug("epoch %s was never issued, minting a new one", pinned)
        return self.next_epoch()

    def select_provider(self, provider_ids: Sequence[str]) -> Provider:
        # single provider per call; multi-provider fan-out would emit one stream per provider
        if provider_ids:
            wanted = provider_ids[0]
            p = self._providers.get(wanted)
            if p is not None:
                return p
            logger.debug("unknown provider %r, falling back to %s", wanted, self.default_provider_id)
        return self._providers[self.default_provider_id]

    def _run_provider(self, provider: Provider, text: str) -> List[ResultItem]:
        future = self._executor.submit(provider.search, text)
        try:
            items = future.result(timeout=self.timeout_s)
        except FutureTimeout:
            future.cancel()
            logger.warning("provider %s timed out after %.2fs on %r", provider.id, self.timeout_s, text)
            return []
        except Exception:
            logger.exception("provider %s raised during search of %r", provider.id, text)
            return []
        out: List[ResultItem] = []
        for it in items or []:
            if it.provider_id != provider.id:
                logger.warning("dropping item %s not owned by provider %s", it.key, provider.id)
                continue
            out.append(it)
        return out

    def search(self, args: Envelope, emit: EventSink) -> int:
        data: SearchArgs = args.data
        epoch = self._resolve_epoch(data.epoch)
        token = PLACEHOLDER_TOKEN
        provider = self.select_provider(data.provider_ids)

        items = self._run_provider(provider, data.text)
        logger.debug("search epoch=%s provider=%s text=%r -> %s items", epoch, provider.id, data.text, len(items))

        emit(ResultsUpdated(epoch=epoch, provider_id=provider.id, token=token, batch=Envelope(data=ResetBatch(items=items))))
        emit(ResultsUpdated(epoch=epoch, provider_id=provider.id, token=token, batch=Envelope(data=EndBatch())))
        return token

    def cancel(self, args: Envelope) -> None:
        data: CancelArgs = args.data
        if data.epoch:
            self.cancellations.cancel(data.epoch)
            logger.debug("cancel requested for epoch %s", data.epoch)
        else:
            logger.debug("cancel without epoch acknowledged")

    def is_cancelled(self, epoch: int) -> bool:
        return self.cancellations.is_cancelled(epoch)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
