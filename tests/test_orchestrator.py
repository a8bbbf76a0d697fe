import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from lancea.errors import ConfigError
from lancea.orchestrator import PLACEHOLDER_TOKEN, CancellationRegistry, EpochCounter, SearchOrchestrator
from lancea.providers.base import guard_provider
from lancea.schemas.envelope import CancelArgs, Envelope, ResultItem, SearchArgs


class StaticProvider:
    def __init__(self, pid, titles=()):
        self.id = pid
        self.titles = list(titles)
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        return [
            ResultItem(key=f"{self.id}:{i}", title=t, provider_id=self.id, score=1.0)
            for i, t in enumerate(self.titles)
        ]

    def preview(self, key):
        return None

    def execute(self, action, key):
        return False


class SlowProvider(StaticProvider):
    def search(self, query):
        time.sleep(0.5)
        return super().search(query)


class ExplodingProvider(StaticProvider):
    def search(self, query):
        raise RuntimeError("index corrupted")


def _search(orch, sink, **data):
    return orch.search(Envelope(data=SearchArgs(**data)), sink)


@pytest.fixture
def orch():
    providers = {
        "apps": StaticProvider("apps", ["Firefox"]),
        "emoji": StaticProvider("emoji", ["Face with Tears of Joy", "Grinning Face"]),
    }
    o = SearchOrchestrator(providers, "apps", timeout_s=1.0)
    yield o
    o.close()


def test_stream_is_reset_then_end(orch, sink):
    token = _search(orch, sink, text="/emoji laugh", provider_ids=["emoji"])
    assert token == PLACEHOLDER_TOKEN
    kinds = [b.kind for b in sink.batches()]
    assert kinds == ["reset", "end"]
    reset, end = sink.of_type("ResultsUpdated")
    assert (reset.epoch, reset.provider_id, reset.token) == (end.epoch, end.provider_id, end.token)
    assert reset.provider_id == "emoji"
    assert reset.epoch >= 1
    assert [i.title for i in reset.batch.data.items] == ["Face with Tears of Joy", "Grinning Face"]


def test_raw_text_is_passed_through(orch):
    _search(orch, lambda e: None, text="  /emoji laugh ", provider_ids=["emoji"])
    assert orch.providers["emoji"].queries == ["  /emoji laugh "]


def test_empty_provider_list_uses_default(orch, sink):
    _search(orch, sink, text="fire")
    assert {e.provider_id for e in sink.events} == {"apps"}


def test_unknown_provider_falls_back_silently(orch, sink):
    _search(orch, sink, text="x", provider_ids=["calculator", "emoji"])
    assert {e.provider_id for e in sink.events} == {"apps"}


def test_only_first_requested_provider_runs(orch, sink):
    _search(orch, sink, text="x", provider_ids=["emoji", "apps"])
    assert {e.provider_id for e in sink.events} == {"emoji"}
    assert orch.providers["apps"].queries == []


def test_epochs_are_minted_monotonically(orch, sink):
    _search(orch, sink, text="a")
    _search(orch, sink, text="b")
    epochs = [e.epoch for e in sink.of_type("ResultsUpdated")]
    assert epochs[0] == epochs[1]
    assert epochs[2] == epochs[3] == epochs[0] + 1


def test_pinned_epoch_is_kept(orch, sink):
    _search(orch, sink, text="a")
    _search(orch, sink, text="b")
    before = orch.current_epoch
    _search(orch, sink, text="c", epoch=1)
    assert [e.epoch for e in sink.events[4:]] == [1, 1]
    assert orch.current_epoch == before


@pytest.mark.parametrize("pinned", [2, 42])
def test_unissued_epoch_is_replaced_by_a_fresh_one(orch, sink, pinned):
    _search(orch, sink, text="a", epoch=pinned)
    _search(orch, sink, text="b")
    _search(orch, sink, text="c")
    epochs = [e.epoch for e in sink.of_type("ResultsUpdated")]
    assert epochs == [1, 1, 2, 2, 3, 3]
    assert len(set(epochs)) == 3


def test_concurrent_searches_get_distinct_epochs(orch):
    seen = []
    lock = threading.Lock()

    def _sink(evt):
        with lock:
            seen.append(evt.epoch)

    with ThreadPoolExecutor(max_workers=8) as ex:
        list(ex.map(lambda i: _search(orch, _sink, text=str(i)), range(50)))

    distinct = sorted(set(seen))
    assert len(distinct) == 50
    assert distinct == list(range(distinct[0], distinct[0] + 50))


def test_epoch_counter_threads():
    counter = EpochCounter()
    out = []
    lock = threading.Lock()

    def _take():
        for _ in range(200):
            v = counter.next()
            with lock:
                out.append(v)

    threads = [threading.Thread(target=_take) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sorted(out) == list(range(1, 801))
    assert counter.current == 800


def test_empty_results_still_stream(sink):
    orch = SearchOrchestrator({"apps": StaticProvider("apps")}, "apps")
    try:
        _search(orch, sink, text="nothing")
    finally:
        orch.close()
    reset, end = sink.batches()
    assert reset.kind == "reset" and reset.items == []
    assert end.kind == "end"


def test_timeout_yields_empty_reset(sink):
    orch = SearchOrchestrator({"slow": SlowProvider("slow", ["late"])}, "slow", timeout_s=0.05)
    try:
        _search(orch, sink, text="x")
    finally:
        orch.close()
    reset, end = sink.batches()
    assert reset.items == [] and end.kind == "end"


@pytest.mark.parametrize("guarded", [True, False])
def test_provider_fault_yields_empty_reset(sink, guarded):
    p = ExplodingProvider("boom")
    orch = SearchOrchestrator({"boom": guard_provider(p) if guarded else p}, "boom")
    try:
        _search(orch, sink, text="x")
    finally:
        orch.close()
    assert [b.kind for b in sink.batches()] == ["reset", "end"]
    assert sink.batches()[0].items == []


def test_foreign_items_are_dropped(sink):
    class Liar(StaticProvider):
        def search(self, query):
            return [ResultItem(key="emoji:joy", title="joy", provider_id="emoji", score=1.0)]

    orch = SearchOrchestrator({"apps": Liar("apps")}, "apps")
    try:
        _search(orch, sink, text="x")
    finally:
        orch.close()
    assert sink.batches()[0].items == []


def test_default_provider_must_exist():
    with pytest.raises(ConfigError):
        SearchOrchestrator({"emoji": StaticProvider("emoji")}, "apps")


def test_provider_registry_is_read_only(orch):
    with pytest.raises(TypeError):
        orch.providers["new"] = StaticProvider("new")


def test_cancel_marks_epoch(orch):
    orch.cancel(Envelope(data=CancelArgs(epoch=5)))
    assert orch.is_cancelled(5)
    assert not orch.is_cancelled(6)
    # acknowledgment only: no epoch is a no-op
    orch.cancel(Envelope(data=CancelArgs()))


def test_cancelled_epoch_still_streams(orch, sink):
    _search(orch, sink, text="x")
    epoch = orch.current_epoch
    orch.cancel(Envelope(data=CancelArgs(epoch=epoch)))
    _search(orch, sink, text="x", epoch=epoch)
    assert [b.kind for b in sink.batches()] == ["reset", "end", "reset", "end"]
    assert {e.epoch for e in sink.events} == {epoch}


def test_cancellation_registry_is_bounded():
    reg = CancellationRegistry(max_epochs=3)
    for e in range(1, 6):
        reg.cancel(e)
    assert not reg.is_cancelled(1)
    assert reg.is_cancelled(5)


def test_hung_provider_does_not_starve_other_searches(sink):
    providers = {"slow": SlowProvider("slow", ["late"]), "apps": StaticProvider("apps", ["Firefox"])}
    orch = SearchOrchestrator(providers, "apps", timeout_s=0.05, max_workers=3)
    try:
        for _ in range(2):
            _search(orch, sink, text="x", provider_ids=["slow"])
        _search(orch, sink, text="fire", provider_ids=["apps"])
    finally:
        orch.close()
    last_reset = sink.batches()[-2]
    assert [i.title for i in last_reset.items] == ["Firefox"]
