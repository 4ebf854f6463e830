from __future__ import annotations

from datetime import datetime

from casewatch.domain.models import GeoPoint, Hotspot
from casewatch.infra.memory_store import InMemoryHotspotStore
from casewatch.notifications.sinks import BroadcastSink, LoggingSink, NullSink


def hotspot(hs_id: str, intensity: float, count: int) -> Hotspot:
    return Hotspot(hs_id, GeoPoint(1.0, 2.0), intensity, count, datetime(2026, 3, 1))


def test_replace_publishes_new_snapshot_version():
    store = InMemoryHotspotStore([hotspot("a", 0.2, 2)])
    before = store.snapshot
    written = store.replace_hotspots([hotspot("b", 0.5, 5), hotspot("c", 0.3, 3)])
    assert written == 2
    assert store.snapshot.version == before.version + 1
    # readers holding the old snapshot keep a complete, unchanged view
    assert [h.id for h in before.hotspots] == ["a"]
    assert store.snapshot.replaced_at is not None


def test_list_orders_by_intensity_and_filters():
    store = InMemoryHotspotStore()
    store.replace_hotspots([hotspot("low", 0.2, 2), hotspot("high", 0.9, 9), hotspot("mid", 0.5, 5)])
    assert [h.id for h in store.list_hotspots()] == ["high", "mid", "low"]
    assert [h.id for h in store.list_hotspots(min_intensity=0.5)] == ["high", "mid"]
    assert [h.id for h in store.list_hotspots(limit=1)] == ["high"]


def test_broadcast_sink_isolates_failing_listener():
    sink = BroadcastSink()
    calls = []

    def broken():
        raise RuntimeError("listener crashed")

    sink.subscribe(broken)
    sink.subscribe(lambda: calls.append("ok"))
    sink.notify_hotspots_changed()
    assert calls == ["ok"]
    assert sink.delivered == 1


def test_broadcast_unsubscribe():
    sink = BroadcastSink()
    calls = []
    unsubscribe = sink.subscribe(lambda: calls.append(1))
    sink.notify_hotspots_changed()
    unsubscribe()
    unsubscribe()
    sink.notify_hotspots_changed()
    assert calls == [1]


def test_simple_sinks_do_not_raise():
    NullSink().notify_hotspots_changed()
    LoggingSink().notify_hotspots_changed()
