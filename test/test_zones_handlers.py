from __future__ import annotations

import copy
import logging

import pytest

from roon_transport_lib.handlers.zones import (
    make_zones_changed_handler,
    make_zones_event_handler,
    make_zones_subscribed_handler,
    make_zones_unsubscribed_handler,
)
from roon_transport_lib.states import ZoneMirror

_LOG = logging.getLogger(__name__)


def _zone(zone_id: str, *output_ids: str, **extra) -> dict:
    zone = {
        "zone_id": zone_id,
        "display_name": f"Zone {zone_id}",
        "state": "playing",
        "outputs": [{"output_id": o, "zone_id": zone_id, "display_name": o} for o in output_ids],
    }
    zone.update(extra)
    return zone


def _subscribed(mirror: ZoneMirror, *zones: dict) -> None:
    make_zones_subscribed_handler(mirror, _LOG)({"zones": list(zones)})


def test_snapshot_replaces_never_merges() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("old1"), _zone("old2"))
    make_zones_changed_handler(mirror, _LOG)({"zones_added": [_zone("extra")]})

    _subscribed(mirror, _zone("A"), _zone("B"))

    assert set(mirror.zones) == {"A", "B"}


def test_snapshot_stores_records_by_reference() -> None:
    mirror = ZoneMirror()
    record = _zone("z1", "o1")
    _subscribed(mirror, record)
    assert mirror.zone_by_zone_id("z1") is record


def test_snapshot_without_zones_yields_empty_mirror() -> None:
    mirror = ZoneMirror()
    make_zones_subscribed_handler(mirror, _LOG)({})
    assert mirror.exists
    assert mirror.zones == {}


def test_removed_then_added_same_id_keeps_zone() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("X"))
    replacement = _zone("X", display_name="New X")

    make_zones_changed_handler(mirror, _LOG)(
        {"zones_removed": ["X"], "zones_added": [replacement]}
    )

    assert mirror.zone_by_zone_id("X") is replacement


def test_removed_accepts_records_as_well_as_ids() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("a"), _zone("b"))
    make_zones_changed_handler(mirror, _LOG)({"zones_removed": [{"zone_id": "a"}, "b"]})
    assert mirror.zones == {}


def test_changed_overwrites_full_record() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1", "o1", queue_items_remaining=3))
    changed = _zone("z1", "o1", state="paused")

    make_zones_changed_handler(mirror, _LOG)({"zones_changed": [changed]})

    assert mirror.zone_by_zone_id("z1") is changed
    assert "queue_items_remaining" not in mirror.zone_by_zone_id("z1")


def test_absent_lists_mean_no_change() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1"), _zone("z2"))
    before = copy.deepcopy(mirror.zones)

    assert make_zones_changed_handler(mirror, _LOG)({}) is True

    assert mirror.zones == before


def test_seek_on_absent_zone_is_noop() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1", now_playing={"seek_position": 1, "length": 10}))
    before = copy.deepcopy(mirror.zones)

    make_zones_changed_handler(mirror, _LOG)(
        {"zones_seek_changed": [{"zone_id": "Z", "seek_position": 5, "queue_time_remaining": 9}]}
    )

    assert mirror.zones == before
    assert mirror.diagnostics.unknown_seek_zones == 1


def test_seek_touches_only_seek_fields() -> None:
    mirror = ZoneMirror()
    zone = _zone(
        "Z",
        "o1",
        now_playing={
            "seek_position": 10,
            "length": 200,
            "one_line": {"line1": "Song"},
        },
        queue_time_remaining=300,
        settings={"loop": "disabled", "shuffle": False, "auto_radio": True},
    )
    _subscribed(mirror, zone)
    expected = copy.deepcopy(zone)
    expected["now_playing"]["seek_position"] = 42
    expected["queue_time_remaining"] = 7

    make_zones_changed_handler(mirror, _LOG)(
        {"zones_seek_changed": [{"zone_id": "Z", "seek_position": 42, "queue_time_remaining": 7}]}
    )

    current = mirror.zone_by_zone_id("Z")
    assert current is zone
    assert current["now_playing"]["seek_position"] == 42
    assert current["now_playing"]["length"] == 200
    assert current["queue_time_remaining"] == 7
    assert current == expected


def test_seek_without_now_playing_sets_only_queue_time() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("Z", state="stopped"))

    make_zones_changed_handler(mirror, _LOG)(
        {"zones_seek_changed": [{"zone_id": "Z", "seek_position": 42, "queue_time_remaining": 0}]}
    )

    zone = mirror.zone_by_zone_id("Z")
    assert "now_playing" not in zone
    assert zone["queue_time_remaining"] == 0


def test_seek_after_removal_in_same_event_is_skipped() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("Z", now_playing={"seek_position": 1}))

    make_zones_changed_handler(mirror, _LOG)(
        {
            "zones_removed": ["Z"],
            "zones_seek_changed": [{"zone_id": "Z", "seek_position": 2, "queue_time_remaining": 1}],
        }
    )

    assert mirror.zone_by_zone_id("Z") is None
    assert mirror.diagnostics.unknown_seek_zones == 1


def test_delta_before_snapshot_is_ignored() -> None:
    mirror = ZoneMirror()

    applied = make_zones_changed_handler(mirror, _LOG)({"zones_added": [_zone("z1")]})

    assert applied is False
    assert not mirror.exists
    assert mirror.zone_by_zone_id("z1") is None
    assert mirror.diagnostics.events_before_snapshot == 1


def test_unknown_removal_is_counted_not_raised() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1"))
    make_zones_changed_handler(mirror, _LOG)({"zones_removed": ["nope"]})
    assert set(mirror.zones) == {"z1"}
    assert mirror.diagnostics.unknown_zone_removals == 1


def test_malformed_records_are_skipped() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1"), {"display_name": "no id"}, "garbage")
    assert set(mirror.zones) == {"z1"}
    assert mirror.diagnostics.malformed_records == 2


def test_teardown_clears_all_lookups() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1", "o1"), _zone("z2", "o2"))
    make_zones_changed_handler(mirror, _LOG)({"zones_added": [_zone("z3", "o3")]})

    make_zones_unsubscribed_handler(mirror, _LOG)(None)

    assert not mirror.exists
    for zone_id in ("z1", "z2", "z3"):
        assert mirror.zone_by_zone_id(zone_id) is None
    for output_id in ("o1", "o2", "o3"):
        assert mirror.zone_by_output_id(output_id) is None


def test_output_lookup_consistency() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1", "o1", "o2"), _zone("z2", "o3"))
    make_zones_changed_handler(mirror, _LOG)({"zones_changed": [_zone("z2", "o3", "o4")]})

    for zone_id, zone in mirror.zones.items():
        for output in zone["outputs"]:
            found = mirror.zone_by_output_id(output["output_id"])
            assert found is not None
            assert found["zone_id"] == zone_id


def test_zone_by_object_prefers_zone_id() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1", "o1"), _zone("z2", "o2"))

    assert mirror.zone_by_object({"zone_id": "z1", "output_id": "o2"})["zone_id"] == "z1"
    assert mirror.zone_by_object({"output_id": "o2"})["zone_id"] == "z2"
    assert mirror.zone_by_object({"display_name": "nothing"}) is None


def test_event_handler_routes_by_response_tag() -> None:
    mirror = ZoneMirror()
    handler = make_zones_event_handler(mirror, _LOG)

    assert handler("Subscribed", {"zones": [_zone("z1")]}) is True
    assert handler("Changed", {"zones_removed": ["z1"]}) is True
    assert handler("Bogus", {}) is False
    assert handler("Unsubscribed", None) is True
    assert mirror.zones is None


def test_snapshot_view_tracks_version() -> None:
    mirror = ZoneMirror()
    assert mirror.snapshot().zones == {}

    _subscribed(mirror, _zone("z1", "o1", now_playing={"seek_position": 3, "length": 9}))
    snap1 = mirror.snapshot()
    assert snap1 is mirror.snapshot()
    assert snap1.zones["z1"].now_playing.seek_position == 3.0

    make_zones_changed_handler(mirror, _LOG)(
        {"zones_seek_changed": [{"zone_id": "z1", "seek_position": 4, "queue_time_remaining": 5}]}
    )
    snap2 = mirror.snapshot()
    assert snap2.version > snap1.version
    assert snap2.zones["z1"].now_playing.seek_position == 4.0
    assert snap1.zones["z1"].now_playing.seek_position == 3.0


def test_snapshot_view_is_read_only() -> None:
    mirror = ZoneMirror()
    _subscribed(mirror, _zone("z1"), _zone("z2"))
    snap = mirror.snapshot()

    with pytest.raises(AttributeError):
        snap.zones.pop("z1")  # type: ignore[attr-defined]
    with pytest.raises(TypeError):
        snap.zones["z3"] = snap.zones["z1"]  # type: ignore[index]

    assert set(mirror.snapshot().zones) == {"z1", "z2"}
    assert mirror.snapshot() is snap
