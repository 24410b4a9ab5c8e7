"""
roon_transport_lib/handlers/zones.py

Handlers for the "zones" subscription topic.

Each handler applies one event to a ZoneMirror and returns True when the
mirror was touched. Anomalies (deltas before a snapshot, unknown zone ids,
malformed records) are counted in mirror.diagnostics, logged at debug level,
and otherwise ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from roon_transport_lib.const import RESPONSE_CHANGED, RESPONSE_SUBSCRIBED, RESPONSE_UNSUBSCRIBED
from roon_transport_lib.states import ZoneMirror, ZoneRecord

HandlerFn = Callable[[Any], bool]


def _zone_id_of(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        return entry or None
    if isinstance(entry, Mapping):
        zone_id = entry.get("zone_id")
        if isinstance(zone_id, str) and zone_id:
            return zone_id
    return None


def _records_by_id(mirror: ZoneMirror, records: Any, log: logging.Logger, *, where: str) -> Dict[str, ZoneRecord]:
    out: Dict[str, ZoneRecord] = {}
    if not isinstance(records, list):
        if records is not None:
            mirror.diagnostics.malformed_records += 1
            log.debug("zones %s: expected a list, got %s", where, type(records).__name__)
        return out
    for record in records:
        zone_id = _zone_id_of(record) if isinstance(record, Mapping) else None
        if zone_id is None:
            mirror.diagnostics.malformed_records += 1
            log.debug("zones %s: skipping record without zone_id", where)
            continue
        out[zone_id] = record
    return out


def make_zones_subscribed_handler(mirror: ZoneMirror, log: logging.Logger) -> HandlerFn:
    """
    Handler for "Subscribed": the payload's zone list replaces the mirror.
    """
    def handler_zones_subscribed(payload: Any) -> bool:
        records = payload.get("zones") if isinstance(payload, Mapping) else None
        mirror.replace(_records_by_id(mirror, records, log, where="snapshot"))
        log.debug("zones snapshot: %d zone(s)", len(mirror.zones or {}))
        return True

    return handler_zones_subscribed


def make_zones_changed_handler(mirror: ZoneMirror, log: logging.Logger) -> HandlerFn:
    """
    Handler for "Changed".

    Lists are applied removed -> added -> changed -> seek_changed so later
    lists observe earlier ones. A missing list means no change for it.
    """
    def handler_zones_changed(payload: Any) -> bool:
        if not mirror.exists:
            mirror.diagnostics.events_before_snapshot += 1
            log.debug("zones delta before snapshot ignored")
            return False
        if not isinstance(payload, Mapping):
            mirror.diagnostics.malformed_records += 1
            log.debug("zones delta without a mapping payload ignored")
            return False

        removed = payload.get("zones_removed")
        if isinstance(removed, list):
            for entry in removed:
                zone_id = _zone_id_of(entry)
                if zone_id is None:
                    mirror.diagnostics.malformed_records += 1
                    continue
                if not mirror.remove(zone_id):
                    mirror.diagnostics.unknown_zone_removals += 1
                    log.debug("zones_removed: unknown zone %s", zone_id)

        for key in ("zones_added", "zones_changed"):
            if key in payload:
                for zone_id, record in _records_by_id(mirror, payload.get(key), log, where=key).items():
                    mirror.put(zone_id, record)

        seek = payload.get("zones_seek_changed")
        if isinstance(seek, list):
            _apply_seek_changes(mirror, seek, log)
        return True

    return handler_zones_changed


def _apply_seek_changes(mirror: ZoneMirror, entries: list, log: logging.Logger) -> None:
    applied = False
    zones = mirror.zones or {}
    for entry in entries:
        zone_id = _zone_id_of(entry) if isinstance(entry, Mapping) else None
        if zone_id is None:
            mirror.diagnostics.malformed_records += 1
            continue
        zone = zones.get(zone_id)
        if zone is None:
            mirror.diagnostics.unknown_seek_zones += 1
            log.debug("zones_seek_changed: unknown zone %s", zone_id)
            continue
        now_playing = zone.get("now_playing")
        if isinstance(now_playing, dict):
            now_playing["seek_position"] = entry.get("seek_position")
        zone["queue_time_remaining"] = entry.get("queue_time_remaining")
        applied = True
    if applied:
        mirror.touch()


def make_zones_unsubscribed_handler(mirror: ZoneMirror, log: logging.Logger) -> HandlerFn:
    def handler_zones_unsubscribed(payload: Any) -> bool:
        del payload
        mirror.clear()
        log.debug("zones mirror cleared")
        return True

    return handler_zones_unsubscribed


def make_zones_event_handler(mirror: ZoneMirror, log: logging.Logger) -> Callable[[str, Any], bool]:
    """
    Route one zones-topic event to its handler by response tag.
    """
    handlers = {
        RESPONSE_SUBSCRIBED: make_zones_subscribed_handler(mirror, log),
        RESPONSE_CHANGED: make_zones_changed_handler(mirror, log),
        RESPONSE_UNSUBSCRIBED: make_zones_unsubscribed_handler(mirror, log),
    }

    def handler_zones_event(response: str, payload: Any) -> bool:
        handler = handlers.get(response)
        if handler is None:
            log.debug("zones: unhandled response %r", response)
            return False
        return handler(payload)

    return handler_zones_event
