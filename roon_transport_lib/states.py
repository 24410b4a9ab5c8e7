"""
roon_transport_lib/states.py

ZoneMirror: client-local copy of the server's zone state.

Principles:
- One mirror per zones subscription; never a module-level singleton.
- `zones is None` means no snapshot has been received (or it was torn down).
- Records are the server mappings, stored by reference.
- Pure state storage; handlers own protocol knowledge and logging.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Optional

from .models import MirrorSnapshot, Zone
from .refs import RawId, Ref, coerce_target

ZoneRecord = Dict[str, Any]


@dataclass(slots=True)
class MirrorDiagnostics:
    """
    Counters for events the mirror absorbed instead of failing on.
    """
    events_before_snapshot: int = 0
    unknown_zone_removals: int = 0
    unknown_seek_zones: int = 0
    malformed_records: int = 0

    @property
    def total(self) -> int:
        return (
            self.events_before_snapshot
            + self.unknown_zone_removals
            + self.unknown_seek_zones
            + self.malformed_records
        )


@dataclass(slots=True)
class ZoneMirror:
    zones: Optional[Dict[str, ZoneRecord]] = None

    # Incremented on every mutation; snapshot() caches against it.
    version: int = 0
    diagnostics: MirrorDiagnostics = field(default_factory=MirrorDiagnostics)

    # Held across a whole apply-then-notify sequence; re-entrant so lookups
    # from inside subscriber callbacks do not deadlock.
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)
    _snapshot: Optional[MirrorSnapshot] = field(default=None, repr=False, compare=False)

    @property
    def exists(self) -> bool:
        return self.zones is not None

    # -------------------------
    # Mutation (handlers only)
    # -------------------------

    def replace(self, records: Dict[str, ZoneRecord]) -> None:
        with self.lock:
            self.zones = records
            self.version += 1

    def put(self, zone_id: str, record: ZoneRecord) -> None:
        with self.lock:
            if self.zones is None:
                return
            self.zones[zone_id] = record
            self.version += 1

    def remove(self, zone_id: str) -> bool:
        with self.lock:
            if self.zones is None or zone_id not in self.zones:
                return False
            del self.zones[zone_id]
            self.version += 1
            return True

    def touch(self) -> None:
        with self.lock:
            self.version += 1

    def clear(self) -> None:
        with self.lock:
            self.zones = None
            self.version += 1

    # -------------------------
    # Lookups
    # -------------------------

    def zone_by_zone_id(self, zone_id: Optional[str]) -> Optional[ZoneRecord]:
        with self.lock:
            if self.zones is None or zone_id is None:
                return None
            return self.zones.get(zone_id)

    def zone_by_output_id(self, output_id: Optional[str]) -> Optional[ZoneRecord]:
        """
        Linear scan over every zone's outputs; returns the owning zone.
        """
        with self.lock:
            if self.zones is None or output_id is None:
                return None
            for zone in self.zones.values():
                outputs = zone.get("outputs")
                if not isinstance(outputs, list):
                    continue
                for output in outputs:
                    if isinstance(output, Mapping) and output.get("output_id") == output_id:
                        return zone
            return None

    def zone_by_object(self, zone_or_output: Any) -> Optional[ZoneRecord]:
        target = coerce_target(zone_or_output)
        if isinstance(target, Ref):
            if target.zone_id:
                return self.zone_by_zone_id(target.zone_id)
            if target.output_id:
                return self.zone_by_output_id(target.output_id)
            return None
        if isinstance(target, RawId):
            return self.zone_by_zone_id(target.value) or self.zone_by_output_id(target.value)
        return None

    def snapshot(self) -> MirrorSnapshot:
        with self.lock:
            cached = self._snapshot
            if cached is not None and cached.version == self.version:
                return cached
            if self.zones is None:
                snap = MirrorSnapshot(version=self.version, zones=MappingProxyType({}))
            else:
                snap = MirrorSnapshot(
                    version=self.version,
                    zones=MappingProxyType(
                        {zone_id: Zone.from_json(rec) for zone_id, rec in self.zones.items()}
                    ),
                )
            self._snapshot = snap
            return snap
