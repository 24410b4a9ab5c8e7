"""
roon_transport_lib/models.py

Typed read-only views of zone and output records.

Principles:
- Views are built from the server mappings and never mutate them.
- Unknown or missing optional fields become None rather than raising.
- Volume values, bounds and step are floats; ranges may extend below zero.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

from .const import VolumeType


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _opt_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _opt_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


# -------------------------
# Output
# -------------------------

@dataclass(frozen=True, slots=True)
class Volume:
    type: str = VolumeType.NUMBER.value
    min: Optional[float] = None
    max: Optional[float] = None
    value: Optional[float] = None
    step: Optional[float] = None
    is_muted: Optional[bool] = None

    @property
    def is_incremental(self) -> bool:
        return self.type == VolumeType.INCREMENTAL.value

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Volume":
        vtype = data.get("type")
        # Unanticipated types are treated like "number".
        if vtype not in {t.value for t in VolumeType}:
            vtype = VolumeType.NUMBER.value
        return cls(
            type=vtype,
            min=_opt_float(data.get("min")),
            max=_opt_float(data.get("max")),
            value=_opt_float(data.get("value")),
            step=_opt_float(data.get("step")),
            is_muted=_opt_bool(data.get("is_muted")),
        )


@dataclass(frozen=True, slots=True)
class SourceControl:
    display_name: Optional[str] = None
    status: Optional[str] = None
    supports_standby: bool = False
    control_key: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "SourceControl":
        return cls(
            display_name=_opt_str(data.get("display_name")),
            status=_opt_str(data.get("status")),
            supports_standby=bool(data.get("supports_standby", False)),
            control_key=_opt_str(data.get("control_key")),
        )


@dataclass(frozen=True, slots=True)
class Output:
    output_id: str
    zone_id: Optional[str] = None
    display_name: Optional[str] = None
    state: Optional[str] = None
    volume: Optional[Volume] = None
    source_controls: tuple[SourceControl, ...] = ()

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Output":
        volume = data.get("volume")
        controls = data.get("source_controls")
        return cls(
            output_id=str(data.get("output_id", "")),
            zone_id=_opt_str(data.get("zone_id")),
            display_name=_opt_str(data.get("display_name")),
            state=_opt_str(data.get("state")),
            volume=Volume.from_json(volume) if isinstance(volume, Mapping) else None,
            source_controls=tuple(
                SourceControl.from_json(c) for c in controls if isinstance(c, Mapping)
            )
            if isinstance(controls, list)
            else (),
        )


# -------------------------
# Zone
# -------------------------

@dataclass(frozen=True, slots=True)
class ZoneSettings:
    loop: Optional[str] = None
    shuffle: Optional[bool] = None
    auto_radio: Optional[bool] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ZoneSettings":
        return cls(
            loop=_opt_str(data.get("loop")),
            shuffle=_opt_bool(data.get("shuffle")),
            auto_radio=_opt_bool(data.get("auto_radio")),
        )


@dataclass(frozen=True, slots=True)
class NowPlaying:
    seek_position: Optional[float] = None
    length: Optional[float] = None
    image_key: Optional[str] = None
    one_line: Mapping[str, str] = field(default_factory=dict)
    two_line: Mapping[str, str] = field(default_factory=dict)
    three_line: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "NowPlaying":
        def _lines(key: str) -> Mapping[str, str]:
            value = data.get(key)
            if not isinstance(value, Mapping):
                return {}
            return {k: v for k, v in value.items() if isinstance(v, str)}

        return cls(
            seek_position=_opt_float(data.get("seek_position")),
            length=_opt_float(data.get("length")),
            image_key=_opt_str(data.get("image_key")),
            one_line=_lines("one_line"),
            two_line=_lines("two_line"),
            three_line=_lines("three_line"),
        )


@dataclass(frozen=True, slots=True)
class Zone:
    zone_id: str
    display_name: Optional[str] = None
    outputs: tuple[Output, ...] = ()
    state: Optional[str] = None
    now_playing: Optional[NowPlaying] = None
    settings: Optional[ZoneSettings] = None
    queue_items_remaining: Optional[int] = None
    queue_time_remaining: Optional[float] = None
    is_previous_allowed: bool = False
    is_next_allowed: bool = False
    is_pause_allowed: bool = False
    is_play_allowed: bool = False
    is_seek_allowed: bool = False

    @property
    def output_ids(self) -> tuple[str, ...]:
        return tuple(o.output_id for o in self.outputs)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Zone":
        outputs = data.get("outputs")
        now_playing = data.get("now_playing")
        settings = data.get("settings")
        items = data.get("queue_items_remaining")
        return cls(
            zone_id=str(data.get("zone_id", "")),
            display_name=_opt_str(data.get("display_name")),
            outputs=tuple(Output.from_json(o) for o in outputs if isinstance(o, Mapping))
            if isinstance(outputs, list)
            else (),
            state=_opt_str(data.get("state")),
            now_playing=NowPlaying.from_json(now_playing) if isinstance(now_playing, Mapping) else None,
            settings=ZoneSettings.from_json(settings) if isinstance(settings, Mapping) else None,
            queue_items_remaining=items if isinstance(items, int) and not isinstance(items, bool) else None,
            queue_time_remaining=_opt_float(data.get("queue_time_remaining")),
            is_previous_allowed=bool(data.get("is_previous_allowed", False)),
            is_next_allowed=bool(data.get("is_next_allowed", False)),
            is_pause_allowed=bool(data.get("is_pause_allowed", False)),
            is_play_allowed=bool(data.get("is_play_allowed", False)),
            is_seek_allowed=bool(data.get("is_seek_allowed", False)),
        )


@dataclass(frozen=True, slots=True)
class MirrorSnapshot:
    """
    Immutable point-in-time copy of the zone mirror.

    `version` increments on every mirror mutation; 0 means no snapshot has
    been received yet.
    """

    version: int = 0
    zones: Mapping[str, Zone] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def empty(cls) -> "MirrorSnapshot":
        return cls()
