"""Transport service request generators.

Each generator takes already-resolved ids and returns (body, method). Body is
None for requests that carry no parameters. Generators raise ValueError on
bad arguments and never touch the network.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence, Type

from ..const import Control, LoopMode, MuteHow, SeekHow, VolumeHow

Body = Optional[dict]


def _require_id(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string (got {value!r})")
    return value


def _enum_value(enum_cls: Type[Enum], name: str, value: Any) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"{name} must be one of {allowed} (got {value!r})") from None


def _require_number(name: str, value: Any) -> float | int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number (got {value!r})")
    return value


def _with_control_key(body: dict, control_key: Optional[str]) -> dict:
    if control_key is not None:
        body["control_key"] = _require_id("control_key", control_key)
    return body


# -------------------------
# Bulk
# -------------------------

def generator_transport_mute_all(*, how: MuteHow | str) -> tuple[Body, str]:
    return {"how": _enum_value(MuteHow, "how", how)}, "mute_all"


def generator_transport_pause_all() -> tuple[Body, str]:
    return None, "pause_all"


# -------------------------
# Output scoped
# -------------------------

def generator_transport_standby(*, output_id: str, control_key: Optional[str] = None) -> tuple[Body, str]:
    body = {"output_id": _require_id("output_id", output_id)}
    return _with_control_key(body, control_key), "standby"


def generator_transport_toggle_standby(*, output_id: str, control_key: Optional[str] = None) -> tuple[Body, str]:
    body = {"output_id": _require_id("output_id", output_id)}
    return _with_control_key(body, control_key), "toggle_standby"


def generator_transport_convenience_switch(
    *, output_id: str, control_key: Optional[str] = None
) -> tuple[Body, str]:
    body = {"output_id": _require_id("output_id", output_id)}
    return _with_control_key(body, control_key), "convenience_switch"


def generator_transport_mute(*, output_id: str, how: MuteHow | str) -> tuple[Body, str]:
    return {
        "output_id": _require_id("output_id", output_id),
        "how": _enum_value(MuteHow, "how", how),
    }, "mute"


def generator_transport_change_volume(*, output_id: str, how: VolumeHow | str, value: float) -> tuple[Body, str]:
    return {
        "output_id": _require_id("output_id", output_id),
        "how": _enum_value(VolumeHow, "how", how),
        "value": _require_number("value", value),
    }, "change_volume"


def generator_transport_group_outputs(*, output_ids: Sequence[str]) -> tuple[Body, str]:
    return {"output_ids": [_require_id("output_id", o) for o in output_ids]}, "group_outputs"


def generator_transport_ungroup_outputs(*, output_ids: Sequence[str]) -> tuple[Body, str]:
    return {"output_ids": [_require_id("output_id", o) for o in output_ids]}, "ungroup_outputs"


# -------------------------
# Zone or output scoped
# -------------------------

def generator_transport_seek(*, zone_or_output_id: str, how: SeekHow | str, seconds: float) -> tuple[Body, str]:
    return {
        "zone_or_output_id": _require_id("zone_or_output_id", zone_or_output_id),
        "how": _enum_value(SeekHow, "how", how),
        "seconds": _require_number("seconds", seconds),
    }, "seek"


def generator_transport_control(*, zone_or_output_id: str, control: Control | str) -> tuple[Body, str]:
    return {
        "zone_or_output_id": _require_id("zone_or_output_id", zone_or_output_id),
        "control": _enum_value(Control, "control", control),
    }, "control"


def generator_transport_transfer_zone(
    *, from_zone_or_output_id: str, to_zone_or_output_id: str
) -> tuple[Body, str]:
    return {
        "from_zone_or_output_id": _require_id("from_zone_or_output_id", from_zone_or_output_id),
        "to_zone_or_output_id": _require_id("to_zone_or_output_id", to_zone_or_output_id),
    }, "transfer_zone"


def generator_transport_change_settings(
    *,
    zone_or_output_id: str,
    shuffle: Optional[bool] = None,
    auto_radio: Optional[bool] = None,
    loop: LoopMode | str | None = None,
) -> tuple[Body, str]:
    body: dict[str, Any] = {"zone_or_output_id": _require_id("zone_or_output_id", zone_or_output_id)}
    if shuffle is not None:
        if not isinstance(shuffle, bool):
            raise ValueError(f"shuffle must be a bool (got {shuffle!r})")
        body["shuffle"] = shuffle
    if auto_radio is not None:
        if not isinstance(auto_radio, bool):
            raise ValueError(f"auto_radio must be a bool (got {auto_radio!r})")
        body["auto_radio"] = auto_radio
    if loop is not None:
        body["loop"] = _enum_value(LoopMode, "loop", loop)
    if len(body) == 1:
        raise ValueError("change_settings requires at least one of shuffle, auto_radio, loop.")
    return body, "change_settings"


def generator_transport_play_from_here(*, zone_or_output_id: str, queue_item_id: Any) -> tuple[Body, str]:
    if queue_item_id is None or isinstance(queue_item_id, bool):
        raise ValueError(f"queue_item_id is required (got {queue_item_id!r})")
    return {
        "zone_or_output_id": _require_id("zone_or_output_id", zone_or_output_id),
        "queue_item_id": queue_item_id,
    }, "play_from_here"


# -------------------------
# Queries
# -------------------------

def generator_transport_get_zones() -> tuple[Body, str]:
    return None, "get_zones"


def generator_transport_get_outputs() -> tuple[Body, str]:
    return None, "get_outputs"
