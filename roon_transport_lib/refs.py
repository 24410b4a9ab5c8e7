"""
roon_transport_lib/refs.py

Zone/output references.

Callers may pass a bare id string, a server record (mapping), or a typed
model. Those are coerced once at the client boundary into the tagged union
RawId | Ref; every call site then uses exactly one resolver.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True, slots=True)
class RawId:
    """An id string whose kind (zone or output) is left to the call site."""

    value: str


@dataclass(frozen=True, slots=True)
class Ref:
    """A record-shaped reference exposing a zone id, an output id, or both."""

    zone_id: Optional[str] = None
    output_id: Optional[str] = None


TargetRef = Union[RawId, Ref]


def _id_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def coerce_target(obj: Any) -> Optional[TargetRef]:
    """Coerce a caller-supplied reference; None when nothing was supplied."""
    if obj is None:
        return None
    if isinstance(obj, (RawId, Ref)):
        return obj
    if isinstance(obj, str):
        return RawId(obj) if obj else None
    if isinstance(obj, Mapping):
        return Ref(
            zone_id=_id_or_none(obj.get("zone_id")),
            output_id=_id_or_none(obj.get("output_id")),
        )
    # Typed models (models.Zone / models.Output) and other record-like objects
    return Ref(
        zone_id=_id_or_none(getattr(obj, "zone_id", None)),
        output_id=_id_or_none(getattr(obj, "output_id", None)),
    )


def resolve_output_id(target: Optional[TargetRef]) -> Optional[str]:
    if isinstance(target, RawId):
        return target.value
    if isinstance(target, Ref):
        return target.output_id
    return None


def resolve_zone_or_output_id(target: Optional[TargetRef]) -> Optional[str]:
    """Prefer the output id, fall back to the zone id."""
    if isinstance(target, RawId):
        return target.value
    if isinstance(target, Ref):
        return target.output_id or target.zone_id
    return None


__all__ = [
    "RawId",
    "Ref",
    "TargetRef",
    "coerce_target",
    "resolve_output_id",
    "resolve_zone_or_output_id",
]
