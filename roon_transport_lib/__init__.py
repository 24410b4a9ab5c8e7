"""Async client library for the audio transport control service."""

from .client import TransportClient
from .const import (
    SERVICE_NAME,
    Control,
    LoopMode,
    MuteHow,
    PlaybackState,
    SeekHow,
    SourceControlStatus,
    VolumeHow,
    VolumeType,
)
from .dispatcher import CommandDispatcher
from .errors import (
    InvalidArgumentError,
    MissingTargetError,
    NetworkError,
    RequestFailed,
    TransportClientError,
)
from .models import MirrorSnapshot, NowPlaying, Output, SourceControl, Volume, Zone, ZoneSettings
from .refs import RawId, Ref
from .states import MirrorDiagnostics, ZoneMirror
from .subscriptions import Subscription, ZoneSubscription
from .transport import Reply, Transport, TransportSubscription
from .types import ClientConfig, Result, SubscriptionEvent, SubscriptionState

__all__ = [
    "SERVICE_NAME",
    "ClientConfig",
    "CommandDispatcher",
    "Control",
    "InvalidArgumentError",
    "LoopMode",
    "MirrorDiagnostics",
    "MirrorSnapshot",
    "MissingTargetError",
    "MuteHow",
    "NetworkError",
    "NowPlaying",
    "Output",
    "PlaybackState",
    "RawId",
    "Ref",
    "Reply",
    "RequestFailed",
    "Result",
    "SeekHow",
    "SourceControl",
    "SourceControlStatus",
    "Subscription",
    "SubscriptionEvent",
    "SubscriptionState",
    "Transport",
    "TransportClient",
    "TransportClientError",
    "TransportSubscription",
    "Volume",
    "VolumeHow",
    "VolumeType",
    "Zone",
    "ZoneMirror",
    "ZoneSettings",
    "ZoneSubscription",
]
