"""Public types for the transport client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from .const import SERVICE_NAME
from .errors import TransportClientError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Immutable client configuration.

    Provided once at construction time and treated as read-only thereafter.
    """

    service_name: str = SERVICE_NAME
    event_queue_size: int = 256
    logger_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    ok: bool
    data: Optional[T] = None
    error: Optional[TransportClientError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(ok=True, data=value, error=None)

    @classmethod
    def failure(cls, error: TransportClientError) -> "Result[T]":
        return cls(ok=False, data=None, error=error)

    @property
    def error_name(self) -> Optional[str]:
        """Reply name of the failure (e.g. "NetworkError"), if any."""
        if self.error is None:
            return None
        return self.error.reply_name

    def unwrap(self) -> Optional[T]:
        if self.ok:
            return self.data
        if self.error is not None:
            raise self.error
        raise TransportClientError("Unknown error.")


class SubscriptionState(str, Enum):
    PENDING = "pending"
    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"


@dataclass(frozen=True, slots=True)
class SubscriptionEvent:
    """
    One event delivered on a subscription channel.

    `response` and `payload` are exactly what the transport delivered; the
    payload is not copied.
    """

    topic: str
    response: str
    payload: Any
    seq: int
    timestamp: datetime
