"""
roon_transport_lib/transport.py

Contract of the message transport this library runs on.

Responsibilities of the transport (not implemented here):
- Own the connection, authentication and message framing.
- Correlate each request with exactly one reply.
- Deliver subscription events in order per subscription.

The library only ever calls the methods below.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Protocol, runtime_checkable


class Reply(Protocol):
    """A named reply (e.g. "Success", "InvalidRequest")."""

    name: str


# reply is None when the transport failed to deliver any reply.
ReplyCallback = Callable[[Optional[Reply], Any], None]

# (response tag, payload); tags are "Subscribed", "Changed", "Unsubscribed".
EventCallback = Callable[[str, Any], None]


@runtime_checkable
class TransportSubscription(Protocol):
    def unsubscribe(self) -> None:
        """Ask the service to end the subscription.

        The service acknowledges with an "Unsubscribed" event.
        """
        ...


@runtime_checkable
class Transport(Protocol):
    def send_request(
        self,
        name: str,
        body: Optional[Mapping[str, Any]],
        on_reply: ReplyCallback,
    ) -> None:
        """Fire-and-forget; `on_reply` is invoked once, possibly on another thread."""
        ...

    def subscribe(
        self,
        service: str,
        topic: str,
        body: Optional[Mapping[str, Any]],
        on_event: EventCallback,
    ) -> TransportSubscription:
        ...


__all__ = ["EventCallback", "Reply", "ReplyCallback", "Transport", "TransportSubscription"]
