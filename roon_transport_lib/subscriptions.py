"""
roon_transport_lib/subscriptions.py

Cancellable subscription handles.

A Subscription receives (response, payload) events from the transport,
optionally applies them to local state, then forwards them to listeners and
to a bounded event queue consumed through events(). Apply and notify run
under one lock, so listeners always observe post-apply state.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, Optional

from .const import RESPONSE_SUBSCRIBED, RESPONSE_UNSUBSCRIBED, TOPIC_ZONES
from .handlers.zones import make_zones_event_handler
from .models import MirrorSnapshot
from .states import MirrorDiagnostics, ZoneMirror, ZoneRecord
from .transport import TransportSubscription
from .types import SubscriptionEvent, SubscriptionState

ApplyFn = Callable[[str, Any], bool]
Listener = Callable[[SubscriptionEvent], None]


class Subscription:
    """
    Handle for one live subscription.

    Typical usage:
        sub = client.subscribe_outputs()
        remove = sub.add_listener(on_event)
        async for event in sub.events():
            ...
        sub.unsubscribe()
    """

    def __init__(
        self,
        topic: str,
        *,
        queue_size: int = 256,
        apply: Optional[ApplyFn] = None,
        lock: Optional[threading.RLock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.topic = topic
        self._apply = apply
        self._lock = lock or threading.RLock()
        self._log = logger or logging.getLogger(__name__)
        self._state = SubscriptionState.PENDING
        self._handle: Optional[TransportSubscription] = None
        self._unsubscribe_requested = False
        self._seq = 0

        self._listeners: list[Listener] = []
        self._listener_lock = threading.Lock()
        self._listener_error_types: set[type] = set()

        # Bound at construction when a loop is running, else by the first events() consumer.
        self._queue_lock = threading.Lock()
        try:
            self._loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None
        self._event_queue: asyncio.Queue[Optional[SubscriptionEvent]] = asyncio.Queue(
            maxsize=queue_size if queue_size > 0 else 256
        )

    @property
    def state(self) -> SubscriptionState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is not SubscriptionState.UNSUBSCRIBED and not self._unsubscribe_requested

    # -------------------------
    # Listeners / stream
    # -------------------------

    def add_listener(self, callback: Listener) -> Callable[[], bool]:
        with self._listener_lock:
            if callback not in self._listeners:
                self._listeners.append(callback)
        return lambda: self.remove_listener(callback)

    def remove_listener(self, callback: Listener) -> bool:
        with self._listener_lock:
            if callback not in self._listeners:
                return False
            self._listeners.remove(callback)
        return True

    def events(self) -> AsyncIterator[SubscriptionEvent]:
        """Iterate events until the subscription ends. Single consumer."""
        async def _iter() -> AsyncIterator[SubscriptionEvent]:
            self._bind_loop(asyncio.get_running_loop())
            while True:
                event = await self._event_queue.get()
                if event is None:
                    return
                yield event

        return _iter()

    # -------------------------
    # Lifecycle
    # -------------------------

    def attach(self, handle: TransportSubscription) -> None:
        """Bind the transport handle; replays an early unsubscribe() request."""
        with self._lock:
            self._handle = handle
            pending_unsubscribe = self._unsubscribe_requested
        if pending_unsubscribe:
            handle.unsubscribe()

    def unsubscribe(self) -> bool:
        """
        Ask the transport to end the subscription.

        Idempotent: returns False (and does nothing) when already unsubscribed
        or already requested.
        """
        with self._lock:
            if self._state is SubscriptionState.UNSUBSCRIBED or self._unsubscribe_requested:
                return False
            self._unsubscribe_requested = True
            handle = self._handle
        self._log.debug("Unsubscribing from %s", self.topic)
        if handle is not None:
            handle.unsubscribe()
        return True

    def on_event(self, response: str, payload: Any) -> None:
        """Transport event callback: apply, then notify, under one lock."""
        with self._lock:
            if self._apply is not None:
                self._apply(response, payload)
            if response == RESPONSE_SUBSCRIBED:
                self._state = SubscriptionState.SUBSCRIBED
            elif response == RESPONSE_UNSUBSCRIBED:
                self._state = SubscriptionState.UNSUBSCRIBED
            self._seq += 1
            event = SubscriptionEvent(
                topic=self.topic,
                response=response,
                payload=payload,
                seq=self._seq,
                timestamp=datetime.now(timezone.utc),
            )
            self._notify(event)
        self._post(event)
        if response == RESPONSE_UNSUBSCRIBED:
            self._post(None)

    def _notify(self, event: SubscriptionEvent) -> None:
        with self._listener_lock:
            callbacks = list(self._listeners)
        for cb in callbacks:
            try:
                cb(event)
            except Exception as exc:  # noqa: BLE001
                exc_type = type(exc)
                if exc_type not in self._listener_error_types:
                    self._listener_error_types.add(exc_type)
                    self._log.warning("Subscription listener failed: %s", exc_type.__name__)

    def _bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        with self._queue_lock:
            if self._loop is None:
                self._loop = loop

    def _post(self, event: Optional[SubscriptionEvent]) -> None:
        with self._queue_lock:
            loop = self._loop
            if loop is None:
                # No consumer yet, so no waiter can be woken off-loop.
                self._enqueue(event)
                return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            self._enqueue(event)
            return
        try:
            loop.call_soon_threadsafe(self._enqueue, event)
        except RuntimeError:
            self._log.debug("Dropping %s event: event loop closed", self.topic)

    def _enqueue(self, event: Optional[SubscriptionEvent]) -> None:
        if self._event_queue.full():
            try:
                self._event_queue.get_nowait()
            except asyncio.QueueEmpty:
                pass
        try:
            self._event_queue.put_nowait(event)
        except asyncio.QueueFull:
            pass


class ZoneSubscription(Subscription):
    """
    Zones subscription that owns a ZoneMirror.

    Each instance owns a fresh mirror, so re-subscribing never inherits state.
    """

    def __init__(
        self,
        *,
        queue_size: int = 256,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        log = logger or logging.getLogger(__name__)
        self.mirror = ZoneMirror()
        super().__init__(
            TOPIC_ZONES,
            queue_size=queue_size,
            apply=make_zones_event_handler(self.mirror, log),
            lock=self.mirror.lock,
            logger=log,
        )

    @property
    def diagnostics(self) -> MirrorDiagnostics:
        return self.mirror.diagnostics

    def zone_by_zone_id(self, zone_id: Optional[str]) -> Optional[ZoneRecord]:
        return self.mirror.zone_by_zone_id(zone_id)

    def zone_by_output_id(self, output_id: Optional[str]) -> Optional[ZoneRecord]:
        return self.mirror.zone_by_output_id(output_id)

    def zone_by_object(self, zone_or_output: Any) -> Optional[ZoneRecord]:
        return self.mirror.zone_by_object(zone_or_output)

    def snapshot(self) -> MirrorSnapshot:
        return self.mirror.snapshot()


__all__ = ["Subscription", "ZoneSubscription"]
