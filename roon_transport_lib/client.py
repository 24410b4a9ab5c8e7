"""
Stable client facade for the transport service.

This wraps the CommandDispatcher and subscription handles with:
- structured results (commands never raise; failures are Result values)
- zone/output reference coercion at the boundary
- the live zone mirror and its lookups
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional

from .const import TOPIC_OUTPUTS, TOPIC_QUEUE, Control, LoopMode, MuteHow, SeekHow, VolumeHow
from .dispatcher import CommandDispatcher
from .errors import InvalidArgumentError, MissingTargetError, NetworkError
from .models import MirrorSnapshot, Output, Zone
from .refs import RawId, Ref, coerce_target, resolve_output_id, resolve_zone_or_output_id
from .states import MirrorDiagnostics, ZoneRecord
from .subscriptions import Subscription, ZoneSubscription
from .transport import Transport
from .types import ClientConfig, Result, SubscriptionEvent

Listener = Callable[[SubscriptionEvent], None]


class TransportClient:
    """
    Client API for consumers of the transport service.

    Commands are coroutines returning Result. Subscriptions return handles
    immediately; their events arrive through listeners or events().
    """

    def __init__(
        self,
        transport: Transport,
        config: ClientConfig | None = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._log = logger or logging.getLogger(self._config.logger_name or __name__)
        self._transport = transport
        self._dispatcher = CommandDispatcher(
            transport,
            service_name=self._config.service_name,
            logger=self._log,
        )
        self._zones: Optional[ZoneSubscription] = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    # --- bulk actions ---

    async def mute_all(self, how: MuteHow | str) -> Result[None]:
        return await self._dispatcher.execute_command("mute_all", how=how)

    async def pause_all(self) -> Result[None]:
        return await self._dispatcher.execute_command("pause_all")

    # --- output actions ---

    async def standby(self, output: Any, *, control_key: Optional[str] = None) -> Result[None]:
        """Put an output into standby.

        Without control_key every source control that supports standby is
        put into standby.
        """
        return await self._execute_for_output("standby", output, control_key=control_key)

    async def toggle_standby(self, output: Any, *, control_key: Optional[str] = None) -> Result[None]:
        return await self._execute_for_output("toggle_standby", output, control_key=control_key)

    async def convenience_switch(self, output: Any, *, control_key: Optional[str] = None) -> Result[None]:
        """Switch an output to this source, taking it out of standby if needed."""
        return await self._execute_for_output("convenience_switch", output, control_key=control_key)

    async def mute(self, output: Any, how: MuteHow | str) -> Result[None]:
        return await self._execute_for_output("mute", output, how=how)

    async def change_volume(self, output: Any, how: VolumeHow | str, value: float) -> Result[None]:
        """Change the volume of one output.

        Grouped outputs can use different volume scales, so volume is always
        set per output. For "incremental" volume controls use "relative" with
        +1/-1.
        """
        return await self._execute_for_output("change_volume", output, how=how, value=value)

    async def group_outputs(self, outputs: Optional[Iterable[Any]]) -> Result[None]:
        """Group outputs; the first output's zone keeps its queue.

        A single output reference is accepted as a one-item list.
        """
        return await self._execute_for_outputs("group_outputs", outputs)

    async def ungroup_outputs(self, outputs: Optional[Iterable[Any]]) -> Result[None]:
        return await self._execute_for_outputs("ungroup_outputs", outputs)

    # --- zone or output actions ---

    async def seek(self, zone_or_output: Any, how: SeekHow | str, seconds: float) -> Result[None]:
        return await self._execute_for_zone_or_output("seek", zone_or_output, how=how, seconds=seconds)

    async def control(self, zone_or_output: Any, control: Control | str) -> Result[None]:
        """Run a transport control. Check the zone's is_<control>_allowed flag first."""
        return await self._execute_for_zone_or_output("control", zone_or_output, control=control)

    async def transfer_zone(self, from_zone_or_output: Any, to_zone_or_output: Any) -> Result[None]:
        from_id = resolve_zone_or_output_id(coerce_target(from_zone_or_output))
        to_id = resolve_zone_or_output_id(coerce_target(to_zone_or_output))
        if from_id is None or to_id is None:
            return Result.failure(MissingTargetError("Both source and destination are required."))
        return await self._dispatcher.execute_command(
            "transfer_zone",
            from_zone_or_output_id=from_id,
            to_zone_or_output_id=to_id,
        )

    async def change_settings(
        self,
        zone_or_output: Any,
        *,
        shuffle: Optional[bool] = None,
        auto_radio: Optional[bool] = None,
        loop: LoopMode | str | None = None,
    ) -> Result[None]:
        return await self._execute_for_zone_or_output(
            "change_settings",
            zone_or_output,
            shuffle=shuffle,
            auto_radio=auto_radio,
            loop=loop,
        )

    async def play_from_here(self, zone_or_output: Any, queue_item_id: Any) -> Result[None]:
        return await self._execute_for_zone_or_output(
            "play_from_here", zone_or_output, queue_item_id=queue_item_id
        )

    # --- queries ---

    async def get_zones(self) -> Result[Mapping[str, Any]]:
        return await self._dispatcher.execute_command("get_zones")

    async def get_outputs(self) -> Result[Mapping[str, Any]]:
        return await self._dispatcher.execute_command("get_outputs")

    # --- subscriptions ---

    def subscribe_zones(self, listener: Optional[Listener] = None) -> ZoneSubscription:
        """
        Subscribe to zones and maintain a fresh local mirror.

        The returned handle becomes the mirror used by the client's lookups.
        """
        sub = ZoneSubscription(queue_size=self._config.event_queue_size, logger=self._log)
        if listener is not None:
            sub.add_listener(listener)
        self._zones = sub
        self._start(sub, None)
        return sub

    def subscribe_outputs(self, listener: Optional[Listener] = None) -> Subscription:
        sub = Subscription(TOPIC_OUTPUTS, queue_size=self._config.event_queue_size, logger=self._log)
        if listener is not None:
            sub.add_listener(listener)
        self._start(sub, None)
        return sub

    def subscribe_queue(
        self,
        zone_or_output: Any,
        max_item_count: int,
        listener: Optional[Listener] = None,
    ) -> Subscription:
        """
        Subscribe to the play queue of a zone or output.

        Raises MissingTargetError / InvalidArgumentError before contacting the
        transport.
        """
        zone_or_output_id = resolve_zone_or_output_id(coerce_target(zone_or_output))
        if zone_or_output_id is None:
            raise MissingTargetError()
        if isinstance(max_item_count, bool) or not isinstance(max_item_count, int) or max_item_count < 0:
            raise InvalidArgumentError(f"max_item_count must be an int >= 0 (got {max_item_count!r})")
        sub = Subscription(TOPIC_QUEUE, queue_size=self._config.event_queue_size, logger=self._log)
        if listener is not None:
            sub.add_listener(listener)
        self._start(
            sub,
            {"zone_or_output_id": zone_or_output_id, "max_item_count": max_item_count},
        )
        return sub

    # --- lookups (local mirror only) ---

    @property
    def zones_subscription(self) -> Optional[ZoneSubscription]:
        return self._zones

    @property
    def mirror_diagnostics(self) -> Optional[MirrorDiagnostics]:
        return self._zones.diagnostics if self._zones is not None else None

    def zone_by_zone_id(self, zone_id: Optional[str]) -> Optional[ZoneRecord]:
        if self._zones is None:
            return None
        return self._zones.zone_by_zone_id(zone_id)

    def zone_by_output_id(self, output_id: Optional[str]) -> Optional[ZoneRecord]:
        if self._zones is None:
            return None
        return self._zones.zone_by_output_id(output_id)

    def zone_by_object(self, zone_or_output: Any) -> Optional[ZoneRecord]:
        if self._zones is None:
            return None
        return self._zones.zone_by_object(zone_or_output)

    @property
    def snapshot(self) -> MirrorSnapshot:
        if self._zones is None:
            return MirrorSnapshot.empty()
        return self._zones.snapshot()

    # --- internals ---

    def _start(self, sub: Subscription, body: Optional[Mapping[str, Any]]) -> None:
        self._log.debug("Subscribing to %s/%s", self._config.service_name, sub.topic)
        try:
            handle = self._transport.subscribe(self._config.service_name, sub.topic, body, sub.on_event)
        except Exception as exc:  # noqa: BLE001
            if sub is self._zones:
                self._zones = None
            raise NetworkError(f"subscribe {sub.topic} failed: {exc}") from exc
        sub.attach(handle)

    async def _execute_for_output(self, command_key: str, output: Any, **params: Any) -> Result[None]:
        output_id = resolve_output_id(coerce_target(output))
        if output_id is None:
            return Result.failure(MissingTargetError("An output reference is required."))
        return await self._dispatcher.execute_command(command_key, output_id=output_id, **params)

    async def _execute_for_zone_or_output(self, command_key: str, zone_or_output: Any, **params: Any) -> Result[None]:
        zone_or_output_id = resolve_zone_or_output_id(coerce_target(zone_or_output))
        if zone_or_output_id is None:
            return Result.failure(MissingTargetError())
        return await self._dispatcher.execute_command(
            command_key, zone_or_output_id=zone_or_output_id, **params
        )

    async def _execute_for_outputs(self, command_key: str, outputs: Optional[Iterable[Any]]) -> Result[None]:
        if outputs is None:
            return Result.failure(MissingTargetError("A list of outputs is required."))
        # A single reference counts as a one-item list.
        if isinstance(outputs, (str, Mapping, RawId, Ref, Output, Zone)):
            outputs = [outputs]
        output_ids = [resolve_output_id(coerce_target(o)) for o in outputs]
        if any(o is None for o in output_ids):
            return Result.failure(MissingTargetError("Every output must resolve to an output id."))
        return await self._dispatcher.execute_command(command_key, output_ids=output_ids)


__all__ = ["TransportClient"]
