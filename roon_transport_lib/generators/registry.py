"""Registry of transport commands keyed by method name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from . import transport as gen


@dataclass(frozen=True, slots=True)
class CommandSpec:
    key: str
    generator: Callable[..., tuple]
    # True for queries whose reply body is handed back to the caller.
    include_body: bool = False


def _spec(generator: Callable[..., tuple], *, include_body: bool = False) -> CommandSpec:
    key = generator.__name__.removeprefix("generator_transport_")
    return CommandSpec(key=key, generator=generator, include_body=include_body)


COMMANDS: Mapping[str, CommandSpec] = {
    spec.key: spec
    for spec in (
        _spec(gen.generator_transport_mute_all),
        _spec(gen.generator_transport_pause_all),
        _spec(gen.generator_transport_standby),
        _spec(gen.generator_transport_toggle_standby),
        _spec(gen.generator_transport_convenience_switch),
        _spec(gen.generator_transport_mute),
        _spec(gen.generator_transport_change_volume),
        _spec(gen.generator_transport_seek),
        _spec(gen.generator_transport_control),
        _spec(gen.generator_transport_transfer_zone),
        _spec(gen.generator_transport_group_outputs),
        _spec(gen.generator_transport_ungroup_outputs),
        _spec(gen.generator_transport_change_settings),
        _spec(gen.generator_transport_play_from_here),
        _spec(gen.generator_transport_get_zones, include_body=True),
        _spec(gen.generator_transport_get_outputs, include_body=True),
    )
}

__all__ = ["COMMANDS", "CommandSpec"]
