import pytest

from roon_transport_lib.generators.registry import COMMANDS


EXPECTED_CALLS = {
    "mute_all": ({"how": "mute"}, {"how": "mute"}),
    "pause_all": ({}, None),
    "standby": ({"output_id": "o1"}, {"output_id": "o1"}),
    "toggle_standby": ({"output_id": "o1", "control_key": "k"}, {"output_id": "o1", "control_key": "k"}),
    "convenience_switch": ({"output_id": "o1"}, {"output_id": "o1"}),
    "mute": ({"output_id": "o1", "how": "unmute"}, {"output_id": "o1", "how": "unmute"}),
    "change_volume": (
        {"output_id": "o1", "how": "relative_step", "value": -1},
        {"output_id": "o1", "how": "relative_step", "value": -1},
    ),
    "seek": (
        {"zone_or_output_id": "z1", "how": "absolute", "seconds": 30},
        {"zone_or_output_id": "z1", "how": "absolute", "seconds": 30},
    ),
    "control": (
        {"zone_or_output_id": "z1", "control": "playpause"},
        {"zone_or_output_id": "z1", "control": "playpause"},
    ),
    "transfer_zone": (
        {"from_zone_or_output_id": "a", "to_zone_or_output_id": "b"},
        {"from_zone_or_output_id": "a", "to_zone_or_output_id": "b"},
    ),
    "group_outputs": ({"output_ids": ["o1", "o2"]}, {"output_ids": ["o1", "o2"]}),
    "ungroup_outputs": ({"output_ids": ["o1"]}, {"output_ids": ["o1"]}),
    "change_settings": (
        {"zone_or_output_id": "z1", "loop": "loop_one"},
        {"zone_or_output_id": "z1", "loop": "loop_one"},
    ),
    "play_from_here": (
        {"zone_or_output_id": "z1", "queue_item_id": 17},
        {"zone_or_output_id": "z1", "queue_item_id": 17},
    ),
    "get_zones": ({}, None),
    "get_outputs": ({}, None),
}


def test_registry_covers_every_command():
    assert set(COMMANDS) == set(EXPECTED_CALLS)


def test_registry_callable_names_follow_convention():
    for key, spec in COMMANDS.items():
        assert spec.key == key
        assert spec.generator.__name__ == f"generator_transport_{key}"


def test_only_queries_return_body():
    with_body = {key for key, spec in COMMANDS.items() if spec.include_body}
    assert with_body == {"get_zones", "get_outputs"}


def test_generators_return_body_and_method_name():
    for key, (kwargs, expected_body) in EXPECTED_CALLS.items():
        body, name = COMMANDS[key].generator(**kwargs)
        assert name == key
        assert body == expected_body


def test_generators_are_pure():
    for key in EXPECTED_CALLS:
        globals_keys = COMMANDS[key].generator.__globals__.keys()
        assert "asyncio" not in globals_keys
        assert "Transport" not in globals_keys
        assert "TransportClient" not in globals_keys


def test_standby_omits_control_key_when_absent():
    body, _ = COMMANDS["standby"].generator(output_id="o1")
    assert "control_key" not in body


def test_change_settings_sends_only_given_fields():
    body, _ = COMMANDS["change_settings"].generator(zone_or_output_id="z1", shuffle=False)
    assert body == {"zone_or_output_id": "z1", "shuffle": False}


@pytest.mark.parametrize(
    ("key", "kwargs"),
    [
        ("mute_all", {"how": "loud"}),
        ("mute", {"output_id": "", "how": "mute"}),
        ("change_volume", {"output_id": "o1", "how": "absolute", "value": "10"}),
        ("change_volume", {"output_id": "o1", "how": "absolute", "value": True}),
        ("seek", {"zone_or_output_id": "z1", "how": "forward", "seconds": 3}),
        ("control", {"zone_or_output_id": "z1", "control": "rewind"}),
        ("change_settings", {"zone_or_output_id": "z1"}),
        ("change_settings", {"zone_or_output_id": "z1", "shuffle": "yes"}),
        ("change_settings", {"zone_or_output_id": "z1", "loop": "forever"}),
        ("play_from_here", {"zone_or_output_id": "z1", "queue_item_id": None}),
        ("group_outputs", {"output_ids": ["o1", None]}),
    ],
)
def test_generators_reject_bad_arguments(key, kwargs):
    with pytest.raises(ValueError):
        COMMANDS[key].generator(**kwargs)
