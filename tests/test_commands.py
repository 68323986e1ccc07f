"""
Tests for EXECUTE command decoding and encoding.
"""
import pytest

from action_server.commands import (
    COMMAND_TYPES,
    BrightnessRelativeCommand,
    ColorAbsoluteCommand,
    GenericCommand,
    NextInputCommand,
    OnOffCommand,
    SetInputCommand,
    SetVolumeCommand,
    decode_command,
    encode_command,
)
from action_server.errors import CommandDecodeError

THERMOSTAT = "action.devices.commands.ThermostatTemperatureSetpoint"


class TestGenericCommands:
    """Unknown command names keep their params verbatim."""

    def test_typical_params(self):
        command = decode_command({"command": THERMOSTAT, "params": {"thermostatTemperatureSetpoint": 42.42}})

        assert isinstance(command, GenericCommand)
        assert command.command == THERMOSTAT
        assert command.params == {"thermostatTemperatureSetpoint": 42.42}

    def test_empty_params(self):
        command = decode_command({"command": THERMOSTAT, "params": {}})

        assert command.params == {}
        assert encode_command(command) == {"command": THERMOSTAT, "params": {}}

    def test_missing_params(self):
        command = decode_command({"command": THERMOSTAT})

        assert command.params is None
        assert encode_command(command) == {"command": THERMOSTAT}

    def test_name_lookup_is_case_sensitive(self):
        command = decode_command({"command": "action.devices.commands.onoff", "params": {"on": True}})

        assert isinstance(command, GenericCommand)


class TestTypedCommands:
    """Known command names decode into their typed params."""

    def test_on_off(self):
        command = decode_command({"command": "action.devices.commands.OnOff", "params": {"on": True}})

        assert isinstance(command, OnOffCommand)
        assert command.params.on is True
        assert encode_command(command) == {"command": "action.devices.commands.OnOff", "params": {"on": True}}

    def test_color_absolute_hsv(self):
        command = decode_command({
            "command": "action.devices.commands.ColorAbsolute",
            "params": {
                "color": {
                    "name": "magenta",
                    "spectrumHSV": {"hue": 300, "saturation": 1, "value": 1},
                }
            },
        })

        assert isinstance(command, ColorAbsoluteCommand)
        assert command.params.color.name == "magenta"
        assert command.params.color.spectrum_hsv.hue == 300.0
        assert command.params.color.spectrum_hsv.saturation == 1.0
        assert command.params.color.spectrum_hsv.value == 1.0
        assert command.params.color.spectrum_rgb is None

    def test_brightness_relative_percent(self):
        command = decode_command({
            "command": "action.devices.commands.BrightnessRelative",
            "params": {"brightnessRelativePercent": -10},
        })

        assert isinstance(command, BrightnessRelativeCommand)
        assert command.params.relative_percent == -10
        assert command.params.relative_weight is None
        assert encode_command(command)["params"] == {"brightnessRelativePercent": -10}

    def test_set_volume_and_input(self):
        volume = decode_command({"command": "action.devices.commands.setVolume", "params": {"volumeLevel": 35}})
        new_input = decode_command({"command": "action.devices.commands.SetInput", "params": {"newInput": "dvd"}})

        assert isinstance(volume, SetVolumeCommand)
        assert volume.params.volume_level == 35
        assert isinstance(new_input, SetInputCommand)
        assert new_input.params.new_input == "dvd"

    def test_missing_params_use_zero_values(self):
        command = decode_command({"command": "action.devices.commands.OnOff"})

        assert isinstance(command, OnOffCommand)
        assert command.params.on is False

    def test_command_without_params(self):
        command = decode_command({"command": "action.devices.commands.NextInput", "params": {}})

        assert isinstance(command, NextInputCommand)

    def test_challenge_is_kept(self):
        command = decode_command({
            "command": "action.devices.commands.OnOff",
            "params": {"on": False},
            "challenge": {"pin": "1234"},
        })

        assert command.challenge == {"pin": "1234"}
        assert encode_command(command)["challenge"] == {"pin": "1234"}

    def test_every_known_name_has_a_type(self):
        for name, command_type in COMMAND_TYPES.items():
            assert decode_command({"command": name, "params": {}}).__class__ is command_type


class TestDecodeErrors:
    """Malformed executions raise CommandDecodeError."""

    @pytest.mark.parametrize(
        "data",
        [
            {"command": "action.devices.commands.OnOff", "params": {"on": "yes"}},
            {"command": "action.devices.commands.OnOff", "params": "on"},
            {"command": "action.devices.commands.setVolume", "params": {"volumeLevel": "loud"}},
            {"command": "action.devices.commands.ColorAbsolute", "params": {"color": {"spectrumRGB": "red"}}},
            {"command": "action.devices.commands.ColorAbsolute", "params": {"color": {"spectrumHSV": {"hue": "300"}}}},
        ],
    )
    def test_bad_params(self, data):
        with pytest.raises(CommandDecodeError) as exc_info:
            decode_command(data)

        assert exc_info.value.command == data["command"]

    @pytest.mark.parametrize("data", [{}, {"command": ""}, {"command": 5}, ["OnOff"], "OnOff"])
    def test_missing_name(self, data):
        with pytest.raises(CommandDecodeError):
            decode_command(data)

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_command({})


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------

KNOWN_COMMAND_SAMPLES = [
    {"command": "action.devices.commands.BrightnessAbsolute", "params": {"brightness": 65}},
    {"command": "action.devices.commands.BrightnessRelative", "params": {"brightnessRelativeWeight": -2}},
    {"command": "action.devices.commands.ColorAbsolute", "params": {"color": {"name": "warm", "temperature": 2700}}},
    {"command": "action.devices.commands.ColorAbsolute", "params": {"color": {"spectrumRGB": 16711935}}},
    {
        "command": "action.devices.commands.ColorAbsolute",
        "params": {"color": {"spectrumHSV": {"hue": 300.0, "saturation": 0.5, "value": 1.0}}},
    },
    {"command": "action.devices.commands.OnOff", "params": {"on": True}, "challenge": {"ack": True}},
    {"command": "action.devices.commands.mute", "params": {"mute": True}},
    {"command": "action.devices.commands.setVolume", "params": {"volumeLevel": 35}},
    {"command": "action.devices.commands.volumeRelative", "params": {"relativeSteps": -3}},
    {"command": "action.devices.commands.SetInput", "params": {"newInput": "dvd"}},
    {"command": "action.devices.commands.NextInput", "params": {}},
    {"command": "action.devices.commands.PreviousInput", "params": {}},
]


class TestRoundTrip:
    """decode(encode(x)) gives back the same command."""

    @pytest.mark.parametrize("wire", KNOWN_COMMAND_SAMPLES, ids=lambda wire: wire["command"].rsplit(".", 1)[-1])
    def test_known_commands(self, wire):
        command = decode_command(wire)

        encoded = encode_command(command)

        assert encoded == wire
        assert decode_command(encoded) == command
        assert isinstance(command, COMMAND_TYPES[wire["command"]])

    def test_every_known_name_is_sampled(self):
        assert {wire["command"] for wire in KNOWN_COMMAND_SAMPLES} == set(COMMAND_TYPES)

    def test_generic_command_with_nested_params(self):
        wire = {
            "command": "action.devices.commands.SetModes",
            "params": {"updateModeSettings": {"load": "small", "temperature": {"unit": "C", "value": 40}}},
        }

        command = decode_command(wire)

        assert isinstance(command, GenericCommand)
        assert command.params == wire["params"]
        assert encode_command(command) == wire
        assert decode_command(encode_command(command)) == command


class TestWireNamesOnly:
    """Params are read by their wire names, never by attribute names."""

    def test_snake_case_keys_are_not_wire_fields(self):
        command = decode_command({"command": "action.devices.commands.setVolume", "params": {"volume_level": 5}})

        assert isinstance(command, SetVolumeCommand)
        assert command.params.volume_level == 0

    def test_snake_case_color_keys_ignored(self):
        command = decode_command({
            "command": "action.devices.commands.ColorAbsolute",
            "params": {"color": {"spectrum_rgb": 255}},
        })

        assert command.params.color.spectrum_rgb is None

    def test_hsv_accepts_integers(self):
        command = decode_command({
            "command": "action.devices.commands.ColorAbsolute",
            "params": {"color": {"spectrumHSV": {"hue": 120, "saturation": 1, "value": 1}}},
        })

        assert command.params.color.spectrum_hsv.hue == 120
