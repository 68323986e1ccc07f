"""
EXECUTE command models and their wire codec.
"""
from .codec import COMMAND_TYPES, decode_command, encode_command
from .schemas import (
    BaseCommand,
    BrightnessAbsoluteCommand,
    BrightnessRelativeCommand,
    ColorAbsoluteCommand,
    Command,
    GenericCommand,
    MuteCommand,
    NextInputCommand,
    OnOffCommand,
    PreviousInputCommand,
    SetInputCommand,
    SetVolumeCommand,
    VolumeRelativeCommand,
)

__all__ = [
    "COMMAND_TYPES",
    "BaseCommand",
    "BrightnessAbsoluteCommand",
    "BrightnessRelativeCommand",
    "ColorAbsoluteCommand",
    "Command",
    "GenericCommand",
    "MuteCommand",
    "NextInputCommand",
    "OnOffCommand",
    "PreviousInputCommand",
    "SetInputCommand",
    "SetVolumeCommand",
    "VolumeRelativeCommand",
    "decode_command",
    "encode_command",
]
