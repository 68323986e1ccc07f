"""
Encoding and decoding of EXECUTE commands.

Decoding looks at the command name before touching the params, picks the
matching model from COMMAND_TYPES and validates the params into it. Names that
are not in the table fall back to GenericCommand. Params that don't fit the
shape of a known command are an error, never silently defaulted.
"""
import logging
from typing import Any, Dict, Type

from pydantic import ValidationError

from ..errors import CommandDecodeError
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
    CMD_BRIGHTNESS_ABSOLUTE,
    CMD_BRIGHTNESS_RELATIVE,
    CMD_COLOR_ABSOLUTE,
    CMD_MUTE,
    CMD_NEXT_INPUT,
    CMD_ON_OFF,
    CMD_PREVIOUS_INPUT,
    CMD_SET_INPUT,
    CMD_SET_VOLUME,
    CMD_VOLUME_RELATIVE,
)

logger = logging.getLogger(__name__)

# Exact, case-sensitive wire names.
COMMAND_TYPES: Dict[str, Type[BaseCommand]] = {
    CMD_BRIGHTNESS_ABSOLUTE: BrightnessAbsoluteCommand,
    CMD_BRIGHTNESS_RELATIVE: BrightnessRelativeCommand,
    CMD_COLOR_ABSOLUTE: ColorAbsoluteCommand,
    CMD_ON_OFF: OnOffCommand,
    CMD_MUTE: MuteCommand,
    CMD_SET_VOLUME: SetVolumeCommand,
    CMD_VOLUME_RELATIVE: VolumeRelativeCommand,
    CMD_SET_INPUT: SetInputCommand,
    CMD_NEXT_INPUT: NextInputCommand,
    CMD_PREVIOUS_INPUT: PreviousInputCommand,
}


def decode_command(data: Any) -> Command:
    """
    Decode a single ``{"command": ..., "params": ...}`` object.

    Args:
        data: The parsed JSON object of one execution entry.

    Returns:
        The typed command for known names, GenericCommand otherwise.

    Raises:
        CommandDecodeError: if the object has no command name or the params
            don't match the shape of the named command.
    """
    if not isinstance(data, dict):
        raise CommandDecodeError("", f"expected a JSON object, got {type(data).__name__}")

    name = data.get("command")
    if not isinstance(name, str) or not name:
        raise CommandDecodeError("", "missing command name")

    challenge = data.get("challenge")
    command_type = COMMAND_TYPES.get(name)

    try:
        if command_type is None:
            logger.debug(f"No typed shape for command {name}, using generic command")
            return GenericCommand(command=name, params=data.get("params"), challenge=challenge)

        # A missing or null params object is the same as an empty one.
        params = data.get("params")
        if params is None:
            params = {}
        return command_type(params=params, challenge=challenge)
    except ValidationError as exc:
        raise CommandDecodeError(name, str(exc)) from exc


def encode_command(command: Command) -> Dict[str, Any]:
    """Encode a command into its ``{"command": ..., "params": ...}`` wire object."""
    data: Dict[str, Any] = {"command": command.command}

    if isinstance(command, GenericCommand):
        if command.params is not None:
            data["params"] = command.params
    else:
        data["params"] = command.params.model_dump(by_alias=True, exclude_none=True)

    if command.challenge is not None:
        data["challenge"] = command.challenge
    return data
