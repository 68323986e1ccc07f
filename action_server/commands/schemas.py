"""
Pydantic models for EXECUTE commands.

Every command on the wire is a ``{"command": <name>, "params": {...}}`` object.
Each well-known command name has its own model with a typed ``params`` shape;
any other name is carried by GenericCommand so newer commands are not dropped.
"""
from typing import Any, Dict, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

CMD_BRIGHTNESS_ABSOLUTE = "action.devices.commands.BrightnessAbsolute"
CMD_BRIGHTNESS_RELATIVE = "action.devices.commands.BrightnessRelative"
CMD_COLOR_ABSOLUTE = "action.devices.commands.ColorAbsolute"
CMD_ON_OFF = "action.devices.commands.OnOff"
CMD_MUTE = "action.devices.commands.mute"
CMD_SET_VOLUME = "action.devices.commands.setVolume"
CMD_VOLUME_RELATIVE = "action.devices.commands.volumeRelative"
CMD_SET_INPUT = "action.devices.commands.SetInput"
CMD_NEXT_INPUT = "action.devices.commands.NextInput"
CMD_PREVIOUS_INPUT = "action.devices.commands.PreviousInput"


class CommandParams(BaseModel):
    """Base for command parameter shapes. Fields are only populated by their wire names."""

    model_config = ConfigDict(populate_by_name=False)


class BrightnessAbsoluteParams(CommandParams):
    """Set the brightness to an absolute value."""

    brightness: StrictInt = 0


class BrightnessRelativeParams(CommandParams):
    """Change the brightness by a relative amount. Only one of the fields will be set."""

    relative_percent: Optional[StrictInt] = Field(None, alias="brightnessRelativePercent")
    relative_weight: Optional[StrictInt] = Field(None, alias="brightnessRelativeWeight")


class ColorHSV(CommandParams):
    hue: StrictFloat = 0.0
    saturation: StrictFloat = 0.0
    value: StrictFloat = 0.0


class ColorValue(CommandParams):
    """Requested colour. Only one of temperature, RGB and HSV will be set."""

    name: Optional[StrictStr] = None
    temperature: Optional[StrictInt] = None
    spectrum_rgb: Optional[StrictInt] = Field(None, alias="spectrumRGB")
    spectrum_hsv: Optional[ColorHSV] = Field(None, alias="spectrumHSV")


class ColorAbsoluteParams(CommandParams):
    color: ColorValue = Field(default_factory=ColorValue)


class OnOffParams(CommandParams):
    on: StrictBool = False


class MuteParams(CommandParams):
    mute: StrictBool = False


class SetVolumeParams(CommandParams):
    volume_level: StrictInt = Field(0, alias="volumeLevel")


class VolumeRelativeParams(CommandParams):
    relative_steps: StrictInt = Field(0, alias="relativeSteps")


class SetInputParams(CommandParams):
    new_input: StrictStr = Field("", alias="newInput")


class NextInputParams(CommandParams):
    pass


class PreviousInputParams(CommandParams):
    pass


class BaseCommand(BaseModel):
    """Fields shared by every command.

    ``challenge`` carries the two-factor response (e.g. ``{"ack": true}`` or
    ``{"pin": "1234"}``) for commands that required re-confirmation.
    """

    command: str
    challenge: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True)


class BrightnessAbsoluteCommand(BaseCommand):
    command: Literal["action.devices.commands.BrightnessAbsolute"] = CMD_BRIGHTNESS_ABSOLUTE
    params: BrightnessAbsoluteParams = Field(default_factory=BrightnessAbsoluteParams)


class BrightnessRelativeCommand(BaseCommand):
    command: Literal["action.devices.commands.BrightnessRelative"] = CMD_BRIGHTNESS_RELATIVE
    params: BrightnessRelativeParams = Field(default_factory=BrightnessRelativeParams)


class ColorAbsoluteCommand(BaseCommand):
    command: Literal["action.devices.commands.ColorAbsolute"] = CMD_COLOR_ABSOLUTE
    params: ColorAbsoluteParams = Field(default_factory=ColorAbsoluteParams)


class OnOffCommand(BaseCommand):
    command: Literal["action.devices.commands.OnOff"] = CMD_ON_OFF
    params: OnOffParams = Field(default_factory=OnOffParams)


class MuteCommand(BaseCommand):
    command: Literal["action.devices.commands.mute"] = CMD_MUTE
    params: MuteParams = Field(default_factory=MuteParams)


class SetVolumeCommand(BaseCommand):
    command: Literal["action.devices.commands.setVolume"] = CMD_SET_VOLUME
    params: SetVolumeParams = Field(default_factory=SetVolumeParams)


class VolumeRelativeCommand(BaseCommand):
    command: Literal["action.devices.commands.volumeRelative"] = CMD_VOLUME_RELATIVE
    params: VolumeRelativeParams = Field(default_factory=VolumeRelativeParams)


class SetInputCommand(BaseCommand):
    command: Literal["action.devices.commands.SetInput"] = CMD_SET_INPUT
    params: SetInputParams = Field(default_factory=SetInputParams)


class NextInputCommand(BaseCommand):
    command: Literal["action.devices.commands.NextInput"] = CMD_NEXT_INPUT
    params: NextInputParams = Field(default_factory=NextInputParams)


class PreviousInputCommand(BaseCommand):
    command: Literal["action.devices.commands.PreviousInput"] = CMD_PREVIOUS_INPUT
    params: PreviousInputParams = Field(default_factory=PreviousInputParams)


class GenericCommand(BaseCommand):
    """A command this library has no typed shape for.

    The params are kept exactly as received (``None`` when absent) so callers
    can still handle commands this library does not know about yet.
    """

    params: Optional[Dict[str, Any]] = None


Command = Union[
    BrightnessAbsoluteCommand,
    BrightnessRelativeCommand,
    ColorAbsoluteCommand,
    OnOffCommand,
    MuteCommand,
    SetVolumeCommand,
    VolumeRelativeCommand,
    SetInputCommand,
    NextInputCommand,
    PreviousInputCommand,
    GenericCommand,
]
