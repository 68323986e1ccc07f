"""
Trait and device type identifiers used in SYNC responses.

See https://developers.google.com/assistant/smarthome/traits for the full list.
Only the traits this library knows how to describe are listed here.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

# Device types
TYPE_LIGHT = "action.devices.types.LIGHT"
TYPE_OUTLET = "action.devices.types.OUTLET"
TYPE_SWITCH = "action.devices.types.SWITCH"
TYPE_AUDIO_VIDEO_RECEIVER = "action.devices.types.AUDIO_VIDEO_RECEIVER"

# Traits
TRAIT_BRIGHTNESS = "action.devices.traits.Brightness"
TRAIT_COLOR_SETTING = "action.devices.traits.ColorSetting"
TRAIT_INPUT_SELECTOR = "action.devices.traits.InputSelector"
TRAIT_ON_OFF = "action.devices.traits.OnOff"
TRAIT_VOLUME = "action.devices.traits.Volume"

# Color models supported by the ColorSetting trait.
# RGB and HSV are mutually exclusive; either may be combined with a temperature range.
RGB = "rgb"
HSV = "hsv"


@dataclass
class DeviceInputName:
    """Synonyms for an input in a single language."""
    language_code: str
    synonyms: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lang": self.language_code,
            "name_synonym": list(self.synonyms),
        }


@dataclass
class DeviceInput:
    """A single selectable input of a device (InputSelector trait)."""
    key: str
    names: List[DeviceInputName] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the attribute shape expected in availableInputs."""
        return {
            "key": self.key,
            "names": [name.to_dict() for name in self.names],
        }
