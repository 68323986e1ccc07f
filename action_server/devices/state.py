"""
Device state reported in QUERY and EXECUTE responses and in HomeGraph state reports.

On the wire a device state is a single flat JSON object: the common ``online`` and
``status`` fields sit next to whatever trait-specific fields have been recorded.
"""
from dataclasses import dataclass, field
from typing import Any, Dict


def sort_keys(value: Any) -> Any:
    """Return a copy of a JSON-like value with every mapping's keys in lexicographic order."""
    if isinstance(value, dict):
        return {key: sort_keys(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [sort_keys(item) for item in value]
    return value


@dataclass
class DeviceState:
    """The state of a single device.

    Trait fields are written with the ``record_*`` methods, which return the state
    so calls can be chained::

        DeviceState(online=True).record_on_off(True).record_brightness(80)
    """
    online: bool = False
    status: str = ""
    _state: Dict[str, Any] = field(default_factory=dict, init=False)

    @property
    def trait_state(self) -> Dict[str, Any]:
        """Copy of the recorded trait-specific fields."""
        return dict(self._state)

    def copy(self) -> "DeviceState":
        clone = DeviceState(online=self.online, status=self.status)
        clone._state = dict(self._state)
        return clone

    def record_brightness(self, brightness: int) -> "DeviceState":
        """Record the current brightness (Brightness trait)."""
        self._state["brightness"] = brightness
        return self

    def record_color_temperature(self, temperature_k: int) -> "DeviceState":
        """Record the current color temperature in Kelvin (ColorSetting trait)."""
        self._state["color"] = {"temperatureK": temperature_k}
        return self

    def record_color_rgb(self, spectrum_rgb: int) -> "DeviceState":
        """Record the current color as an RGB integer (ColorSetting trait)."""
        self._state["color"] = {"spectrumRgb": spectrum_rgb}
        return self

    def record_color_hsv(self, hue: float, saturation: float, value: float) -> "DeviceState":
        """Record the current color in HSV (ColorSetting trait)."""
        self._state["color"] = {
            "spectrumHsv": {
                "hue": hue,
                "saturation": saturation,
                "value": value,
            }
        }
        return self

    def record_input(self, input_key: str) -> "DeviceState":
        """Record the active input (InputSelector trait)."""
        self._state["input"] = input_key
        return self

    def record_on_off(self, on: bool) -> "DeviceState":
        """Record whether the device is on (OnOff trait)."""
        self._state["on"] = on
        return self

    def record_volume(self, volume: int, is_muted: bool) -> "DeviceState":
        """Record the current volume level and mute state (Volume trait)."""
        self._state["currentVolume"] = volume
        self._state["isMuted"] = is_muted
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the wire object, keys sorted."""
        merged: Dict[str, Any] = {"online": self.online}
        if self.status:
            merged["status"] = self.status
        for key, value in self._state.items():
            merged[key] = value
        return sort_keys(merged)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceState":
        """Rebuild a state from its wire object.

        ``online`` is required; every key other than ``online`` and ``status`` is
        kept verbatim as a trait field.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Device state must be a JSON object, got {type(data).__name__}")

        fields = dict(data)
        online = fields.pop("online", None)
        if not isinstance(online, bool):
            raise ValueError("Device state requires a boolean 'online' field")

        status = fields.pop("status", None)
        if status is None:
            status = ""
        elif not isinstance(status, str):
            raise ValueError("Device state 'status' must be a string")

        state = cls(online=online, status=status)
        state._state = fields
        return state
