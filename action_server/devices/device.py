"""
Device profiles returned in SYNC responses.

A Device is described by the traits it supports. Each ``add_*_trait`` method
registers the trait and merges the trait's configuration into the device's
attributes object, so providers never build the attributes by hand.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set

from .state import sort_keys
from .traits import (
    DeviceInput,
    TRAIT_BRIGHTNESS,
    TRAIT_COLOR_SETTING,
    TRAIT_INPUT_SELECTOR,
    TRAIT_ON_OFF,
    TRAIT_VOLUME,
    TYPE_AUDIO_VIDEO_RECEIVER,
    TYPE_LIGHT,
    TYPE_OUTLET,
    TYPE_SWITCH,
)


@dataclass
class DeviceName:
    """Different ways of identifying the device."""
    # Not user settable
    default_names: List[str] = field(default_factory=list)
    # Name supplied by the user for display purposes
    name: str = ""
    # Other names the user may refer to the device by
    nicknames: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.default_names:
            data["defaultNames"] = list(self.default_names)
        if self.name:
            data["name"] = self.name
        if self.nicknames:
            data["nicknames"] = list(self.nicknames)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceName":
        return cls(
            default_names=list(data.get("defaultNames") or []),
            name=data.get("name") or "",
            nicknames=list(data.get("nicknames") or []),
        )


@dataclass
class DeviceInfo:
    """Physical properties of the device."""
    manufacturer: str = ""
    model: str = ""
    hw_version: str = ""
    sw_version: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for key, value in (
            ("manufacturer", self.manufacturer),
            ("model", self.model),
            ("hwVersion", self.hw_version),
            ("swVersion", self.sw_version),
        ):
            if value:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceInfo":
        return cls(
            manufacturer=data.get("manufacturer") or "",
            model=data.get("model") or "",
            hw_version=data.get("hwVersion") or "",
            sw_version=data.get("swVersion") or "",
        )


@dataclass
class OtherDeviceID:
    """An alternative identifier for the device, e.g. for local execution."""
    agent_id: str = ""
    device_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.agent_id:
            data["agentId"] = self.agent_id
        if self.device_id:
            data["deviceId"] = self.device_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OtherDeviceID":
        return cls(
            agent_id=data.get("agentId") or "",
            device_id=data.get("deviceId") or "",
        )


@dataclass
class Device:
    """A single provider-supplied device profile."""
    id: str
    # See https://developers.google.com/assistant/smarthome/guides for the possible types
    type: str
    traits: Set[str] = field(default_factory=set)
    name: DeviceName = field(default_factory=DeviceName)
    will_report_state: bool = False
    room_hint: str = ""
    device_info: DeviceInfo = field(default_factory=DeviceInfo)
    other_device_ids: List[OtherDeviceID] = field(default_factory=list)
    # Included unmodified in subsequent QUERY and EXECUTE requests
    custom_data: Dict[str, Any] = field(default_factory=dict)
    # Only written by the add_*_trait methods
    _attributes: Dict[str, Any] = field(default_factory=dict, init=False)

    @property
    def attributes(self) -> Dict[str, Any]:
        """Copy of the attributes contributed by the registered traits."""
        return dict(self._attributes)

    # ------------------------------------------------------------------
    # Trait registration
    # ------------------------------------------------------------------

    def add_brightness_trait(self, only_command: bool = False) -> "Device":
        """
        Indicate the device's brightness can be controlled.

        Args:
            only_command: True if the brightness can be set but not queried
        """
        self.traits.add(TRAIT_BRIGHTNESS)
        if only_command:
            self._attributes["commandOnlyBrightness"] = True
        return self

    def add_colour_trait(self, model: str, only_command: bool = False) -> "Device":
        """
        Indicate the device's colour can be controlled with the given color model.

        Supporting RGB and HSV is mutually exclusive; either can be combined with
        add_colour_temperature_trait.

        Args:
            model: traits.RGB or traits.HSV
            only_command: True if the colour can be set but not queried
        """
        self.traits.add(TRAIT_COLOR_SETTING)
        if only_command:
            self._attributes["commandOnlyColorSetting"] = True
        self._attributes["colorModel"] = model
        return self

    def add_colour_temperature_trait(
        self,
        min_temp_k: int,
        max_temp_k: int,
        only_command: bool = False,
    ) -> "Device":
        """
        Indicate the device's colour temperature can be controlled within a range.

        Args:
            min_temp_k: Lowest supported temperature in Kelvin
            max_temp_k: Highest supported temperature in Kelvin
            only_command: True if the colour can be set but not queried
        """
        self.traits.add(TRAIT_COLOR_SETTING)
        self._attributes["commandOnlyColorSetting"] = only_command
        self._attributes["colorTemperatureRange"] = {
            "temperatureMinK": min_temp_k,
            "temperatureMaxK": max_temp_k,
        }
        return self

    def add_input_selector_trait(self, available_inputs: List[DeviceInput], ordered: bool) -> "Device":
        """Indicate the device's active input can be selected."""
        self.traits.add(TRAIT_INPUT_SELECTOR)
        self._attributes["availableInputs"] = [item.to_dict() for item in available_inputs]
        self._attributes["orderedInputs"] = ordered
        return self

    def add_on_off_trait(self, only_command: bool = False, only_query: bool = False) -> "Device":
        """
        Indicate the device can be turned on and off.

        Args:
            only_command: True if the state can be set but not queried (a write-only switch)
            only_query: True if the state can be queried but not set (a sensor)
        """
        self.traits.add(TRAIT_ON_OFF)
        if only_command:
            self._attributes["commandOnlyOnOff"] = True
        if only_query:
            self._attributes["queryOnlyOnOff"] = True
        return self

    def add_volume_trait(self, max_level: int, can_mute: bool, only_command: bool = False) -> "Device":
        """Indicate the device's volume can be controlled."""
        self.traits.add(TRAIT_VOLUME)
        if only_command:
            self._attributes["commandOnlyVolume"] = True
        self._attributes["volumeMaxLevel"] = max_level
        self._attributes["volumeCanMuteAndUnmute"] = can_mute
        return self

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the SYNC device object. Empty optional fields are omitted."""
        data: Dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        if self.type:
            data["type"] = self.type
        if self.traits:
            data["traits"] = sorted(self.traits)
        data["name"] = self.name.to_dict()
        data["willReportState"] = self.will_report_state
        if self.room_hint:
            data["roomHint"] = self.room_hint
        if self._attributes:
            data["attributes"] = sort_keys(self._attributes)
        data["deviceInfo"] = self.device_info.to_dict()
        if self.other_device_ids:
            data["otherDeviceIds"] = [other.to_dict() for other in self.other_device_ids]
        if self.custom_data:
            data["customData"] = sort_keys(self.custom_data)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Device":
        """Create from a SYNC device object."""
        if not isinstance(data, dict):
            raise ValueError(f"Device must be a JSON object, got {type(data).__name__}")

        device = cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            traits=set(data.get("traits") or []),
            name=DeviceName.from_dict(data.get("name") or {}),
            will_report_state=bool(data.get("willReportState", False)),
            room_hint=data.get("roomHint") or "",
            device_info=DeviceInfo.from_dict(data.get("deviceInfo") or {}),
            other_device_ids=[
                OtherDeviceID.from_dict(other) for other in data.get("otherDeviceIds") or []
            ],
            custom_data=dict(data.get("customData") or {}),
        )
        device._attributes = dict(data.get("attributes") or {})
        return device


def new_light(device_id: str) -> Device:
    """Create an on-off light. Customize with the Brightness and ColorSetting traits."""
    return Device(id=device_id, type=TYPE_LIGHT).add_on_off_trait()


def new_outlet(device_id: str) -> Device:
    """Create an on-off outlet."""
    return Device(id=device_id, type=TYPE_OUTLET).add_on_off_trait()


def new_switch(device_id: str) -> Device:
    """Create an on-off switch. Customize with the Brightness trait."""
    return Device(id=device_id, type=TYPE_SWITCH).add_on_off_trait()


def new_simple_av_receiver(
    device_id: str,
    inputs: List[DeviceInput],
    max_level: int,
    can_mute: bool,
    only_command: bool = False,
    ordered_inputs: bool = False,
) -> Device:
    """Create an AV receiver with power, input selection and volume control."""
    device = Device(id=device_id, type=TYPE_AUDIO_VIDEO_RECEIVER)
    device.add_on_off_trait()
    device.add_input_selector_trait(inputs, ordered_inputs)
    device.add_volume_trait(max_level, can_mute, only_command)
    return device
