"""
Device profiles, traits and device state.
"""
from .device import (
    Device,
    DeviceInfo,
    DeviceName,
    OtherDeviceID,
    new_light,
    new_outlet,
    new_simple_av_receiver,
    new_switch,
)
from .state import DeviceState
from .traits import DeviceInput, DeviceInputName, HSV, RGB

__all__ = [
    "Device",
    "DeviceInfo",
    "DeviceInput",
    "DeviceInputName",
    "DeviceName",
    "DeviceState",
    "HSV",
    "OtherDeviceID",
    "RGB",
    "new_light",
    "new_outlet",
    "new_simple_av_receiver",
    "new_switch",
]
