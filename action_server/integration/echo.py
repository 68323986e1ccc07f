"""
In-memory demo provider.

Exposes a few HSV lights and an AV receiver, keeps their state in memory and
applies EXECUTE commands to it. Useful for linking a test account end to end.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..commands import (
    BrightnessAbsoluteCommand,
    BrightnessRelativeCommand,
    ColorAbsoluteCommand,
    Command,
    MuteCommand,
    NextInputCommand,
    OnOffCommand,
    PreviousInputCommand,
    SetInputCommand,
    SetVolumeCommand,
    VolumeRelativeCommand,
)
from ..devices import (
    DeviceInfo,
    DeviceInput,
    DeviceInputName,
    DeviceName,
    DeviceState,
    HSV,
    new_light,
    new_simple_av_receiver,
)
from .base import (
    DeviceProvider,
    ExecuteRequest,
    ExecuteResponse,
    QueryRequest,
    QueryResponse,
    SyncResponse,
)
from .homegraph import HomeGraphClient

logger = logging.getLogger(__name__)

ERROR_NOT_SUPPORTED = "functionNotSupported"
ERROR_DEVICE_NOT_FOUND = "deviceNotFound"


@dataclass
class Lightbulb:
    id: str
    name: str
    is_on: bool = False
    brightness: int = 100
    hue: float = 0.0
    saturation: float = 0.0
    value: float = 1.0

    def get_state(self) -> DeviceState:
        return (
            DeviceState(online=True)
            .record_on_off(self.is_on)
            .record_brightness(self.brightness)
            .record_color_hsv(self.hue, self.saturation, self.value)
        )


@dataclass
class Receiver:
    id: str
    name: str
    inputs: List[str]
    is_on: bool = False
    volume: int = 20
    muted: bool = False
    current_input: str = ""

    def get_state(self) -> DeviceState:
        return (
            DeviceState(online=True)
            .record_on_off(self.is_on)
            .record_input(self.current_input)
            .record_volume(self.volume, self.muted)
        )


class EchoProvider(DeviceProvider):
    """Provider keeping device state in memory."""

    MAX_VOLUME = 100

    def __init__(
        self,
        agent_user_id: str = "",
        notifier: Optional[HomeGraphClient] = None,
    ):
        self.agent_user_id = agent_user_id
        self.notifier = notifier
        self.lights: Dict[str, Lightbulb] = {
            "123": Lightbulb(id="123", name="Test light 1"),
            "456": Lightbulb(id="456", name="Test light 2"),
        }
        self.receiver = Receiver(
            id="789",
            name="Test receiver",
            inputs=["input_1", "input_2"],
            current_input="input_1",
        )

    async def sync(self, agent_user_id: str) -> SyncResponse:
        logger.debug(f"Sync for agent user {agent_user_id}")
        response = SyncResponse()

        for light in self.lights.values():
            device = new_light(light.id)
            device.name = DeviceName(default_names=["Test lamp"], name=light.name)
            device.room_hint = "test room"
            device.device_info = DeviceInfo(
                manufacturer="echo systems",
                model="tl001",
                hw_version="0.2",
                sw_version="0.3",
            )
            device.add_brightness_trait().add_colour_trait(HSV)
            response.devices.append(device)

        inputs = [
            DeviceInput(key="input_1", names=[DeviceInputName("en", ["Input 1", "Chromecast Audio"])]),
            DeviceInput(key="input_2", names=[DeviceInputName("en", ["Input 2", "Raspberry Pi"])]),
        ]
        receiver = new_simple_av_receiver(
            self.receiver.id, inputs, self.MAX_VOLUME, can_mute=True, ordered_inputs=True
        )
        receiver.name = DeviceName(default_names=["Test receiver"], name=self.receiver.name)
        receiver.will_report_state = self.notifier is not None
        receiver.room_hint = "test room"
        receiver.device_info = DeviceInfo(
            manufacturer="echo systems",
            model="tavr001",
            hw_version="0.2",
            sw_version="0.3",
        )
        response.devices.append(receiver)

        return response

    async def query(self, request: QueryRequest) -> QueryResponse:
        response = QueryResponse()
        for device_arg in request.devices:
            device = self._get_device(device_arg.id)
            if device is None:
                logger.info(f"Query for unknown device {device_arg.id}")
                continue
            response.states[device_arg.id] = device.get_state()
        return response

    async def execute(self, request: ExecuteRequest) -> ExecuteResponse:
        response = ExecuteResponse(updated_state=DeviceState(online=True))
        outcomes: Dict[str, Optional[str]] = {}

        for command_arg in request.commands:
            for command in command_arg.commands:
                logger.debug(f"Received command {command.command}")
                for device_arg in command_arg.target_devices:
                    device = self._get_device(device_arg.id)
                    if device is None:
                        outcomes[device_arg.id] = ERROR_DEVICE_NOT_FOUND
                        continue
                    if not self._apply(device, command, response.updated_state):
                        logger.info(f"Unsupported command {command.command} for device {device_arg.id}")
                        outcomes[device_arg.id] = ERROR_NOT_SUPPORTED
                        continue
                    outcomes.setdefault(device_arg.id, None)

        for device_id, error_code in outcomes.items():
            if error_code is None:
                response.updated_devices.append(device_id)
            else:
                response.failed_devices.setdefault(error_code, []).append(device_id)

        return response

    async def disconnect(self, agent_user_id: str) -> None:
        logger.debug(f"Disconnect for agent user {agent_user_id}")

    async def toggle_light(self, device_id: str) -> DeviceState:
        """Flip a light locally and report the new state to HomeGraph."""
        light = self.lights[device_id]
        light.is_on = not light.is_on
        state = light.get_state()

        if self.notifier is not None:
            await self.notifier.report_state(self.agent_user_id, {device_id: state})
        return state

    def _get_device(self, device_id: str):
        if device_id in self.lights:
            return self.lights[device_id]
        if device_id == self.receiver.id:
            return self.receiver
        return None

    def _apply(self, device, command: Command, state: DeviceState) -> bool:
        """Apply a command to a device, recording the result. Returns False if unsupported."""
        if isinstance(command, OnOffCommand):
            device.is_on = command.params.on
            state.record_on_off(device.is_on)
            return True

        if isinstance(device, Lightbulb):
            return self._apply_light(device, command, state)
        return self._apply_receiver(device, command, state)

    @staticmethod
    def _apply_light(light: Lightbulb, command: Command, state: DeviceState) -> bool:
        if isinstance(command, BrightnessAbsoluteCommand):
            light.brightness = command.params.brightness
        elif isinstance(command, BrightnessRelativeCommand):
            if command.params.relative_percent is not None:
                light.brightness += command.params.relative_percent
            elif command.params.relative_weight is not None:
                light.brightness += command.params.relative_weight
            light.brightness = max(0, min(100, light.brightness))
        elif isinstance(command, ColorAbsoluteCommand):
            hsv = command.params.color.spectrum_hsv
            if hsv is None:
                return False
            light.hue, light.saturation, light.value = hsv.hue, hsv.saturation, hsv.value
            state.record_color_hsv(light.hue, light.saturation, light.value)
            return True
        else:
            return False

        state.record_brightness(light.brightness)
        return True

    def _apply_receiver(self, receiver: Receiver, command: Command, state: DeviceState) -> bool:
        if isinstance(command, SetVolumeCommand):
            receiver.volume = command.params.volume_level
        elif isinstance(command, VolumeRelativeCommand):
            receiver.volume = max(0, min(self.MAX_VOLUME, receiver.volume + command.params.relative_steps))
        elif isinstance(command, MuteCommand):
            receiver.muted = command.params.mute
        elif isinstance(command, SetInputCommand):
            receiver.current_input = command.params.new_input
            state.record_input(receiver.current_input)
            return True
        elif isinstance(command, (NextInputCommand, PreviousInputCommand)):
            step = 1 if isinstance(command, NextInputCommand) else -1
            index = receiver.inputs.index(receiver.current_input) if receiver.current_input in receiver.inputs else 0
            receiver.current_input = receiver.inputs[(index + step) % len(receiver.inputs)]
            state.record_input(receiver.current_input)
            return True
        else:
            return False

        state.record_volume(receiver.volume, receiver.muted)
        return True
