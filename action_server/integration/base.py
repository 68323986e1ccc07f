"""
Base integration layer for fulfillment.
Device backends implement DeviceProvider; token checks implement AccessTokenValidator.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..commands import Command
from ..devices import Device, DeviceState


@dataclass
class DeviceArg:
    """A device targeted by a QUERY or EXECUTE request.

    custom_data is the object the provider returned for this device during SYNC.
    """
    id: str
    custom_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommandArg:
    """A set of commands to apply to a set of devices."""
    target_devices: List[DeviceArg] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)


@dataclass
class SyncResponse:
    """The devices to expose to the assistant for the linked user."""
    devices: List[Device] = field(default_factory=list)


@dataclass
class QueryRequest:
    devices: List[DeviceArg] = field(default_factory=list)


@dataclass
class QueryResponse:
    """Current device states, keyed by the device IDs supplied in the request."""
    states: Dict[str, DeviceState] = field(default_factory=dict)


@dataclass
class ExecuteRequest:
    commands: List[CommandArg] = field(default_factory=list)


@dataclass
class ExecuteResponse:
    """
    Outcome of an EXECUTE request.

    Every requested device ID should appear in exactly one of updated_devices,
    offline_devices or failed_devices. All updated devices share updated_state.
    failed_devices maps an error code (e.g. "deviceTurnedOff") to the IDs that
    failed with it.
    """
    updated_state: DeviceState = field(default_factory=DeviceState)
    updated_devices: List[str] = field(default_factory=list)
    offline_devices: List[str] = field(default_factory=list)
    failed_devices: Dict[str, List[str]] = field(default_factory=dict)


class AccessTokenValidator(ABC):
    """Validates the OAuth access token the assistant platform sends with each request."""

    @abstractmethod
    async def validate(self, token: str) -> Optional[str]:
        """
        Validate a bearer token.

        Args:
            token: The access token from the Authorization header

        Returns:
            The agent user ID linked to the token, or None/empty if the token is not valid.
            Raising an exception also fails validation.
        """
        pass


class DeviceProvider(ABC):
    """Abstract base class for the backend answering the four fulfillment intents.

    Calls may arrive concurrently from many requests; implementations are
    responsible for their own synchronisation.
    """

    @abstractmethod
    async def sync(self, agent_user_id: str) -> SyncResponse:
        """
        Describe every device of the user.

        Args:
            agent_user_id: User ID returned by the token validator

        Returns:
            SyncResponse with the user's devices
        """
        pass

    @abstractmethod
    async def query(self, request: QueryRequest) -> QueryResponse:
        """Return the current state of each requested device."""
        pass

    @abstractmethod
    async def execute(self, request: ExecuteRequest) -> ExecuteResponse:
        """
        Apply the requested commands.

        Per-device failures belong in the response's offline/failed buckets;
        raise only when the request as a whole could not be processed.
        """
        pass

    @abstractmethod
    async def disconnect(self, agent_user_id: str) -> None:
        """Called when the user unlinks their account."""
        pass
