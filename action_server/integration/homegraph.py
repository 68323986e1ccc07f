"""
HomeGraph client for pushing state changes and requesting re-syncs.

Used by the code that observes device changes, not by the fulfillment dispatcher.
"""
import aiohttp
import logging
import uuid
from typing import Any, Dict, Mapping, Optional

from ..config import settings
from ..devices import DeviceState
from ..errors import ReportStateError, SyncRequestError

logger = logging.getLogger(__name__)


class HomeGraphClient:
    """Client for the HomeGraph devices API."""

    def __init__(self, config: Dict[str, Any] = None):
        config = config or {}
        self.base_url = config.get("url", settings.homegraph_url)
        self.token = config.get("token", settings.homegraph_token)
        self.timeout = config.get("timeout", settings.http_timeout)
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self.session is None or self.session.closed:
            headers = {}
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self.session = aiohttp.ClientSession(
                base_url=self.base_url,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self.session

    async def close(self):
        """Close aiohttp session."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def request_sync(self, agent_user_id: str) -> None:
        """
        Ask HomeGraph to issue a SYNC for the user.

        Call this whenever the user's device list, or a device's properties, change.
        The provider's sync() must not be blocked on this call.

        Raises:
            SyncRequestError: if HomeGraph did not accept the request
        """
        session = await self._get_session()
        body = {"agentUserId": agent_user_id}

        async with session.post("/v1/devices:requestSync", json=body) as response:
            if response.status != 200:
                error_text = await response.text()
                logger.info(
                    f"Request sync failed for agent user {agent_user_id}: {response.status} - {error_text}"
                )
                raise SyncRequestError(f"HomeGraph request sync returned {response.status}")

        logger.debug(f"Requested sync for agent user {agent_user_id}")

    async def report_state(self, agent_user_id: str, states: Mapping[str, DeviceState]) -> None:
        """
        Report the current state of devices to HomeGraph.

        Each state should be complete, not an incremental update. State is not
        reported automatically after EXECUTE; the provider should report once the
        device has actually changed.

        Args:
            agent_user_id: The user owning the devices
            states: Device states keyed by device ID

        Raises:
            ReportStateError: if HomeGraph did not accept the report
        """
        session = await self._get_session()
        body = {
            "requestId": str(uuid.uuid4()),
            "agentUserId": agent_user_id,
            "payload": {
                "devices": {
                    "states": {device_id: state.to_dict() for device_id, state in states.items()},
                },
            },
        }

        async with session.post("/v1/devices:reportStateAndNotification", json=body) as response:
            if response.status != 200:
                error_text = await response.text()
                logger.info(
                    f"Report state failed for agent user {agent_user_id}: {response.status} - {error_text}"
                )
                raise ReportStateError(f"HomeGraph report state returned {response.status}")

        logger.debug(f"Reported state of {len(states)} devices for agent user {agent_user_id}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
