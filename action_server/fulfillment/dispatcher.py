"""
Fulfillment dispatcher.

Handles one POST from the assistant platform: checks the content type and the
bearer token, decodes the request envelope, routes the single input by intent
to the DeviceProvider and encodes the provider's answer in the wire format.

Every failed check ends the request with an HTTPException; nothing falls through.
Provider errors are logged and surfaced once as 503. No retries are attempted.
"""
import json
import logging
from typing import Any, Dict, List, Type, TypeVar

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from ..commands import decode_command
from ..errors import CommandDecodeError
from ..integration.base import (
    AccessTokenValidator,
    CommandArg,
    DeviceArg,
    DeviceProvider,
    ExecuteRequest,
    ExecuteResponse,
    QueryRequest,
)
from ..models import ExecutePayload, FulfillmentInput, FulfillmentRequest, Intent, QueryPayload, RequestedDevice

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

STATUS_SUCCESS = "SUCCESS"
STATUS_OFFLINE = "OFFLINE"
STATUS_ERROR = "ERROR"

DESERIALIZATION_FAILED = "JSON Deserialization Failed"


class FulfillmentDispatcher:
    """Translates fulfillment requests into DeviceProvider calls."""

    def __init__(self, validator: AccessTokenValidator, provider: DeviceProvider):
        if validator is None:
            raise ValueError("An access token validator is required")
        if provider is None:
            raise ValueError("A device provider is required")

        self.validator = validator
        self.provider = provider

    async def handle(self, request: Request) -> JSONResponse:
        """
        Process a fulfillment request.

        Raises:
            HTTPException: 415/401/400 for invalid requests, 503 when the provider fails.
        """
        content_type = request.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise HTTPException(status_code=415, detail="Request not JSON")

        agent_user_id = await self._authenticate(request.headers.get("authorization", ""))

        fulfillment_request = await self._decode_envelope(request)
        if len(fulfillment_request.inputs) != 1:
            raise HTTPException(status_code=400, detail="Unsupported number of inputs")

        request_id = fulfillment_request.request_id
        fulfillment_input = fulfillment_request.inputs[0]
        logger.debug(f"Processing intent {fulfillment_input.intent} for request {request_id}")

        try:
            intent = Intent(fulfillment_input.intent)
        except ValueError:
            logger.info(f"Unsupported intent {fulfillment_input.intent!r} in request {request_id}")
            raise HTTPException(status_code=400, detail="Unsupported intent name specified")

        if intent == Intent.SYNC:
            content = await self._sync(request_id, agent_user_id)
        elif intent == Intent.QUERY:
            content = await self._query(request_id, agent_user_id, fulfillment_input)
        elif intent == Intent.EXECUTE:
            content = await self._execute(request_id, agent_user_id, fulfillment_input)
        else:
            content = await self._disconnect(agent_user_id)

        return JSONResponse(status_code=200, content=content)

    # ------------------------------------------------------------------
    # Request validation
    # ------------------------------------------------------------------

    async def _authenticate(self, auth_header: str) -> str:
        """Return the agent user ID for a ``Bearer <token>`` header."""
        if not auth_header:
            raise HTTPException(status_code=401, detail="Access Token Required")

        parts = auth_header.split(" ")
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise HTTPException(status_code=401, detail="Access Token Must Be Bearer")

        try:
            agent_user_id = await self.validator.validate(parts[1])
        except Exception as exc:
            logger.info(f"Error validating access token: {exc}")
            raise HTTPException(status_code=401, detail="Access Token Invalid")

        if not agent_user_id:
            raise HTTPException(status_code=401, detail="Access Token Invalid")
        return agent_user_id

    async def _decode_envelope(self, request: Request) -> FulfillmentRequest:
        body = await request.body()
        try:
            return FulfillmentRequest.model_validate(json.loads(body))
        except (ValueError, ValidationError) as exc:
            logger.info(f"Error deserializing request body: {exc}")
            raise HTTPException(status_code=400, detail=DESERIALIZATION_FAILED)

    @staticmethod
    def _decode_payload(model: Type[PayloadT], fulfillment_input: FulfillmentInput) -> PayloadT:
        try:
            return model.model_validate(fulfillment_input.payload or {})
        except ValidationError as exc:
            logger.info(f"Error deserializing {fulfillment_input.intent} payload: {exc}")
            raise HTTPException(status_code=400, detail=DESERIALIZATION_FAILED)

    @staticmethod
    def _device_arg(device: RequestedDevice) -> DeviceArg:
        return DeviceArg(id=device.id, custom_data=device.custom_data or {})

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def _sync(self, request_id: str, agent_user_id: str) -> Dict[str, Any]:
        try:
            response = await self.provider.sync(agent_user_id)
        except Exception as exc:
            logger.error(f"Sync failed for agent user {agent_user_id}: {exc}", exc_info=True)
            raise HTTPException(status_code=503, detail="Fail to sync")

        return {
            "requestId": request_id,
            "payload": {
                "agentUserId": agent_user_id,
                "devices": [device.to_dict() for device in response.devices],
            },
        }

    async def _query(
        self,
        request_id: str,
        agent_user_id: str,
        fulfillment_input: FulfillmentInput,
    ) -> Dict[str, Any]:
        payload = self._decode_payload(QueryPayload, fulfillment_input)
        query_request = QueryRequest(devices=[self._device_arg(device) for device in payload.devices])

        try:
            response = await self.provider.query(query_request)
        except Exception as exc:
            logger.error(f"Query failed for agent user {agent_user_id}: {exc}", exc_info=True)
            raise HTTPException(status_code=503, detail="Fail to query")

        # QUERY always reports every returned device as online and successful.
        devices: Dict[str, Any] = {}
        for device_id in sorted(response.states):
            state = response.states[device_id].copy()
            state.online = True
            state.status = STATUS_SUCCESS
            devices[device_id] = state.to_dict()

        return {
            "requestId": request_id,
            "payload": {"devices": devices},
        }

    async def _execute(
        self,
        request_id: str,
        agent_user_id: str,
        fulfillment_input: FulfillmentInput,
    ) -> Dict[str, Any]:
        payload = self._decode_payload(ExecutePayload, fulfillment_input)

        execute_request = ExecuteRequest()
        try:
            for group in payload.commands:
                execute_request.commands.append(
                    CommandArg(
                        target_devices=[self._device_arg(device) for device in group.devices],
                        commands=[decode_command(execution) for execution in group.execution],
                    )
                )
        except CommandDecodeError as exc:
            logger.info(f"Error deserializing execute command: {exc}")
            raise HTTPException(status_code=400, detail=DESERIALIZATION_FAILED)

        try:
            response = await self.provider.execute(execute_request)
        except Exception as exc:
            logger.error(f"Execute failed for agent user {agent_user_id}: {exc}", exc_info=True)
            raise HTTPException(status_code=503, detail="Fail to execute")

        self._check_accounted(request_id, execute_request, response)

        return {
            "requestId": request_id,
            "payload": {"commands": build_execute_results(response)},
        }

    async def _disconnect(self, agent_user_id: str) -> Dict[str, Any]:
        try:
            await self.provider.disconnect(agent_user_id)
        except Exception as exc:
            # DISCONNECT always answers {}.
            logger.warning(f"Disconnect failed for agent user {agent_user_id}: {exc}", exc_info=True)
        return {}

    @staticmethod
    def _check_accounted(request_id: str, request: ExecuteRequest, response: ExecuteResponse) -> None:
        requested = {device.id for group in request.commands for device in group.target_devices}
        accounted = set(response.updated_devices) | set(response.offline_devices)
        for device_ids in response.failed_devices.values():
            accounted.update(device_ids)

        missing = requested - accounted
        if missing:
            logger.warning(
                f"Execute response for request {request_id} does not account for devices {sorted(missing)}"
            )


def build_execute_results(response: ExecuteResponse) -> List[Dict[str, Any]]:
    """
    Group the provider's execute outcome into the response's command results.

    Produces at most one SUCCESS entry (all updated devices share one state, always
    reported online), at most one OFFLINE entry, and one ERROR entry per error code.
    """
    results: List[Dict[str, Any]] = []

    if response.updated_devices:
        updated_state = response.updated_state.copy()
        updated_state.online = True
        results.append({
            "ids": list(response.updated_devices),
            "status": STATUS_SUCCESS,
            "states": updated_state.to_dict(),
        })

    if response.offline_devices:
        results.append({
            "ids": list(response.offline_devices),
            "status": STATUS_OFFLINE,
        })

    for error_code in sorted(response.failed_devices):
        device_ids = response.failed_devices[error_code]
        if not device_ids:
            continue
        results.append({
            "ids": list(device_ids),
            "status": STATUS_ERROR,
            "errorCode": error_code,
        })

    return results
