"""
Data models for the fulfillment request envelope and intent payloads.

See https://developers.google.com/assistant/smarthome/develop/process-intents
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from enum import Enum


class Intent(str, Enum):
    """Supported intents."""
    SYNC = "action.devices.SYNC"
    QUERY = "action.devices.QUERY"
    EXECUTE = "action.devices.EXECUTE"
    DISCONNECT = "action.devices.DISCONNECT"


class RequestedDevice(BaseModel):
    """A device reference inside a QUERY or EXECUTE payload."""
    id: str
    custom_data: Optional[Dict[str, Any]] = Field(None, alias="customData")

    model_config = ConfigDict(populate_by_name=True)


class QueryPayload(BaseModel):
    devices: List[RequestedDevice] = Field(default_factory=list)


class ExecuteCommandGroup(BaseModel):
    """One entry of an EXECUTE payload: target devices plus the commands to run.

    Executions are kept as raw objects; they are decoded by the command codec.
    """
    devices: List[RequestedDevice] = Field(default_factory=list)
    execution: List[Dict[str, Any]] = Field(default_factory=list)


class ExecutePayload(BaseModel):
    commands: List[ExecuteCommandGroup] = Field(default_factory=list)


class FulfillmentInput(BaseModel):
    """A single input of the request. The payload shape depends on the intent."""
    intent: str
    payload: Optional[Dict[str, Any]] = None


class FulfillmentRequest(BaseModel):
    """Request envelope POSTed to the fulfillment endpoint."""
    request_id: str = Field("", alias="requestId")
    inputs: List[FulfillmentInput] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
