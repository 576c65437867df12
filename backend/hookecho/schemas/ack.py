from typing import Any

from pydantic import BaseModel, Field


class ReceivedData(BaseModel):
    payload: Any = Field(..., description="Parsed request body, echoed verbatim")
    headers: dict[str, str] = Field(default_factory=dict)


class WebhookAck(BaseModel):
    status: str = "ok"
    message: str = "Webhook received successfully"
    timestamp: str = Field(..., description="ISO-8601 UTC time of the response")
    received_data: ReceivedData


class ErrorBody(BaseModel):
    error: str
