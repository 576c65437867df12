from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hookecho.schemas.ack import ErrorBody

INVALID_JSON = "Invalid JSON payload"


class WebhookError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(WebhookError):
    """Missing or invalid webhook token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PayloadError(WebhookError):
    """Body could not be read or is not valid JSON."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = INVALID_JSON):
        super().__init__(message)


async def webhook_error_handler(request: Request, exc: WebhookError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorBody(error=exc.message).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WebhookError, webhook_error_handler)
