import json
import logging
import math
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.requests import ClientDisconnect

from hookecho.core.config import Settings, get_settings
from hookecho.docs_page import render_docs_page
from hookecho.errors import AuthError, PayloadError, register_exception_handlers
from hookecho.schemas.ack import ReceivedData, WebhookAck
from hookecho.services.token_verify import extract_token, validate

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def header_map(request: Request) -> dict[str, str]:
    # repeated headers are combined the way fetch() Headers does
    return {
        key: ", ".join(request.headers.getlist(key)) for key in request.headers.keys()
    }


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float | None:
    value = float(text)
    # out-of-range numbers overflow to infinity, which is echoed as null
    if math.isinf(value):
        return None
    return value


def parse_json(raw: bytes):
    # UTF-8 only, with an optional BOM
    text = raw.decode("utf-8-sig")
    return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)


def current_settings(request: Request) -> Settings:
    return request.app.state.settings


# ---------- documentation ----------
async def documentation(request: Request) -> HTMLResponse:
    page = render_docs_page(
        endpoint=str(request.url),
        example=request.query_params.get("example"),
        timestamp=iso_timestamp(utc_now()),
    )
    return HTMLResponse(page, status_code=status.HTTP_200_OK)


# ---------- webhook ----------
async def _log_rejection(request: Request, reason: str, headers: dict[str, str]) -> None:
    logger.warning("Webhook authentication failed")
    logger.warning(f"  Reason: {reason}")
    logger.warning(f"  Received token: {extract_token(request.headers)!r}")
    logger.info(f"  URL: {request.url}")
    logger.info(f"  Method: {request.method}")
    logger.info(f"  Headers: {json.dumps(headers, indent=2)}")
    try:
        body = await request.body()
        logger.info(f"  Body: {body.decode('utf-8', errors='replace')}")
    except Exception as e:
        logger.info(f"  Body: could not read body ({e})")


async def receive_webhook(request: Request) -> JSONResponse:
    """Validate, parse and acknowledge a webhook sent with any method but GET."""
    settings = current_settings(request)
    headers = header_map(request)
    user_agent = request.headers.get("user-agent") or "unknown client"
    logger.info(f"Received {request.method} request from {user_agent}")
    logger.info(f"Headers: {headers}")

    result = validate(settings.webhook_token, request.headers)
    if not result.accepted:
        await _log_rejection(request, result.reason, headers)
        raise AuthError(result.reason)

    try:
        raw = await request.body()
        payload = parse_json(raw)
        # a document too deep to re-encode cannot be echoed either
        pretty = json.dumps(payload, indent=2)
    except (ValueError, RecursionError, ClientDisconnect) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors,
        # deeply nested documents exhaust the decoder stack
        logger.error(f"Error processing webhook: {e}")
        raise PayloadError() from e

    logger.info("Webhook authenticated successfully")
    logger.info(f"Received webhook payload:\n{pretty}")

    ack = WebhookAck(
        timestamp=iso_timestamp(utc_now()),
        received_data=ReceivedData(payload=payload, headers=headers),
    )
    return JSONResponse(
        content=ack.model_dump(),
        status_code=status.HTTP_200_OK,
        headers={"X-Webhook-Processed": "true"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the receiver with an explicitly resolved configuration."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="hookecho",
        description="Webhook receiver that validates a shared token and echoes payloads",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    register_exception_handlers(app)

    app.add_api_route(
        "/", documentation, methods=["GET"], response_class=HTMLResponse
    )
    # no method list: everything that is not GET reaches the webhook path
    app.router.add_route("/", receive_webhook, include_in_schema=False)

    if not settings.validation_enabled:
        logger.warning("WEBHOOK_TOKEN is not set, accepting webhooks without a token")
    return app


app = create_app()
