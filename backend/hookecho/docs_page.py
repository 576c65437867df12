import html
import json
from functools import lru_cache
from pathlib import Path
from string import Template

from hookecho.schemas.ack import ErrorBody, ReceivedData, WebhookAck
from hookecho.services.token_verify import INVALID_TOKEN, MISSING_TOKEN

EXAMPLES = ("success", "fail-token", "fail-missing")
TEMPLATE_PATH = Path(__file__).parent / "templates" / "docs.html"


@lru_cache
def _template() -> Template:
    source = TEMPLATE_PATH.read_text("utf-8")
    return Template(source)


def example_response(example: str, timestamp: str) -> dict | None:
    """Illustrative response body for one of the documented examples."""
    if example == "success":
        return WebhookAck(
            timestamp=timestamp,
            received_data=ReceivedData(
                payload={"event": "test", "data": {"message": "This is a test webhook"}},
                headers={
                    "content-type": "application/json",
                    "x-wekan-token": "test1234",
                },
            ),
        ).model_dump()
    if example == "fail-token":
        return ErrorBody(error=INVALID_TOKEN).model_dump()
    if example == "fail-missing":
        return ErrorBody(error=MISSING_TOKEN).model_dump()
    return None


def _response_section(body: dict | None) -> str:
    if body is None:
        return '<div class="response-section"></div>'
    pretty = html.escape(json.dumps(body, indent=2), quote=False)
    return (
        '<div class="mt-2 bg-gray-50 rounded-lg p-4 overflow-x-auto response-section">'
        f'<pre class="text-sm text-gray-700"><code>{pretty}</code></pre></div>'
    )


def render_docs_page(endpoint: str, example: str | None, timestamp: str) -> str:
    sections = {}
    for name in EXAMPLES:
        body = example_response(name, timestamp) if name == example else None
        sections[name.replace("-", "_") + "_response"] = _response_section(body)
    return _template().substitute(endpoint=html.escape(endpoint), **sections)
