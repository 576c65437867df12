from collections.abc import Mapping
from dataclasses import dataclass

TOKEN_HEADERS = ("X-Webhook-Token", "X-Wekan-Token")

MISSING_TOKEN = (
    "Missing webhook token (expected in X-Webhook-Token or X-Wekan-Token header)"
)
INVALID_TOKEN = "Invalid webhook token"


@dataclass(frozen=True)
class ValidationResult:
    accepted: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(accepted=True)

    @classmethod
    def rejected(cls, reason: str) -> "ValidationResult":
        return cls(accepted=False, reason=reason)


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    # plain dicts are case-sensitive, header names are not
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def extract_token(headers: Mapping[str, str]) -> str | None:
    """
    Return the token a request carries, or None.

    X-Webhook-Token is checked first; X-Wekan-Token is only read when the
    first header is absent or empty.
    """
    for name in TOKEN_HEADERS:
        token = _header(headers, name)
        if token:
            return token
    return None


def validate(configured_secret: str | None, headers: Mapping[str, str]) -> ValidationResult:
    if not configured_secret:
        return ValidationResult.ok()

    token = extract_token(headers)
    if not token:
        return ValidationResult.rejected(MISSING_TOKEN)

    if token != configured_secret:
        return ValidationResult.rejected(INVALID_TOKEN)

    return ValidationResult.ok()
