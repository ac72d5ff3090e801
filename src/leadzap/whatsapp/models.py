"""WhatsApp gateway request/result models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

Provider = Literal["evolution", "waha"]


@dataclass(frozen=True)
class OutboundRequest:
    """Provider-specific HTTP request, ready to execute.

    Contains PII (recipient and text in json/params). Never log it.
    """

    url: str
    json: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    method: Literal["GET", "POST"] = "POST"
    params: dict[str, str] | None = None


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one send attempt.

    success is True iff the gateway answered 2xx. data is the gateway's
    response body, passed through untouched.
    """

    success: bool
    provider: Provider
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "provider": self.provider, "data": self.data}


@dataclass(frozen=True)
class NumberCheckResult:
    """Whether a canonical phone number has a WhatsApp account."""

    phone_number: str
    exists: bool
    cached: bool
    last_verified_at: datetime

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "success": True,
            "exists": self.exists,
            "phone_number": self.phone_number,
            "cached": self.cached,
        }
        if self.cached:
            body["last_verified_at"] = self.last_verified_at.isoformat()
        return body
