"""WhatsApp send, number check and phone validation endpoints.

Send and validate-phone answer every failure as 500 {"error": ...}; the
front end only distinguishes "sent", "rejected by provider"
(success=false) and "error". check-number keeps the {success, ...}
envelope on every path, with 504 for gateway timeouts and 400 otherwise.
"""

from typing import Any

import requests
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, field_validator

from leadzap.errors import InvalidRequestError
from leadzap.observability.logging import get_logger
from leadzap.observability.redaction import safe_log_context
from leadzap.phone import format_phone_display, is_valid_brazilian_phone, normalize_phone_number
from leadzap.whatsapp.dispatcher import dispatch_message
from leadzap.whatsapp.number_check import check_number

router = APIRouter(prefix="/whatsapp", tags=["whatsapp"])

logger = get_logger(__name__)


class _PhoneRequest(BaseModel):
    # Validation errors must not echo the phone into logs or responses
    model_config = ConfigDict(hide_input_in_errors=True)

    @field_validator("phone", "phone_number", mode="before", check_fields=False)
    @classmethod
    def _number_as_text(cls, value: Any) -> Any:
        # Forms post phones as JSON numbers too
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class SendMessageRequest(_PhoneRequest):
    """Request body for send. Both fields are required; checked in the handler
    so that a missing field is reported like any other failure."""

    phone: str | None = None
    message: str | None = None


class ValidatePhoneRequest(_PhoneRequest):
    phone: str | None = None


class CheckNumberRequest(_PhoneRequest):
    phone_number: str | None = None


def _log_failure(exc: Exception, route: str) -> None:
    # No traceback: frames and messages of third-party errors may carry input
    logger.error(
        "whatsapp request failed",
        extra={
            "extra_fields": safe_log_context(route=route, error_type=type(exc).__name__)
        },
    )


def _error_response(exc: Exception, route: str) -> JSONResponse:
    _log_failure(exc, route)
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        raise InvalidRequestError("Invalid JSON payload") from e


@router.post("/send")
async def send_message(request: Request) -> JSONResponse:
    """Send a text message through the configured provider.

    Returns:
        200 {success, provider, data}; success=false when the provider rejects.
        500 {error} on missing fields, incomplete config or network failure.
    """
    try:
        req = SendMessageRequest.model_validate(await _read_json(request))
        if not req.phone or not req.message:
            raise InvalidRequestError("phone and message are required")

        result = dispatch_message(req.phone, req.message)
        return JSONResponse(status_code=200, content=result.to_dict())
    except Exception as e:
        return _error_response(e, "send")


@router.post("/check-number")
async def check_whatsapp_number(request: Request) -> JSONResponse:
    """Check whether a phone number has a WhatsApp account.

    Returns:
        200 {success, exists, phone_number, cached[, last_verified_at]}.
        200 {success: false, exists: false, phone_number, error} for an invalid number.
        504 {success: false, error} on gateway timeout.
        400 {success: false, error} on any other failure.
    """
    try:
        req = CheckNumberRequest.model_validate(await _read_json(request))
        if not req.phone_number:
            raise InvalidRequestError("phone_number is required")

        phone = normalize_phone_number(req.phone_number)
        if not is_valid_brazilian_phone(phone):
            return JSONResponse(
                status_code=200,
                content={
                    "success": False,
                    "exists": False,
                    "phone_number": phone,
                    "error": "invalid phone number",
                },
            )

        result = check_number(phone)
        return JSONResponse(status_code=200, content=result.to_dict())
    except requests.Timeout as e:
        _log_failure(e, "check-number")
        return JSONResponse(
            status_code=504, content={"success": False, "error": "WhatsApp gateway timeout"}
        )
    except Exception as e:
        _log_failure(e, "check-number")
        return JSONResponse(status_code=400, content={"success": False, "error": str(e)})


@router.post("/validate-phone")
async def validate_phone(request: Request) -> JSONResponse:
    """Normalize and validate a phone number. Invalid numbers are data, not errors."""
    try:
        req = ValidatePhoneRequest.model_validate(await _read_json(request))
        if not req.phone:
            raise InvalidRequestError("phone is required")

        return JSONResponse(
            status_code=200,
            content={
                "phone_number": normalize_phone_number(req.phone),
                "display": format_phone_display(req.phone),
                "valid": is_valid_brazilian_phone(req.phone),
            },
        )
    except Exception as e:
        return _error_response(e, "validate-phone")
