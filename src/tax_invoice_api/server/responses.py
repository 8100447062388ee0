"""Helpers shared by the route modules."""

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from tax_invoice_api.config import constants
from tax_invoice_api.config.settings import Settings
from tax_invoice_api.core.exceptions import AppError, InternalError
from tax_invoice_api.core.logger import setup_logger

logger = setup_logger(__name__)


def get_client_key(request: Request) -> str:
    """Client identifier from proxy headers, else the shared "unknown" bucket."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return constants.UNKNOWN_CLIENT_KEY


def as_app_error(exc: Exception, context: str) -> AppError:
    """Pass AppErrors through; log anything else and hide its detail."""
    if isinstance(exc, AppError):
        return exc
    logger.error(f"Unexpected error in {context}: {exc}", exc_info=True)
    return InternalError()


def error_response(error: AppError, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """``{"error", "code", "details"?}`` body used by the proxy routes."""
    return JSONResponse(
        content=error.to_dict(),
        status_code=error.status_code,
        headers={**error.headers, **(headers or {})},
    )


def auth_error_response(error: AppError, **extra: Any) -> JSONResponse:
    """``{"success": false, "message"}`` body used by the order report routes."""
    return JSONResponse(
        content={"success": False, "message": error.message, **extra},
        status_code=error.status_code,
        headers=error.headers,
    )


def cors_headers(request: Request, settings: Settings) -> Dict[str, str]:
    """CORS headers for the proxy.

    The request origin is echoed when it is configured; otherwise the first
    configured origin is sent, or ``*`` when none are configured.
    """
    origins = settings.origin_list
    if not origins:
        allow_origin = "*"
    else:
        request_origin = request.headers.get("origin")
        allow_origin = request_origin if request_origin in origins else origins[0]

    headers = {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": constants.CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": constants.CORS_ALLOW_HEADERS,
    }
    if allow_origin != "*":
        headers["Vary"] = "Origin"
    return headers
