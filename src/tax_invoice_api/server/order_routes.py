"""
Order Routes

Tax invoice eligibility checks and order link handling for customers
arriving from a Shopify order confirmation.
"""

import time
from urllib.parse import urlencode

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError

from tax_invoice_api.config import constants
from tax_invoice_api.config.settings import Settings
from tax_invoice_api.core.exceptions import ValidationError
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.core.oms_token import (
    OmsFormatError,
    build_oms_token,
    build_raw_oms,
    verify_oms_token,
)
from tax_invoice_api.models.order import OrderStatusRequest
from tax_invoice_api.server.responses import as_app_error, error_response
from tax_invoice_api.services.order_status import (
    evaluate_order_status,
    generate_contact_template,
    get_admin_contact,
    get_order_status_display,
)

logger = setup_logger(__name__)

router = APIRouter(tags=["orders"])


def _form_url(request: Request, key: str, oms: str, ts: str, token: str) -> str:
    """Tax invoice form URL on this host with order link parameters."""
    query = urlencode({"key": key, "oms": oms, "ts": ts, "token": token})
    return f"{request.url.scheme}://{request.url.netloc}/?{query}"


@router.post("/order-status")
async def order_status(request: Request) -> JSONResponse:
    """
    Evaluate tax invoice eligibility for an order.

    Body uses the Shopify field names (``financialStatus``,
    ``fulfillmentStatus``, ``cancelledAt``, ``refundedAt``). When
    ``orderNumber`` and ``customerEmail`` are given a support email
    template is included for ineligible orders.
    """
    try:
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError(constants.MSG_INVALID_REQUEST) from None
        try:
            status = OrderStatusRequest.model_validate(body)
        except PydanticValidationError:
            raise ValidationError(constants.MSG_INVALID_REQUEST) from None

        validation = evaluate_order_status(status)
        result = {
            "validation": validation.model_dump(by_alias=True, exclude_none=True, mode="json"),
            "display": get_order_status_display(status).model_dump(),
        }
        if not validation.is_eligible and status.order_number and status.customer_email:
            result["contactTemplate"] = generate_contact_template(
                status.order_number, status, status.customer_email
            )
    except Exception as e:
        return error_response(as_app_error(e, "order status"))

    return JSONResponse(content=result, status_code=200)


@router.get("/admin-contact")
async def admin_contact(request: Request) -> dict:
    """Support contact details shown next to ineligible orders."""
    settings: Settings = request.app.state.settings
    return get_admin_contact(settings).model_dump(by_alias=True)


@router.get("/build-oms")
async def build_oms(
    request: Request,
    order: str = Query(default="", description="Order number, with or without '#'"),
    email: str = Query(default="", description="Customer email"),
    key: str = Query(default="", description="Store key (defaults to the store domain)"),
    ts: str = Query(default="", description="Unix timestamp (defaults to now)"),
    format: str = Query(default="", description="'json' to return the link instead of redirecting"),
):
    """Build a signed order link and redirect to the tax invoice form."""
    settings: Settings = request.app.state.settings

    order = order.strip()
    email = email.strip().lower()
    key = (key or settings.shopify_store_domain or "").strip()
    if not order or not email or not key:
        return JSONResponse(content={"ok": False, "reason": "missing_params"}, status_code=400)

    ts = ts.strip()
    if ts and not (ts.isascii() and ts.isdigit()):
        return JSONResponse(content={"ok": False, "reason": "bad_ts"}, status_code=400)

    try:
        timestamp = int(ts) if ts else int(time.time())
        raw_oms = build_raw_oms(order, email)
        token = build_oms_token(order, email, timestamp, key)
        url = _form_url(request, key, raw_oms, str(timestamp), token)
    except Exception as e:
        logger.error(f"Error building order link: {e}", exc_info=True)
        return JSONResponse(content={"ok": False, "reason": "error"}, status_code=500)

    if format.lower() != "json":
        return RedirectResponse(url=url, status_code=302)

    return {"ok": True, "key": key, "oms": raw_oms, "ts": timestamp, "token": token, "url": url}


@router.get("/resolve-oms")
async def resolve_oms(
    request: Request,
    key: str = Query(default=""),
    oms: str = Query(default=""),
    ts: str = Query(default=""),
    token: str = Query(default=""),
    format: str = Query(default=""),
):
    """
    Verify an order link from an order confirmation email.

    Valid links opened in a browser redirect to the tax invoice form.
    Outside production (or with OMS_ALLOW_INVALID) invalid tokens are let
    through and reported as ``bypassed``.
    """
    settings: Settings = request.app.state.settings

    if not key or not oms or not ts or not token:
        return JSONResponse(content={"ok": False, "reason": "missing_params"}, status_code=400)

    try:
        result = verify_oms_token(key, oms, ts, token)
    except OmsFormatError:
        return JSONResponse(content={"ok": False, "reason": "bad_oms"}, status_code=400)
    except Exception as e:
        logger.error(f"Error resolving order link: {e}", exc_info=True)
        return JSONResponse(content={"ok": False, "reason": "error"}, status_code=500)

    allow_bypass = settings.oms_allow_invalid or not settings.is_production
    bypassed = not result.valid and allow_bypass
    valid = result.valid or bypassed
    if bypassed:
        logger.warning(f"Order link token bypassed for order={result.order}")

    if valid and format.lower() != "json":
        url = _form_url(request, result.key, f"#{result.order}|{result.email}", result.ts, result.token)
        return RedirectResponse(url=url, status_code=302)

    payload = {
        "ok": True,
        "valid": valid,
        "bypassed": bypassed,
        "order": result.order,
        "email": result.email,
        "key": result.key,
        "ts": result.ts,
    }
    if not result.valid and not settings.is_production:
        payload["debug"] = {"token": result.token, "candidates": len(result.candidates)}
    return payload
