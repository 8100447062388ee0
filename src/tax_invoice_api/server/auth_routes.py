"""
Order Report Authentication Routes

Login, session check and logout for the staff order report page.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from tax_invoice_api.config import constants
from tax_invoice_api.core.session import SessionIssuer
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.models.auth import LoginRequest
from tax_invoice_api.server.responses import as_app_error, auth_error_response, get_client_key

logger = setup_logger(__name__)

router = APIRouter(prefix="/order-report-auth", tags=["order-report-auth"])


def _issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer


async def _read_login(request: Request) -> LoginRequest:
    # Unreadable or non-object bodies count as missing credentials
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    email = body.get("email")
    password = body.get("password")
    return LoginRequest(
        email=email if isinstance(email, str) else None,
        password=password if isinstance(password, str) else None,
    )


@router.post("")
async def login(request: Request) -> JSONResponse:
    """
    Log in to the order report.

    On success sets the ``order-report-auth`` cookie (HttpOnly, SameSite=strict,
    Secure in production, 24 hours).
    """
    try:
        credentials = await _read_login(request)
        cookie = _issuer(request).login(
            credentials.email,
            credentials.password,
            client_key=get_client_key(request),
        )
    except Exception as e:
        return auth_error_response(as_app_error(e, "order report login"))

    response = JSONResponse(
        content={"success": True, "message": constants.MSG_LOGIN_SUCCESS},
        status_code=200,
    )
    cookie.apply(response)
    return response


@router.get("")
async def check_session(request: Request) -> JSONResponse:
    """Report whether the request carries a valid session cookie."""
    try:
        cookie_value = request.cookies.get(constants.SESSION_COOKIE_NAME)
        authenticated = _issuer(request).check_session(cookie_value)
    except Exception as e:
        return auth_error_response(as_app_error(e, "session check"), authenticated=False)

    if authenticated:
        return JSONResponse(content={"success": True, "authenticated": True}, status_code=200)
    return JSONResponse(content={"success": False, "authenticated": False}, status_code=401)


@router.delete("")
async def logout(request: Request) -> JSONResponse:
    """Log out by expiring the session cookie."""
    try:
        cookie = _issuer(request).logout()
    except Exception as e:
        return auth_error_response(as_app_error(e, "order report logout"))

    response = JSONResponse(
        content={"success": True, "message": constants.MSG_LOGOUT_SUCCESS},
        status_code=200,
    )
    cookie.apply(response)
    return response
