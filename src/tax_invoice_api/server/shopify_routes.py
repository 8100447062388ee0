"""
Shopify Proxy Routes

Forwards GraphQL queries from the browser to the Shopify Admin API.
"""

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from tax_invoice_api.config import constants
from tax_invoice_api.core.exceptions import MethodNotAllowedError
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.services.shopify_proxy import ShopifyProxy
from tax_invoice_api.server.responses import as_app_error, cors_headers, error_response, get_client_key

logger = setup_logger(__name__)

router = APIRouter(prefix="/shopify", tags=["shopify"])


@router.options("")
async def preflight(request: Request) -> Response:
    """CORS preflight."""
    return Response(status_code=200, headers=cors_headers(request, request.app.state.settings))


@router.post("")
async def proxy_graphql(request: Request) -> JSONResponse:
    """
    Proxy a GraphQL query to Shopify.

    Body: ``{"query": str, "variables": object?}``. Order nodes in the
    response have ``id``, ``name``, ``createdAt`` and ``customer`` removed.
    """
    headers = cors_headers(request, request.app.state.settings)
    proxy: ShopifyProxy = request.app.state.shopify_proxy
    client_key = get_client_key(request)

    try:
        # Parsed before the gates run; validated only after rate limiting
        try:
            body = await request.json()
        except ValueError:
            body = None
        data = await proxy.execute(body, client_key)
    except Exception as e:
        error = as_app_error(e, "Shopify proxy")
        if error.status_code >= 500:
            logger.error(
                f"Shopify proxy failed: {error.message}",
                extra={"client_key": client_key, "status_code": error.status_code, "path": request.url.path},
            )
        return error_response(error, headers=headers)

    return JSONResponse(content=data, status_code=200, headers=headers)


@router.api_route("", methods=["GET", "PUT", "PATCH", "DELETE"])
async def method_not_allowed(request: Request) -> JSONResponse:
    """Only POST does work on the proxy."""
    return error_response(
        MethodNotAllowedError(constants.MSG_METHOD_NOT_ALLOWED),
        headers={"Allow": constants.CORS_ALLOW_METHODS},
    )
