"""
Tax Invoice Routes

Server-side check of the tax invoice form before it is saved to the order.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from tax_invoice_api.config import constants
from tax_invoice_api.core.exceptions import ValidationError
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.server.responses import as_app_error, error_response
from tax_invoice_api.services.tax_invoice import validate_tax_invoice

logger = setup_logger(__name__)

router = APIRouter(prefix="/tax-invoice", tags=["tax-invoice"])


@router.post("/validate")
async def validate(request: Request) -> JSONResponse:
    """
    Validate tax invoice details.

    Returns the normalized data on success, or 400 with one
    ``{"field", "message"}`` entry per invalid field.
    """
    try:
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError(constants.MSG_INVALID_TAX_INVOICE) from None
        data = validate_tax_invoice(body)
    except Exception as e:
        return error_response(as_app_error(e, "tax invoice validation"))

    return JSONResponse(
        content={"valid": True, "data": data.model_dump(by_alias=True, mode="json")},
        status_code=200,
    )
