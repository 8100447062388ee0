"""Validation of submitted tax invoice details."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tax_invoice_api.config import constants
from tax_invoice_api.core.exceptions import ValidationError
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.models.tax_invoice import TaxInvoiceData

logger = setup_logger(__name__)


def validate_tax_invoice(payload: Any) -> TaxInvoiceData:
    """
    Check a tax invoice form payload.

    Raises:
        ValidationError: Payload is not an object or a field breaks its rule;
            ``details`` lists each failing field
    """
    if not isinstance(payload, dict):
        raise ValidationError(constants.MSG_INVALID_TAX_INVOICE)
    try:
        return TaxInvoiceData.model_validate(payload)
    except PydanticValidationError as e:
        logger.info(f"Tax invoice rejected: {e.error_count()} invalid field(s)")
        raise ValidationError.from_pydantic(constants.MSG_INVALID_TAX_INVOICE, e) from None
