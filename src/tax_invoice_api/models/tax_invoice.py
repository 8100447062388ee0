"""Pydantic models for the tax invoice form."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from tax_invoice_api.config.constants import TAX_INVOICE_ADDRESS_MAX, TAX_INVOICE_NAME_MAX


class TaxInvoiceType(str, Enum):
    INDIVIDUAL = "individual"
    JURISTIC = "juristic"


class TaxInvoiceData(BaseModel):
    """Details a customer submits for a tax invoice.

    ``name`` is the person's name for individuals and the company name for
    juristic persons. Branch fields only apply to companies.
    """

    type: TaxInvoiceType
    name: str = Field(..., min_length=1, max_length=TAX_INVOICE_NAME_MAX)
    tax_id: str = Field(..., alias="taxId", pattern=r"^[0-9]{13}$", description="13 digits")
    phone1: str = Field(..., pattern=r"^[0-9]{9,10}$", description="9-10 digits")
    phone2: Optional[str] = Field(None, pattern=r"^([0-9]{9,10})?$", description="Empty or 9-10 digits")
    branch_name: Optional[str] = Field(None, alias="branchName")
    branch_number: Optional[str] = Field(None, alias="branchNumber")
    address: str = Field(..., min_length=1, max_length=TAX_INVOICE_ADDRESS_MAX)
    province: str = Field(..., min_length=1)
    district: str = Field(..., min_length=1)
    subdistrict: str = Field(..., min_length=1)
    postal: str = Field(..., pattern=r"^[0-9]{5}$", description="5 digits")

    class Config:
        extra = "ignore"
        populate_by_name = True
