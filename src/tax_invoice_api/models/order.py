"""Pydantic models for order status evaluation."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FinancialStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    PARTIALLY_PAID = "partially_paid"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"
    VOIDED = "voided"


class FulfillmentStatus(str, Enum):
    FULFILLED = "fulfilled"
    PARTIAL = "partial"
    UNFULFILLED = "unfulfilled"


class IneligibleReason(str, Enum):
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FULFILLED = "fulfilled"
    UNPAID = "unpaid"


class OrderStatus(BaseModel):
    """Status flags copied from a Shopify order.

    Status values are kept as plain strings so unknown upstream values
    still evaluate; comparisons are case-insensitive.
    """

    financial_status: Optional[str] = Field(None, alias="financialStatus")
    fulfillment_status: Optional[str] = Field(None, alias="fulfillmentStatus")
    cancelled_at: Optional[str] = Field(None, alias="cancelledAt")
    refunded_at: Optional[str] = Field(None, alias="refundedAt")

    class Config:
        extra = "ignore"
        populate_by_name = True


class OrderStatusValidation(BaseModel):
    """Tax invoice eligibility verdict."""

    is_eligible: bool = Field(..., alias="isEligible")
    reason: Optional[IneligibleReason] = None
    message: str

    class Config:
        populate_by_name = True


class OrderStatusDisplay(BaseModel):
    """Thai labels for an order's status."""

    financial: str
    fulfillment: str
    overall: str


class AdminContact(BaseModel):
    """Where customers go when an order is not eligible."""

    email: str
    phone: str
    line_id: str = Field(..., alias="lineId")
    office_hours: str = Field(..., alias="officeHours")

    class Config:
        populate_by_name = True


class OrderStatusRequest(OrderStatus):
    """Body of POST /order-status.

    ``orderNumber`` and ``customerEmail`` are only needed for the
    contact template.
    """

    order_number: Optional[str] = Field(None, alias="orderNumber")
    customer_email: Optional[str] = Field(None, alias="customerEmail")
