"""Tax invoice eligibility for an order, plus Thai status labels."""

from typing import Optional

from tax_invoice_api.config.settings import Settings
from tax_invoice_api.models.order import (
    AdminContact,
    FinancialStatus,
    FulfillmentStatus,
    IneligibleReason,
    OrderStatus,
    OrderStatusDisplay,
    OrderStatusValidation,
)

FINANCIAL_STATUS_LABELS = {
    FinancialStatus.PENDING.value: "รอการชำระเงิน",
    FinancialStatus.PAID.value: "ชำระเงินแล้ว",
    FinancialStatus.PARTIALLY_PAID.value: "ชำระเงินบางส่วน",
    FinancialStatus.REFUNDED.value: "คืนเงินแล้ว",
    FinancialStatus.PARTIALLY_REFUNDED.value: "คืนเงินบางส่วน",
    FinancialStatus.VOIDED.value: "ยกเลิกการชำระเงิน",
}

FULFILLMENT_STATUS_LABELS = {
    FulfillmentStatus.FULFILLED.value: "จัดส่งแล้ว",
    FulfillmentStatus.PARTIAL.value: "จัดส่งบางส่วน",
    FulfillmentStatus.UNFULFILLED.value: "ยังไม่จัดส่ง",
}

NOT_SHIPPED_LABEL = FULFILLMENT_STATUS_LABELS[FulfillmentStatus.UNFULFILLED.value]
CANCELLED_LABEL = "ยกเลิกแล้ว"
COMPLETED_LABEL = "เสร็จสมบูรณ์"

REFUNDED_STATUSES = {FinancialStatus.REFUNDED.value, FinancialStatus.PARTIALLY_REFUNDED.value}
UNPAID_STATUSES = {FinancialStatus.PENDING.value, FinancialStatus.VOIDED.value}

INELIGIBLE_MESSAGES = {
    IneligibleReason.CANCELLED: "คำสั่งซื้อนี้ถูกยกเลิกแล้ว กรุณาติดต่อเจ้าหน้าที่เพื่อขอความช่วยเหลือ",
    IneligibleReason.REFUNDED: "คำสั่งซื้อนี้ได้รับการคืนเงินแล้ว ไม่สามารถออกใบกำกับภาษีได้",
    IneligibleReason.FULFILLED: "คำสั่งซื้อนี้ได้ออกใบกำกับภาษีแล้ว หากต้องการสำเนา กรุณาติดต่อเจ้าหน้าที่",
    IneligibleReason.UNPAID: "คำสั่งซื้อนี้ยังไม่ได้ชำระเงิน กรุณาชำระเงินก่อนขอใบกำกับภาษี",
}
ELIGIBLE_MESSAGE = "คำสั่งซื้อนี้สามารถออกใบกำกับภาษีได้"


def _normalize(value: Optional[str]) -> Optional[str]:
    # GraphQL returns PAID, REST returns paid
    return value.strip().lower() if value else None


def _ineligible(reason: IneligibleReason) -> OrderStatusValidation:
    return OrderStatusValidation(
        is_eligible=False,
        reason=reason,
        message=INELIGIBLE_MESSAGES[reason],
    )


def evaluate_order_status(status: OrderStatus) -> OrderStatusValidation:
    """
    Decide whether a tax invoice may be created for an order.

    First match wins: cancelled, refunded, fulfilled, unpaid. An order
    that is both cancelled and refunded is reported as cancelled.
    """
    financial = _normalize(status.financial_status)
    fulfillment = _normalize(status.fulfillment_status)

    if status.cancelled_at:
        return _ineligible(IneligibleReason.CANCELLED)

    if financial in REFUNDED_STATUSES:
        return _ineligible(IneligibleReason.REFUNDED)

    if fulfillment == FulfillmentStatus.FULFILLED.value:
        return _ineligible(IneligibleReason.FULFILLED)

    if financial in UNPAID_STATUSES:
        return _ineligible(IneligibleReason.UNPAID)

    return OrderStatusValidation(is_eligible=True, message=ELIGIBLE_MESSAGE)


def get_order_status_display(status: OrderStatus) -> OrderStatusDisplay:
    """Thai labels for financial, fulfillment and overall status."""
    financial_key = _normalize(status.financial_status)
    fulfillment_key = _normalize(status.fulfillment_status)

    financial = FINANCIAL_STATUS_LABELS.get(financial_key, status.financial_status or "")

    if fulfillment_key:
        fulfillment = FULFILLMENT_STATUS_LABELS.get(fulfillment_key, status.fulfillment_status)
    else:
        fulfillment = NOT_SHIPPED_LABEL

    overall = financial
    if status.cancelled_at:
        overall = CANCELLED_LABEL
    elif fulfillment_key == FulfillmentStatus.FULFILLED.value:
        overall = COMPLETED_LABEL

    return OrderStatusDisplay(financial=financial, fulfillment=fulfillment, overall=overall)


def get_admin_contact(settings: Settings) -> AdminContact:
    return AdminContact(
        email=settings.admin_email,
        phone=settings.admin_phone,
        line_id=settings.admin_line_id,
        office_hours=settings.admin_office_hours,
    )


def generate_contact_template(order_number: str, status: OrderStatus, customer_email: str) -> str:
    """Email body a customer can send to support about an ineligible order."""
    display = get_order_status_display(status)
    order_number = order_number.lstrip("#")

    return (
        f"Subject: ขอความช่วยเหลือ - ใบกำกับภาษี คำสั่งซื้อ #{order_number}\n"
        "\n"
        "เรียน ฝ่ายบริการลูกค้า\n"
        "\n"
        "ข้าพเจ้าต้องการขอความช่วยเหลือเกี่ยวกับใบกำกับภาษีสำหรับคำสั่งซื้อ\n"
        "\n"
        "รายละเอียด:\n"
        f"- หมายเลขคำสั่งซื้อ: #{order_number}\n"
        f"- อีเมล: {customer_email}\n"
        f"- สถานะคำสั่งซื้อ: {display.overall}\n"
        f"- สถานะการชำระเงิน: {display.financial}\n"
        f"- สถานะการจัดส่ง: {display.fulfillment}\n"
        "\n"
        "ปัญหาที่พบ: ไม่สามารถสร้างใบกำกับภาษีได้เนื่องจากสถานะคำสั่งซื้อ\n"
        "\n"
        "ขอบคุณครับ/ค่ะ"
    )
