"""Tests for tax invoice eligibility and Thai status labels."""

import pytest

from tax_invoice_api.models.order import IneligibleReason, OrderStatus
from tax_invoice_api.services.order_status import (
    ELIGIBLE_MESSAGE,
    INELIGIBLE_MESSAGES,
    evaluate_order_status,
    generate_contact_template,
    get_admin_contact,
    get_order_status_display,
)

from conftest import make_settings


def status(**fields) -> OrderStatus:
    return OrderStatus.model_validate(fields)


@pytest.mark.parametrize("fields,reason", [
    ({"financialStatus": "paid", "cancelledAt": "2024-01-02T00:00:00Z"}, IneligibleReason.CANCELLED),
    ({"financialStatus": "refunded", "cancelledAt": "2024-01-02T00:00:00Z"}, IneligibleReason.CANCELLED),
    ({"financialStatus": "refunded"}, IneligibleReason.REFUNDED),
    ({"financialStatus": "partially_refunded"}, IneligibleReason.REFUNDED),
    ({"financialStatus": "refunded", "fulfillmentStatus": "fulfilled"}, IneligibleReason.REFUNDED),
    ({"financialStatus": "paid", "fulfillmentStatus": "fulfilled"}, IneligibleReason.FULFILLED),
    ({"financialStatus": "pending", "fulfillmentStatus": "fulfilled"}, IneligibleReason.FULFILLED),
    ({"financialStatus": "pending"}, IneligibleReason.UNPAID),
    ({"financialStatus": "voided"}, IneligibleReason.UNPAID),
])
def test_ineligible_orders(fields, reason):
    result = evaluate_order_status(status(**fields))
    assert result.is_eligible is False
    assert result.reason == reason
    assert result.message == INELIGIBLE_MESSAGES[reason]


@pytest.mark.parametrize("fields", [
    {"financialStatus": "paid"},
    {"financialStatus": "paid", "fulfillmentStatus": "partial"},
    {"financialStatus": "partially_paid", "fulfillmentStatus": None},
    {},
])
def test_eligible_orders(fields):
    result = evaluate_order_status(status(**fields))
    assert result.is_eligible is True
    assert result.reason is None
    assert result.message == ELIGIBLE_MESSAGE


def test_graphql_uppercase_values_are_understood():
    result = evaluate_order_status(status(financialStatus="PAID", fulfillmentStatus="FULFILLED"))
    assert result.reason == IneligibleReason.FULFILLED


def test_refunded_at_alone_does_not_change_verdict():
    result = evaluate_order_status(status(financialStatus="paid", refundedAt="2024-01-03T00:00:00Z"))
    assert result.is_eligible


def test_display_labels():
    display = get_order_status_display(status(financialStatus="paid", fulfillmentStatus="fulfilled"))
    assert display.financial == "ชำระเงินแล้ว"
    assert display.fulfillment == "จัดส่งแล้ว"
    assert display.overall == "เสร็จสมบูรณ์"


def test_display_without_fulfillment_is_not_shipped():
    display = get_order_status_display(status(financialStatus="pending"))
    assert display.fulfillment == "ยังไม่จัดส่ง"
    assert display.overall == "รอการชำระเงิน"


def test_display_cancelled_overrides_overall():
    display = get_order_status_display(
        status(financialStatus="refunded", fulfillmentStatus="fulfilled", cancelledAt="2024-01-02")
    )
    assert display.overall == "ยกเลิกแล้ว"
    assert display.financial == "คืนเงินแล้ว"


def test_display_unknown_values_fall_back_to_raw():
    display = get_order_status_display(status(financialStatus="authorized", fulfillmentStatus="restocked"))
    assert display.financial == "authorized"
    assert display.fulfillment == "restocked"
    assert display.overall == "authorized"


def test_contact_template_mentions_order_and_status():
    template = generate_contact_template(
        "#1001", status(financialStatus="refunded"), "buyer@example.com"
    )
    assert template.startswith("Subject: ขอความช่วยเหลือ - ใบกำกับภาษี คำสั่งซื้อ #1001")
    assert "#1001" in template and "##1001" not in template
    assert "- อีเมล: buyer@example.com" in template
    assert "- สถานะการชำระเงิน: คืนเงินแล้ว" in template


def test_admin_contact_from_settings():
    contact = get_admin_contact(make_settings(admin_email="help@example.com", admin_line_id="@shop"))
    assert contact.email == "help@example.com"
    assert contact.model_dump(by_alias=True)["lineId"] == "@shop"
