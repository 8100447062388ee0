"""Services module - Order status evaluation and the Shopify proxy."""

from tax_invoice_api.services.order_status import evaluate_order_status, get_order_status_display
from tax_invoice_api.services.shopify_proxy import ShopifyProxy

__all__ = ["evaluate_order_status", "get_order_status_display", "ShopifyProxy"]
