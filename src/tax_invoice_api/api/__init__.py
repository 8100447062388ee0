"""Shopify Admin API module."""

from .client import ShopifyAdminClient

__all__ = ["ShopifyAdminClient"]
