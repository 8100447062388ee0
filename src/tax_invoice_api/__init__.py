"""Shopify Tax Invoice API - Shopify proxy and order report login for the Thai tax invoice form."""

__version__ = "1.0.0"
