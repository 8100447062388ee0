"""Core module - Logging, errors, rate limiting, credentials and sessions."""

from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.core.rate_limiter import FixedWindowRateLimiter
from tax_invoice_api.core.session import SessionIssuer

__all__ = ["setup_logger", "FixedWindowRateLimiter", "SessionIssuer"]
