"""Service info and health routes."""

from fastapi import APIRouter, Request

from tax_invoice_api.config.settings import Settings
from tax_invoice_api.core.logger import setup_logger

logger = setup_logger(__name__)
router = APIRouter()


@router.get("/")
async def root() -> dict:
    """Root endpoint with basic service info."""
    return {
        "service": "Shopify Tax Invoice API",
        "version": "1.0.0",
        "endpoints": {
            "shopify_proxy": "POST /shopify",
            "order_report_auth": "POST|GET|DELETE /order-report-auth",
            "order_status": "POST /order-status",
            "admin_contact": "GET /admin-contact",
            "tax_invoice_validate": "POST /tax-invoice/validate",
            "build_order_link": "GET /build-oms",
            "resolve_order_link": "GET /resolve-oms",
            "health": "GET /health",
            "docs": "GET /docs",
        },
    }


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Health check endpoint for monitoring.

    Reports which settings are present, never their values.
    """
    settings: Settings = request.app.state.settings

    health_status = {
        "status": "healthy",
        "service": "tax-invoice-api",
        "checks": {},
    }

    env_checks = {
        "shopify": "ok" if settings.shopify_store_domain and settings.shopify_admin_access_token else "missing",
        "order_report_credentials": "ok" if settings.order_report_credentials else "missing",
    }

    missing_env = [k for k, v in env_checks.items() if v == "missing"]
    if missing_env:
        health_status["status"] = "degraded"

    health_status["checks"]["environment"] = env_checks
    health_status["checks"]["session_signing"] = "enabled" if settings.session_secret else "disabled"
    health_status["checks"]["rate_limiter"] = request.app.state.proxy_rate_limiter.get_state()

    return health_status
