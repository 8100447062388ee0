"""FastAPI application setup and configuration."""

import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tax_invoice_api.config.settings import Settings, settings as default_settings
from tax_invoice_api.core.credentials import CredentialStore
from tax_invoice_api.core.exceptions import AppError
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.core.rate_limiter import FixedWindowRateLimiter
from tax_invoice_api.core.session import SessionIssuer
from tax_invoice_api.services.shopify_proxy import ShopifyProxy

logger = setup_logger(__name__)


def _init_monitoring(settings: Settings) -> None:
    """Initialize GlitchTip error monitoring (Sentry-compatible)."""
    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration

        sentry_sdk.init(
            dsn=settings.glitchtip_dsn,
            environment=settings.environment,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(
                    level=None,  # Capture all log levels as breadcrumbs
                    event_level=logging.ERROR,  # Send ERROR logs as events
                ),
            ],
            traces_sample_rate=0.1,
            profiles_sample_rate=0.0,
            send_default_pii=False,  # Order report emails stay out of events
        )
        logger.info("GlitchTip error monitoring initialized")
    except Exception as e:
        logger.error(f"Failed to initialize GlitchTip: {e}")


def create_app(
    settings: Optional[Settings] = None,
    shopify_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Settings override (defaults to the environment)
        shopify_transport: httpx transport for Shopify calls (tests inject a mock)
    """
    if settings is None:
        settings = default_settings

    app = FastAPI(
        title="Shopify Tax Invoice API",
        version="1.0.0",
        description="Shopify order proxy and order report login for the Thai tax invoice form",
    )

    if settings.glitchtip_dsn:
        _init_monitoring(settings)

    # Components live on app.state so each app instance has its own limiter state
    app.state.settings = settings
    app.state.proxy_rate_limiter = FixedWindowRateLimiter(
        max_requests=settings.proxy_rate_limit_max_requests,
        window_ms=settings.proxy_rate_limit_window_ms,
        name="shopify_proxy_limiter",
    )
    app.state.shopify_proxy = ShopifyProxy(
        settings=settings,
        rate_limiter=app.state.proxy_rate_limiter,
        transport=shopify_transport,
    )

    login_lockout = None
    if settings.login_lockout_enabled:
        login_lockout = FixedWindowRateLimiter(
            max_requests=settings.login_max_attempts,
            window_ms=settings.login_lockout_seconds * 1000,
            name="login_lockout",
        )
    app.state.session_issuer = SessionIssuer(
        credential_store=CredentialStore(settings.order_report_credentials),
        secure=settings.is_production,
        secret=settings.session_secret,
        lockout=login_lockout,
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.warning(
            f"{exc.code} on {request.method}: {exc.message}",
            extra={"status_code": exc.status_code, "path": request.url.path},
        )
        return JSONResponse(content=exc.to_dict(), status_code=exc.status_code, headers=exc.headers)

    # Import and include routers
    from tax_invoice_api.server import auth_routes, order_routes, routes, shopify_routes, tax_invoice_routes

    app.include_router(routes.router)
    app.include_router(auth_routes.router)
    app.include_router(shopify_routes.router)
    app.include_router(order_routes.router)
    app.include_router(tax_invoice_routes.router)

    logger.info(
        f"Application created (environment={settings.environment}, "
        f"proxy limit={settings.proxy_rate_limit_max_requests}/"
        f"{settings.proxy_rate_limit_window_ms}ms)"
    )
    return app
