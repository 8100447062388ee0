"""Server entry point.

``uvicorn tax_invoice_api.main:app`` or the ``tax-invoice-api`` script.
"""

from tax_invoice_api.config.settings import settings
from tax_invoice_api.server.app import create_app

app = create_app(settings)


def run() -> None:
    """Serve ``app`` with uvicorn using HOST, PORT and LOG_LEVEL."""
    import uvicorn

    uvicorn.run(
        "tax_invoice_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=5,
        access_log=False,  # Structured logs cover requests
    )


if __name__ == "__main__":
    run()
