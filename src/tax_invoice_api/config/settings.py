"""Configuration management using Pydantic Settings.

Loads configuration from environment variables with .env file support.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration."""

    # Order report login (JSON array of {"email": ..., "password": ...})
    order_report_credentials: Optional[str] = None

    # Shopify Admin API Configuration
    shopify_store_domain: Optional[str] = None
    shopify_admin_access_token: Optional[str] = None
    shopify_api_version: str = "2024-07"
    shopify_timeout_seconds: float = 10.0

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    environment: str = "development"
    reload: bool = False

    # CORS (comma separated, empty = "*")
    allowed_origins: Optional[str] = None

    # Proxy rate limiting
    proxy_rate_limit_max_requests: int = 30
    proxy_rate_limit_window_ms: int = 60_000

    # Login lockout (server side)
    login_lockout_enabled: bool = True
    login_max_attempts: int = 3
    login_lockout_seconds: int = 300

    # Signs the session cookie when set
    session_secret: Optional[str] = None

    # Order links
    oms_allow_invalid: bool = False

    # Admin contact shown to customers whose order is not eligible
    admin_email: str = "admin@lcdtvthailand.com"
    admin_phone: str = "02-000-0000"
    admin_line_id: str = "@lcdtvthailand"
    admin_office_hours: str = "จันทร์-ศุกร์ 9:00-18:00"

    # GlitchTip Error Monitoring
    glitchtip_dsn: Optional[str] = None

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def origin_list(self) -> List[str]:
        """Configured CORS origins, empty when any origin is allowed."""
        if not self.allowed_origins:
            return []
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


# Create a global settings instance
settings = Settings()
