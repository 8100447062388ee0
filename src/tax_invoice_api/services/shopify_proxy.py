"""Shopify GraphQL proxy used by the tax invoice form and the order report."""

from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from tax_invoice_api.api.client import ShopifyAdminClient
from tax_invoice_api.config import constants
from tax_invoice_api.config.settings import Settings
from tax_invoice_api.core.exceptions import (
    ConfigurationError,
    GraphQLError,
    RateLimitError,
    ValidationError,
)
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.core.rate_limiter import FixedWindowRateLimiter
from tax_invoice_api.models.graphql import GraphQLQuery
from tax_invoice_api.services.sanitizer import sanitize_graphql_response

logger = setup_logger(__name__)


class ShopifyProxy:
    """Validates, rate limits and forwards GraphQL requests to Shopify.

    Every step is a hard gate; nothing is forwarded once a gate fails.
    """

    def __init__(
        self,
        settings: Settings,
        rate_limiter: FixedWindowRateLimiter,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Application settings (Shopify secrets, API version, timeout)
            rate_limiter: Per-client request limiter
            transport: Optional httpx transport passed to the Shopify client
        """
        self.settings = settings
        self.rate_limiter = rate_limiter
        self.transport = transport

    def _build_client(self) -> ShopifyAdminClient:
        store_domain = self.settings.shopify_store_domain
        access_token = self.settings.shopify_admin_access_token
        if not store_domain or not access_token:
            logger.error("Shopify proxy is missing required configuration")
            raise ConfigurationError(constants.MSG_SERVER_NOT_CONFIGURED)

        return ShopifyAdminClient(
            store_domain=store_domain,
            access_token=access_token,
            api_version=self.settings.shopify_api_version,
            timeout=self.settings.shopify_timeout_seconds,
            transport=self.transport,
        )

    @staticmethod
    def validate_body(body: Any) -> GraphQLQuery:
        """Validate a parsed request body against the GraphQL query shape."""
        if not isinstance(body, dict):
            raise ValidationError(constants.MSG_INVALID_REQUEST)
        try:
            return GraphQLQuery.model_validate(body)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(constants.MSG_INVALID_REQUEST, e) from None

    async def execute(self, body: Any, client_key: str) -> Any:
        """
        Run one proxied GraphQL request.

        Args:
            body: Parsed JSON request body
            client_key: Rate limiting key for the caller

        Raises:
            RateLimitError: Client exceeded the request limit
            ConfigurationError: Store domain or access token missing
            ValidationError: Body is not a valid GraphQL query
            UpstreamError: Shopify call failed at the transport level
            GraphQLError: Shopify returned query-level errors

        Returns:
            GraphQL response with sensitive order fields removed
        """
        if not self.rate_limiter.allow(client_key):
            raise RateLimitError(retry_after=self.rate_limiter.retry_after_seconds(client_key))

        client = self._build_client()
        request = self.validate_body(body)

        data = await client.graphql(request.query, request.variables)

        if isinstance(data, dict) and data.get("errors") is not None:
            logger.error(f"Shopify GraphQL errors: {data['errors']}")
            raise GraphQLError(constants.MSG_GRAPHQL_ERRORS, details=data["errors"])

        return sanitize_graphql_response(data)
