"""Shopify Admin GraphQL API client."""

from typing import Any, Dict, Optional

import httpx

from tax_invoice_api.config import constants
from tax_invoice_api.core.exceptions import UpstreamError
from tax_invoice_api.core.logger import setup_logger

logger = setup_logger(__name__)

# Shopify Admin API version used when none is configured
DEFAULT_API_VERSION = "2024-07"

# Outbound call timeout in seconds
DEFAULT_TIMEOUT = 10.0

# Upstream body excerpt kept in error details
ERROR_BODY_LIMIT = 500


class ShopifyAdminClient:
    """Async HTTP client for the Shopify Admin GraphQL API.

    A new ``httpx.AsyncClient`` is opened per call. No retries: a failed
    call is surfaced to the caller immediately.
    """

    def __init__(
        self,
        store_domain: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize API client with credentials.

        Args:
            store_domain: Store domain, e.g. "example.myshopify.com"
            access_token: Admin API access token
            api_version: Admin API version segment of the endpoint path
            timeout: Seconds before the call is abandoned
            transport: Optional httpx transport (tests inject a mock)
        """
        self.store_domain = store_domain.strip().removeprefix("https://").rstrip("/")
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.transport = transport

    @property
    def graphql_url(self) -> str:
        return f"https://{self.store_domain}/admin/api/{self.api_version}/graphql.json"

    async def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Any:
        """
        POST a GraphQL document to the Admin API.

        Args:
            query: GraphQL document
            variables: GraphQL variables (may be None)

        Raises:
            UpstreamError: Non-2xx status (status passed through), timeout (504),
                connection failure or unreadable body (502)

        Returns:
            Parsed JSON body, which may still contain GraphQL ``errors``
        """
        headers = {
            "Content-Type": "application/json",
            constants.SHOPIFY_ACCESS_TOKEN_HEADER: self.access_token,
        }
        payload = {"query": query, "variables": variables}

        try:
            logger.info(f"Making Shopify GraphQL request to {self.store_domain}")
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.graphql_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Shopify request timed out after {self.timeout}s: {e}")
            raise UpstreamError(constants.MSG_UPSTREAM_TIMEOUT, status_code=504) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Shopify: {type(e).__name__}: {e}")
            raise UpstreamError(constants.MSG_UPSTREAM_FAILED, status_code=502) from e

        if not response.is_success:
            body_excerpt = response.text[:ERROR_BODY_LIMIT]
            logger.error(
                f"Shopify API error: {response.status_code} {response.reason_phrase} - {body_excerpt}"
            )
            raise UpstreamError(
                f"{constants.MSG_UPSTREAM_FAILED} ({response.status_code})",
                status_code=response.status_code,
                details=body_excerpt,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Shopify returned a non-JSON body: {e}")
            raise UpstreamError(constants.MSG_UPSTREAM_FAILED, status_code=502) from e
