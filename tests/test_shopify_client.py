"""Tests for the Shopify Admin GraphQL client."""

import asyncio
import json

import httpx
import pytest

from tax_invoice_api.api.client import ShopifyAdminClient
from tax_invoice_api.core.exceptions import UpstreamError


def make_client(handler, **kwargs) -> ShopifyAdminClient:
    return ShopifyAdminClient(
        store_domain="test-store.myshopify.com",
        access_token="shpat_test_token",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_posts_query_with_access_token():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"data": {"shop": {"name": "Store"}}})

    client = make_client(handler, api_version="2025-01")
    result = asyncio.run(client.graphql("{ shop { name } }", {"a": 1}))

    assert result == {"data": {"shop": {"name": "Store"}}}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://test-store.myshopify.com/admin/api/2025-01/graphql.json"
    assert request.headers["X-Shopify-Access-Token"] == "shpat_test_token"
    assert json.loads(request.content) == {"query": "{ shop { name } }", "variables": {"a": 1}}


def test_domain_with_scheme_is_normalized():
    client = ShopifyAdminClient("https://test-store.myshopify.com/", "token")
    assert client.graphql_url == "https://test-store.myshopify.com/admin/api/2024-07/graphql.json"


def test_non_success_status_is_passed_through():
    client = make_client(lambda request: httpx.Response(401, text="[API] Invalid API key"))

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.graphql("{ shop { name } }"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.details == "[API] Invalid API key"


def test_timeout_maps_to_504():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(make_client(handler).graphql("{ shop { name } }"))
    assert exc_info.value.status_code == 504


def test_connection_failure_maps_to_502():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(make_client(handler).graphql("{ shop { name } }"))
    assert exc_info.value.status_code == 502


def test_non_json_body_maps_to_502():
    client = make_client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.graphql("{ shop { name } }"))
    assert exc_info.value.status_code == 502
