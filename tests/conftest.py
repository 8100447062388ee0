"""Shared fixtures: settings, a fake session clock and a stubbed Shopify upstream."""

import json
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from tax_invoice_api.config.settings import Settings
from tax_invoice_api.server.app import create_app

CREDENTIALS_JSON = json.dumps([
    {"email": "Staff@Example.com", "password": "S3cret!"},
    {"email": "owner@example.com", "password": "owner-pass"},
])

ORDERS_RESPONSE = {
    "data": {
        "orders": {
            "edges": [
                {
                    "cursor": "c1",
                    "node": {
                        "id": "gid://shopify/Order/1",
                        "name": "#1001",
                        "createdAt": "2024-01-01T00:00:00Z",
                        "customer": {"email": "buyer@example.com"},
                        "totalPrice": "10.00",
                        "displayFinancialStatus": "PAID",
                    },
                }
            ],
            "pageInfo": {"hasNextPage": False},
        }
    },
    "extensions": {"cost": {"requestedQueryCost": 3}},
}


class FakeClock:
    """Controllable clock; call it to read, ``advance`` to move forward."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, amount: float) -> None:
        self.now += amount


class ShopifyStub:
    """Records upstream calls and answers with a configurable handler."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json=ORDERS_RESPONSE)
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_settings(**overrides) -> Settings:
    values = {
        "order_report_credentials": CREDENTIALS_JSON,
        "shopify_store_domain": "test-store.myshopify.com",
        "shopify_admin_access_token": "shpat_test_token",
        "environment": "development",
        "allowed_origins": None,
        "session_secret": None,
        "oms_allow_invalid": False,
        "glitchtip_dsn": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def shopify() -> ShopifyStub:
    return ShopifyStub()


@pytest.fixture
def app_factory(shopify):
    """Build a TestClient for the given settings overrides."""

    def _build(**overrides) -> TestClient:
        app = create_app(settings=make_settings(**overrides), shopify_transport=shopify.transport)
        return TestClient(app)

    return _build


@pytest.fixture
def client(app_factory) -> TestClient:
    return app_factory()
