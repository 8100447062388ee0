"""Tests for order status, admin contact and order link endpoints."""

from urllib.parse import parse_qs, urlparse

from tax_invoice_api.core.oms_token import build_oms_token

KEY = "test-store.myshopify.com"


def test_order_status_eligible(client):
    response = client.post("/order-status", json={"financialStatus": "paid", "fulfillmentStatus": None})

    assert response.status_code == 200
    body = response.json()
    assert body["validation"]["isEligible"] is True
    assert "reason" not in body["validation"]
    assert body["display"]["financial"] == "ชำระเงินแล้ว"
    assert "contactTemplate" not in body


def test_order_status_ineligible_with_template(client):
    response = client.post("/order-status", json={
        "financialStatus": "paid",
        "cancelledAt": "2024-01-02T00:00:00Z",
        "orderNumber": "1001",
        "customerEmail": "buyer@example.com",
    })

    body = response.json()
    assert body["validation"]["isEligible"] is False
    assert body["validation"]["reason"] == "cancelled"
    assert body["display"]["overall"] == "ยกเลิกแล้ว"
    assert "#1001" in body["contactTemplate"]


def test_order_status_rejects_bad_body(client):
    response = client.post("/order-status", content=b"nope", headers={"Content-Type": "application/json"})
    assert response.status_code == 400

    response = client.post("/order-status", json={"financialStatus": 5})
    assert response.status_code == 400


def test_admin_contact(app_factory):
    client = app_factory(admin_email="help@example.com")
    body = client.get("/admin-contact").json()

    assert body["email"] == "help@example.com"
    assert set(body) == {"email", "phone", "lineId", "officeHours"}


def test_build_oms_json(client):
    response = client.get("/build-oms", params={
        "order": "#1001", "email": "Buyer@Example.com", "ts": 1700000000, "format": "json",
    })

    body = response.json()
    assert body["ok"] is True
    assert body["key"] == KEY
    assert body["oms"] == "#1001|buyer@example.com"
    assert body["token"] == build_oms_token("1001", "buyer@example.com", 1700000000, KEY)
    query = parse_qs(urlparse(body["url"]).query)
    assert query["token"] == [body["token"]]


def test_build_oms_redirects(client):
    response = client.get(
        "/build-oms",
        params={"order": "1001", "email": "buyer@example.com"},
        follow_redirects=False,
    )
    assert response.status_code == 302
    assert "token=" in response.headers["location"]


def test_build_oms_missing_params(client):
    response = client.get("/build-oms", params={"order": "1001"})
    assert response.status_code == 400
    assert response.json() == {"ok": False, "reason": "missing_params"}


def test_build_oms_rejects_non_numeric_ts(client):
    for ts in ("abc", "12.5", "-1"):
        response = client.get("/build-oms", params={
            "order": "1001", "email": "buyer@example.com", "ts": ts, "format": "json",
        })
        assert response.status_code == 400
        assert response.json() == {"ok": False, "reason": "bad_ts"}


def test_built_link_resolves(client):
    built = client.get("/build-oms", params={
        "order": "1001", "email": "buyer@example.com", "format": "json",
    }).json()

    response = client.get("/resolve-oms", params={
        "key": built["key"], "oms": built["oms"], "ts": built["ts"], "token": built["token"], "format": "json",
    })

    body = response.json()
    assert body["valid"] is True
    assert body["bypassed"] is False
    assert body["order"] == "1001"
    assert body["email"] == "buyer@example.com"


def test_resolve_valid_link_redirects(client):
    token = build_oms_token("1001", "buyer@example.com", 1700000000, KEY)
    response = client.get(
        "/resolve-oms",
        params={"key": KEY, "oms": "#1001|buyer@example.com", "ts": "1700000000", "token": token},
        follow_redirects=False,
    )
    assert response.status_code == 302


def test_resolve_invalid_token_in_production(app_factory):
    client = app_factory(environment="production")
    response = client.get("/resolve-oms", params={
        "key": KEY, "oms": "#1001|buyer@example.com", "ts": "1700000000", "token": "0" * 32,
    })

    body = response.json()
    assert body["valid"] is False
    assert body["bypassed"] is False
    assert "debug" not in body


def test_resolve_invalid_token_bypassed_outside_production(client):
    response = client.get("/resolve-oms", params={
        "key": KEY, "oms": "#1001|buyer@example.com", "ts": "1700000000", "token": "0" * 32, "format": "json",
    })

    body = response.json()
    assert body["valid"] is True
    assert body["bypassed"] is True
    assert body["debug"]["candidates"] > 0


def test_resolve_bad_and_missing_params(client):
    bad = client.get("/resolve-oms", params={"key": KEY, "oms": "1001", "ts": "1", "token": "x"})
    assert bad.status_code == 400
    assert bad.json()["reason"] == "bad_oms"

    missing = client.get("/resolve-oms", params={"key": KEY})
    assert missing.status_code == 400
    assert missing.json()["reason"] == "missing_params"
