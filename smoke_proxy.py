#!/usr/bin/env python3
"""Manual smoke test against a running server: log in, then query one order."""

import json
import os

import requests
from dotenv import load_dotenv

load_dotenv()

BASE_URL = os.getenv("SMOKE_BASE_URL", "http://localhost:8000")

# Load test data from environment or use placeholders
EMAIL = os.getenv("SMOKE_EMAIL", "staff@example.com")
PASSWORD = os.getenv("SMOKE_PASSWORD", "change-me")
ORDER_NAME = os.getenv("SMOKE_ORDER_NAME", "#1001")

QUERY = """
query OrderByName($q: String!) {
  orders(first: 1, query: $q) {
    edges {
      node {
        id
        name
        displayFinancialStatus
        displayFulfillmentStatus
        cancelledAt
        totalPriceSet { shopMoney { amount currencyCode } }
      }
    }
  }
}
"""

print("=" * 80)
print("ORDER REPORT SMOKE TEST")
print("=" * 80)

session = requests.Session()

try:
    login = session.post(
        f"{BASE_URL}/order-report-auth",
        json={"email": EMAIL, "password": PASSWORD},
        timeout=10,
    )
    print(f"\nLogin: {login.status_code} {login.json()}")

    check = session.get(f"{BASE_URL}/order-report-auth", timeout=10)
    print(f"Session check: {check.status_code} {check.json()}")

    response = session.post(
        f"{BASE_URL}/shopify",
        json={"query": QUERY, "variables": {"q": f"name:{ORDER_NAME}"}},
        timeout=15,
    )
    print(f"\n{'=' * 80}")
    print(f"PROXY RESPONSE: {response.status_code}")
    print(f"{'=' * 80}")
    print(json.dumps(response.json(), indent=2, ensure_ascii=False))

    edges = (response.json().get("data") or {}).get("orders", {}).get("edges", [])
    if edges:
        node = edges[0]["node"]
        status = {
            "financialStatus": node.get("displayFinancialStatus"),
            "fulfillmentStatus": node.get("displayFulfillmentStatus"),
            "cancelledAt": node.get("cancelledAt"),
        }
        verdict = session.post(f"{BASE_URL}/order-status", json=status, timeout=10)
        print(f"\nEligibility: {json.dumps(verdict.json(), indent=2, ensure_ascii=False)}")

    logout = session.delete(f"{BASE_URL}/order-report-auth", timeout=10)
    print(f"\nLogout: {logout.status_code} {logout.json()}")

except Exception as e:
    print(f"\n❌ Error: {e}")
