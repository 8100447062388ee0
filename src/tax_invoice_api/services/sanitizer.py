"""Redaction of sensitive order fields from Shopify GraphQL responses.

Only one response shape carries orders: ``data.orders.edges[].node``.
Anything else passes through untouched. Redaction copies the containers
on the path to each node and shares every other substructure, so the
input object is never modified.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet

from tax_invoice_api.config.constants import SENSITIVE_ORDER_FIELDS


class ResponseShape(Enum):
    HAS_ORDERS = "has_orders"
    NO_ORDERS = "no_orders"


def classify_response(payload: Any) -> ResponseShape:
    """Tell whether ``payload`` has the ``data.orders.edges`` list."""
    if not isinstance(payload, dict):
        return ResponseShape.NO_ORDERS
    data = payload.get("data")
    if not isinstance(data, dict):
        return ResponseShape.NO_ORDERS
    orders = data.get("orders")
    if not isinstance(orders, dict):
        return ResponseShape.NO_ORDERS
    if not isinstance(orders.get("edges"), list):
        return ResponseShape.NO_ORDERS
    return ResponseShape.HAS_ORDERS


def _redact_edge(edge: Any, fields: FrozenSet[str]) -> Any:
    if not isinstance(edge, dict) or not isinstance(edge.get("node"), dict):
        return edge
    node = {k: v for k, v in edge["node"].items() if k not in fields}
    return {**edge, "node": node}


def sanitize_graphql_response(
    payload: Any,
    fields: FrozenSet[str] = SENSITIVE_ORDER_FIELDS,
) -> Any:
    """
    Remove sensitive fields from every order node.

    Args:
        payload: Parsed GraphQL response body
        fields: Keys to drop from each ``node``

    Returns:
        A new payload with redacted nodes, or ``payload`` itself when it
        does not have the orders shape
    """
    if classify_response(payload) is ResponseShape.NO_ORDERS:
        return payload

    data: Dict[str, Any] = payload["data"]
    orders: Dict[str, Any] = data["orders"]
    edges = [_redact_edge(edge, fields) for edge in orders["edges"]]

    return {**payload, "data": {**data, "orders": {**orders, "edges": edges}}}
