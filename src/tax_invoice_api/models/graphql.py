"""Pydantic models for the Shopify GraphQL proxy."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from tax_invoice_api.config.constants import GRAPHQL_QUERY_MAX_LENGTH


class GraphQLQuery(BaseModel):
    """Request body forwarded to the Shopify Admin GraphQL API."""

    query: str = Field(
        ...,
        min_length=1,
        max_length=GRAPHQL_QUERY_MAX_LENGTH,
        description="GraphQL document",
    )
    variables: Optional[Dict[str, Any]] = Field(None, description="GraphQL variables")

    class Config:
        extra = "ignore"
        strict = True
