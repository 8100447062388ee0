"""Pydantic models for requests and order status."""
