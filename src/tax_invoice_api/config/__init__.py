"""Configuration module - Settings and constants."""
