"""Inbound HTTP surface: webhook endpoint and health checks."""
