"""Utility functions for HTTP client operations.

This package contains the building blocks used by the `Networkable` helpers:
- URL and query composition
- Request data building
- Request execution against `requests` and `aiohttp` sessions
- JSON and image decoding of response payloads
"""
