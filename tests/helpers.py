r"""Shared test helpers."""

from __future__ import annotations

__all__ = ["API_URL", "OPERATION", "STORE_DOMAIN", "create_json_response", "create_response"]

from typing import Any

import httpx

STORE_DOMAIN = "https://shop.myshopify.com"
API_URL = f"{STORE_DOMAIN}/api/2024-01/graphql.json"
OPERATION = "{ shop { name } }"


def create_response(
    status_code: int = 200,
    *,
    content: bytes | str = b"",
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Create an httpx.Response with a raw body."""
    return httpx.Response(status_code, content=content, headers=headers)


def create_json_response(status_code: int = 200, payload: Any = None) -> httpx.Response:
    """Create an httpx.Response with a JSON body."""
    return httpx.Response(status_code, json=payload)
