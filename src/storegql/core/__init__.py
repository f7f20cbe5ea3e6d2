r"""Core shared logic for sync and async GraphQL clients.

This package contains the pure logic shared by the synchronous and
asynchronous clients: configuration resolution, request building,
response classification, API versions and validation.
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "RequestDescriptor",
    "RequestOptions",
    "build_request",
    "classify_response",
    "get_current_api_version",
    "get_current_supported_api_versions",
    "merge_headers",
    "validate_api_version",
    "validate_domain",
    "validate_private_access_token_usage",
    "validate_required_access_tokens",
    "validate_retries",
]

from storegql.core.api_versions import (
    get_current_api_version,
    get_current_supported_api_versions,
)
from storegql.core.config import ClientConfig, RequestOptions, merge_headers
from storegql.core.request_logic import RequestDescriptor, build_request
from storegql.core.response_logic import classify_response
from storegql.core.validation import (
    validate_api_version,
    validate_domain,
    validate_private_access_token_usage,
    validate_required_access_tokens,
    validate_retries,
)
