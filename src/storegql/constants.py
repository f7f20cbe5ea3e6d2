r"""Constants shared by the GraphQL and Storefront clients."""

from __future__ import annotations

__all__ = [
    "ACCEPT_HEADER",
    "CLIENT",
    "CONTENT_TYPES",
    "CONTENT_TYPE_HEADER",
    "DEFAULT_CLIENT_VERSION",
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_RETRIES",
    "DEFAULT_SDK_VARIANT",
    "DEFAULT_TIMEOUT",
    "MAX_RETRIES",
    "MIN_RETRIES",
    "PRIVATE_ACCESS_TOKEN_HEADER",
    "PUBLIC_ACCESS_TOKEN_HEADER",
    "RETRIABLE_STATUS_CODES",
    "RETRY_WAIT_TIME",
    "SDK_VARIANT_HEADER",
    "SDK_VARIANT_SOURCE_HEADER",
    "SDK_VERSION_HEADER",
    "UNSTABLE_API_VERSION",
]

from importlib.metadata import PackageNotFoundError, version

# Prefix of every error and warning message
CLIENT = "Storefront API Client"

# Bounds of the retry budget (retries, not counting the initial attempt)
# Total attempts = retries + 1
MIN_RETRIES = 0
MAX_RETRIES = 3
DEFAULT_RETRIES = 0

# Fixed delay in seconds between two attempts, no backoff and no jitter
RETRY_WAIT_TIME = 1.0

# HTTP status codes signaling a transient overload
# 429: Too Many Requests - Rate limiting
# 503: Service Unavailable - Server overloaded or down
RETRIABLE_STATUS_CODES = (429, 503)

# Default timeout in seconds of the httpx client owned by a GraphQL client
DEFAULT_TIMEOUT = 10.0

CONTENT_TYPES = {
    "json": "application/json",
    "multipart": "multipart/mixed",
}
DEFAULT_CONTENT_TYPE = CONTENT_TYPES["json"]

CONTENT_TYPE_HEADER = "Content-Type"
ACCEPT_HEADER = "Accept"
PUBLIC_ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"
PRIVATE_ACCESS_TOKEN_HEADER = "Shopify-Storefront-Private-Token"
SDK_VARIANT_HEADER = "X-SDK-Variant"
SDK_VERSION_HEADER = "X-SDK-Version"
SDK_VARIANT_SOURCE_HEADER = "X-SDK-Variant-Source"

DEFAULT_SDK_VARIANT = "storefront-api-client"

try:
    DEFAULT_CLIENT_VERSION = version("storegql")
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    DEFAULT_CLIENT_VERSION = "0.0.0"

# Always accepted on top of the dated API versions
UNSTABLE_API_VERSION = "unstable"
