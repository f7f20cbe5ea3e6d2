r"""Computation of the supported API versions.

API versions are released quarterly and named after the first month of
their quarter (``"2024-01"``, ``"2024-04"``, ``"2024-07"``,
``"2024-10"``). The supported window is made of the three previous
versions, the current one, the next one and ``"unstable"``.
"""

from __future__ import annotations

__all__ = ["ApiVersion", "get_current_api_version", "get_current_supported_api_versions"]

from datetime import date, datetime, timezone
from typing import NamedTuple

from storegql.constants import UNSTABLE_API_VERSION


class ApiVersion(NamedTuple):
    """Dated API version.

    Attributes:
        year: The release year.
        quarter: The release quarter, between 1 and 4.
        version: The version name, e.g. ``"2024-04"``.
    """

    year: int
    quarter: int
    version: str


def _format_version(year: int, quarter: int) -> str:
    return f"{year}-{quarter * 3 - 2:02d}"


def _get_previous_version(year: int, quarter: int, n_quarters: int) -> str:
    version_quarter = quarter - n_quarters
    if version_quarter <= 0:
        return _format_version(year - 1, version_quarter + 4)
    return _format_version(year, version_quarter)


def get_current_api_version(today: date | None = None) -> ApiVersion:
    """Return the API version of the current quarter.

    Args:
        today: The reference date. Defaults to the current UTC date.

    Returns:
        The API version released at the beginning of the quarter.

    Example:
        ```pycon
        >>> from datetime import date
        >>> from storegql.core.api_versions import get_current_api_version
        >>> get_current_api_version(date(2024, 5, 17))
        ApiVersion(year=2024, quarter=2, version='2024-04')

        ```
    """
    if today is None:
        today = datetime.now(tz=timezone.utc).date()
    quarter = (today.month - 1) // 3 + 1
    return ApiVersion(year=today.year, quarter=quarter, version=_format_version(today.year, quarter))


def get_current_supported_api_versions(today: date | None = None) -> list[str]:
    """Return the API versions currently supported.

    Args:
        today: The reference date. Defaults to the current UTC date.

    Returns:
        The three previous versions, the current version, the next
            version and ``"unstable"``, in this order.

    Example:
        ```pycon
        >>> from datetime import date
        >>> from storegql.core.api_versions import get_current_supported_api_versions
        >>> get_current_supported_api_versions(date(2024, 11, 2))
        ['2024-01', '2024-04', '2024-07', '2024-10', '2025-01', 'unstable']

        ```
    """
    year, quarter, current_version = get_current_api_version(today)
    next_version = f"{year + 1}-01" if quarter == 4 else _format_version(year, quarter + 1)
    return [
        _get_previous_version(year, quarter, 3),
        _get_previous_version(year, quarter, 2),
        _get_previous_version(year, quarter, 1),
        current_version,
        next_version,
        UNSTABLE_API_VERSION,
    ]
