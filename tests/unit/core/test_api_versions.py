r"""Unit tests for the supported API versions."""

from __future__ import annotations

from datetime import date

import pytest

from storegql.core.api_versions import (
    ApiVersion,
    get_current_api_version,
    get_current_supported_api_versions,
)

#############################################
#     Tests for get_current_api_version     #
#############################################


@pytest.mark.parametrize(
    ("today", "expected"),
    [
        (date(2024, 1, 1), ApiVersion(year=2024, quarter=1, version="2024-01")),
        (date(2024, 3, 31), ApiVersion(year=2024, quarter=1, version="2024-01")),
        (date(2024, 4, 1), ApiVersion(year=2024, quarter=2, version="2024-04")),
        (date(2024, 8, 15), ApiVersion(year=2024, quarter=3, version="2024-07")),
        (date(2024, 12, 31), ApiVersion(year=2024, quarter=4, version="2024-10")),
    ],
)
def test_get_current_api_version(today: date, expected: ApiVersion) -> None:
    assert get_current_api_version(today) == expected


def test_get_current_api_version_default_date() -> None:
    version = get_current_api_version()
    assert 1 <= version.quarter <= 4
    assert version.version.startswith(f"{version.year}-")


########################################################
#     Tests for get_current_supported_api_versions     #
########################################################


@pytest.mark.parametrize(
    ("today", "expected"),
    [
        (
            date(2024, 2, 10),
            ["2023-04", "2023-07", "2023-10", "2024-01", "2024-04", "unstable"],
        ),
        (
            date(2024, 5, 10),
            ["2023-07", "2023-10", "2024-01", "2024-04", "2024-07", "unstable"],
        ),
        (
            date(2024, 9, 30),
            ["2023-10", "2024-01", "2024-04", "2024-07", "2024-10", "unstable"],
        ),
        (
            date(2024, 11, 2),
            ["2024-01", "2024-04", "2024-07", "2024-10", "2025-01", "unstable"],
        ),
    ],
)
def test_get_current_supported_api_versions(today: date, expected: list[str]) -> None:
    assert get_current_supported_api_versions(today) == expected


def test_get_current_supported_api_versions_default_date() -> None:
    versions = get_current_supported_api_versions()
    assert len(versions) == 6
    assert versions[3] == get_current_api_version().version
    assert versions[-1] == "unstable"
