"""Ordering of version identifiers.

Identifiers that parse as semantic versions follow semver precedence, anything
else sorts below every semantic version using plain string comparison.
"""

from __future__ import annotations

import logging
from typing import Iterable, Union

import semver

logger = logging.getLogger(__name__)
VersionSortKey = Union[tuple[int, str], tuple[int, semver.Version, str]]


def parse_semver(raw: str) -> semver.Version | None:
    """
    >>> parse_semver("1.2.3-rc.1")
    Version(major=1, minor=2, patch=3, prerelease='rc.1', build=None)
    >>> parse_semver("v1.2") is None
    True
    """
    try:
        return semver.Version.parse(raw)
    except (ValueError, TypeError):
        return None


def is_semver(raw: str) -> bool:
    return parse_semver(raw) is not None


def version_sort_key(raw: str) -> VersionSortKey:
    """Ascending key, the raw string breaks ties between equal precedences (build metadata)."""
    if parsed := parse_semver(raw):
        return (1, parsed, raw)
    return (0, raw)


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Newest first.

    >>> sort_versions(["1.1.2", "1.0.0", "1.1.0"])
    ['1.1.2', '1.1.0', '1.0.0']
    >>> sort_versions(["1.0.0-rc.1", "1.0.0", "0.9.0"])
    ['1.0.0', '1.0.0-rc.1', '0.9.0']
    >>> sort_versions(["nightly", "0.1.0", "beta"])
    ['0.1.0', 'nightly', 'beta']
    """
    return sorted(versions, key=version_sort_key, reverse=True)


def compare_versions(left: str, right: str) -> int:
    """
    >>> compare_versions("1.10.0", "1.9.0")
    1
    >>> compare_versions("latest", "0.0.1")
    -1
    >>> compare_versions("1.0.0", "1.0.0")
    0
    """
    left_key, right_key = version_sort_key(left), version_sort_key(right)
    if left_key == right_key:
        return 0
    return 1 if left_key > right_key else -1
