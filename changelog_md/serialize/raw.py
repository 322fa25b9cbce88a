"""Helpers shared by the format parsers before the payload reaches the model."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from changelog_md.errors import FieldPath, Violation


class KeyTrackingDict(dict):
    """Remembers keys seen more than once instead of silently keeping the last value."""

    def __init__(self) -> None:
        super().__init__()
        self.duplicates: list[str] = []

    def track(self, key: Any, value: Any) -> None:
        if key in self:
            self.duplicates.append(key)
        self[key] = value

    @classmethod
    def from_pairs(cls, pairs: list[tuple[Any, Any]]) -> KeyTrackingDict:
        mapping = cls()
        for key, value in pairs:
            mapping.track(key, value)
        return mapping


def find_duplicate_keys(raw: Any, path: FieldPath = ()) -> list[Violation]:
    violations: list[Violation] = []
    if isinstance(raw, KeyTrackingDict):
        violations.extend(
            Violation((*path, str(key)), "duplicate key") for key in raw.duplicates
        )
    if isinstance(raw, dict):
        for key, value in raw.items():
            violations.extend(find_duplicate_keys(value, (*path, str(key))))
    elif isinstance(raw, list):
        for index, value in enumerate(raw):
            violations.extend(find_duplicate_keys(value, (*path, index)))
    return violations


def normalize_raw(raw: Any) -> Any:
    """Plain containers and calendar dates spelled as YYYY-MM-DD."""
    if isinstance(raw, dict):
        return {key: normalize_raw(value) for key, value in raw.items()}
    if isinstance(raw, list):
        return [normalize_raw(value) for value in raw]
    if isinstance(raw, date) and not isinstance(raw, datetime):
        return raw.isoformat()
    return raw
