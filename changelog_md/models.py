from __future__ import annotations

import logging
from typing import ClassVar, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from zero_3rdparty.enum_utils import StrEnum

from changelog_md.errors import UnknownVersion
from changelog_md.versions import sort_versions

logger = logging.getLogger(__name__)
DATE_PATTERN = r"^\d{4}-[01]\d-[0-3]\d$"
YANKED_NO_REASON = "No reason given"


class ChangeCategory(StrEnum):
    ADDED = "added"
    CHANGED = "changed"
    DEPRECATED = "deprecated"
    REMOVED = "removed"
    FIXED = "fixed"
    SECURITY = "security"

    @property
    def heading(self) -> str:
        return self.value.capitalize()


CATEGORY_FIELDS: tuple[str, ...] = tuple(
    category.value for category in ChangeCategory
)


def _blank_as_none(value: object) -> object:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class Changes(_Model):
    """Change entries grouped by category, order within a category is kept as written."""

    added: list[str] = Field(default_factory=list)
    changed: list[str] = Field(default_factory=list)
    deprecated: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    fixed: list[str] = Field(default_factory=list)
    security: list[str] = Field(default_factory=list)

    @field_validator(*CATEGORY_FIELDS, mode="before")
    @classmethod
    def null_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def entries(self, category: ChangeCategory | str) -> list[str]:
        return getattr(self, ChangeCategory(category).value)

    def push(self, category: ChangeCategory | str, change: str) -> None:
        self.entries(category).append(change)

    def iter_categories(self) -> Iterable[tuple[ChangeCategory, list[str]]]:
        """Non-empty categories in display order."""
        for category in ChangeCategory:
            if entries := self.entries(category):
                yield category, entries

    def categories_dict(self) -> dict[str, list[str]]:
        return {
            category.value: list(entries)
            for category, entries in self.iter_categories()
        }

    @property
    def is_empty(self) -> bool:
        return not any(self.entries(category) for category in ChangeCategory)

    def clear(self) -> None:
        for category in ChangeCategory:
            self.entries(category).clear()


class Version(Changes):
    """A released version, the change categories sit next to the release fields."""

    tag: str
    date: str = Field(pattern=DATE_PATTERN)
    description: Optional[str] = None
    yanked: Optional[str] = None

    @field_validator("description", "yanked", mode="before")
    @classmethod
    def blank_as_absent(cls, value: object) -> object:
        return _blank_as_none(value)

    @property
    def is_yanked(self) -> bool:
        return self.yanked is not None


class Changelog(_Model):
    DEFAULT_TITLE: ClassVar[str] = "Changelog"
    DEFAULT_DESCRIPTION: ClassVar[str] = """\
All notable changes to this project will be documented in this file.

The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.1.0/),
and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).
"""
    DEFAULT_REPOSITORY: ClassVar[str] = "https://github.com/me/my-swanky-project"
    STARTED_USING: ClassVar[str] = (
        "Started using [changelog-md](https://github.com/kageurufu/changelog-md)"
    )

    title: str
    description: str
    repository: str
    unreleased: Changes
    versions: dict[str, Version]

    @classmethod
    def default(cls, repository: str = "") -> Changelog:
        return cls(
            title=cls.DEFAULT_TITLE,
            description=cls.DEFAULT_DESCRIPTION,
            repository=repository or cls.DEFAULT_REPOSITORY,
            unreleased=Changes(added=[cls.STARTED_USING]),
            versions={},
        )

    def version(self, version: str) -> Version:
        try:
            return self.versions[version]
        except KeyError as e:
            raise UnknownVersion(version, list(self.versions)) from e

    def sorted_versions(self) -> list[tuple[str, Version]]:
        """Newest first, storage order is never used."""
        return [(name, self.versions[name]) for name in sort_versions(self.versions)]
