from __future__ import annotations

import datetime
import logging

from changelog_md.constants import FileFormat
from changelog_md.errors import ChangelogValidationError, DuplicateVersion, Violation
from changelog_md.models import (
    YANKED_NO_REASON,
    ChangeCategory,
    Changelog,
    Version,
)
from changelog_md.schema import VERSION
from changelog_md.serialize import decode, encode
from changelog_md.validator import check_object

logger = logging.getLogger(__name__)


def today() -> str:
    return datetime.date.today().isoformat()


def add_change(
    changelog: Changelog, category: ChangeCategory | str, text: str
) -> Changelog:
    """Appends to the unreleased changes, raises ValueError for an unknown category."""
    category = ChangeCategory(category)
    if not text.strip():
        raise ChangelogValidationError(
            [Violation(("unreleased", category.value), "empty change entry")]
        )
    changelog.unreleased.push(category, text)
    logger.info(f"added unreleased {category}: {text}")
    return changelog


def release(
    changelog: Changelog,
    version: str,
    *,
    tag: str | None = None,
    date: str | None = None,
    description: str | None = None,
) -> Version:
    """Moves the unreleased changes into a new version, the changelog is untouched on errors."""
    if version in changelog.versions:
        raise DuplicateVersion(version)
    unreleased = changelog.unreleased
    payload = {
        "tag": tag or version,
        "date": date or today(),
        "description": description,
        **unreleased.categories_dict(),
    }
    path = ("versions", version)
    violations = [] if version.strip() else [Violation(path, "empty version key")]
    violations.extend(check_object(VERSION, payload, path))
    if violations:
        raise ChangelogValidationError(violations)
    if unreleased.is_empty:
        logger.warning(f"releasing {version} without any unreleased changes")
    new_version = Version.model_validate(payload)
    changelog.versions[version] = new_version
    unreleased.clear()
    logger.info(f"released {version} with tag={new_version.tag} @ {new_version.date}")
    return new_version


def yank(changelog: Changelog, version: str, reason: str | None = None) -> Version:
    """Raises UnknownVersion when the version is missing."""
    yanked = changelog.version(version)
    reason = (reason or "").strip() or YANKED_NO_REASON
    if yanked.is_yanked:
        logger.warning(f"{version} already yanked: {yanked.yanked}, replacing reason")
    yanked.yanked = reason
    logger.info(f"yanked {version}: {reason}")
    return yanked


def convert(
    payload: str | bytes,
    source_format: FileFormat | str,
    target_format: FileFormat | str,
    pretty: bool = True,
) -> str:
    return encode(decode(payload, source_format), target_format, pretty=pretty)
