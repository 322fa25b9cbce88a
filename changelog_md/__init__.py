from changelog_md.constants import FileFormat
from changelog_md.errors import (
    ChangelogError,
    ChangelogValidationError,
    DecodeError,
    DuplicateVersion,
    IoFailure,
    UnknownFormatError,
    UnknownVersion,
    Violation,
)
from changelog_md.models import ChangeCategory, Changelog, Changes, Version
from changelog_md.operations import add_change, convert, release, yank
from changelog_md.render import render
from changelog_md.schema import changelog_json_schema
from changelog_md.serialize import decode, encode
from changelog_md.storage import (
    edit_changelog,
    find_source,
    read_changelog,
    write_changelog,
)
from changelog_md.validator import check_changelog, validate_changelog
from changelog_md.versions import compare_versions, sort_versions

VERSION = "0.1.0"
__all__ = [
    "ChangeCategory",
    "Changelog",
    "ChangelogError",
    "ChangelogValidationError",
    "Changes",
    "DecodeError",
    "DuplicateVersion",
    "FileFormat",
    "IoFailure",
    "UnknownFormatError",
    "UnknownVersion",
    "Version",
    "Violation",
    "add_change",
    "changelog_json_schema",
    "check_changelog",
    "compare_versions",
    "convert",
    "decode",
    "edit_changelog",
    "encode",
    "find_source",
    "read_changelog",
    "release",
    "render",
    "sort_versions",
    "validate_changelog",
    "write_changelog",
    "yank",
]
