import logging

import pytest

from changelog_md.constants import FileFormat
from changelog_md.errors import (
    ChangelogValidationError,
    DecodeError,
    DuplicateVersion,
    UnknownVersion,
)
from changelog_md.models import YANKED_NO_REASON, ChangeCategory, Changelog
from changelog_md.operations import add_change, convert, release, today, yank
from changelog_md.serialize import decode, encode


def test_add_change_appends_in_order(demo: Changelog):
    add_change(demo, "added", "Second addition")
    add_change(demo, ChangeCategory.SECURITY, "Patched")
    assert demo.unreleased.added == ["First addition", "Second addition"]
    assert demo.unreleased.security == ["Patched"]


def test_add_change_rejects_unknown_category(demo: Changelog):
    with pytest.raises(ValueError):
        add_change(demo, "improved", "x")


def test_add_change_rejects_blank_text(demo: Changelog):
    with pytest.raises(ChangelogValidationError) as exc:
        add_change(demo, "fixed", "  ")
    assert str(exc.value.violations[0]) == "unreleased.fixed: empty change entry"
    assert demo.unreleased.fixed == []


def test_release_moves_unreleased(demo: Changelog):
    version = release(demo, "1.1.0", date="2025-03-01", description="Second release")
    assert demo.unreleased.is_empty
    assert version is demo.versions["1.1.0"]
    assert version.tag == "1.1.0"
    assert version.added == ["First addition"]
    assert version.description == "Second release"
    assert [name for name, _ in demo.sorted_versions()] == ["1.1.0", "1.0.0"]


def test_release_defaults(demo: Changelog):
    version = release(demo, "1.1.0", tag="v1.1.0")
    assert version.tag == "v1.1.0"
    assert version.date == today()
    assert version.description is None


def test_release_existing_version_changes_nothing(demo: Changelog):
    before = demo.model_copy(deep=True)
    with pytest.raises(DuplicateVersion) as exc:
        release(demo, "1.0.0")
    assert exc.value.version == "1.0.0"
    assert demo == before


def test_release_invalid_date_changes_nothing(demo: Changelog):
    before = demo.model_copy(deep=True)
    with pytest.raises(ChangelogValidationError) as exc:
        release(demo, "1.1.0", date="March 1st")
    assert exc.value.violations[0].path == ("versions", "1.1.0", "date")
    assert demo == before


def test_release_blank_version(demo: Changelog):
    with pytest.raises(ChangelogValidationError) as exc:
        release(demo, " ", tag="v0")
    assert exc.value.violations[0].message == "empty version key"


def test_release_without_changes_warns(demo: Changelog, caplog):
    release(demo, "1.1.0")
    with caplog.at_level(logging.WARNING):
        version = release(demo, "1.2.0")
    assert version.is_empty
    assert "without any unreleased changes" in caplog.text


def test_yank(demo: Changelog):
    version = yank(demo, "1.0.0", "Security hole")
    assert version.yanked == "Security hole"
    assert demo.version("1.0.0").is_yanked


def test_yank_without_reason(demo: Changelog):
    assert yank(demo, "1.0.0").yanked == YANKED_NO_REASON
    assert yank(demo, "1.0.0", " ").yanked == YANKED_NO_REASON


def test_yank_unknown_version(demo: Changelog):
    with pytest.raises(UnknownVersion) as exc:
        yank(demo, "9.9.9")
    assert exc.value.version == "9.9.9"
    assert not demo.version("1.0.0").is_yanked


def test_yanked_version_survives_round_trip(demo: Changelog):
    yank(demo, "1.0.0", "Bad build")
    for format in FileFormat:
        decoded = decode(encode(demo, format), format)
        assert decoded.version("1.0.0").yanked == "Bad build"


@pytest.mark.parametrize("source", list(FileFormat))
@pytest.mark.parametrize("target", list(FileFormat))
def test_convert(full: Changelog, source: FileFormat, target: FileFormat):
    converted = convert(encode(full, source), source, target)
    assert converted == encode(full, target)


def test_convert_reports_source_errors():
    with pytest.raises(DecodeError):
        convert("title: [", "yaml", "json")
