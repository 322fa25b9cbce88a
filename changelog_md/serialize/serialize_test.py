from itertools import product

import pytest

from changelog_md.conftest import random_changelog
from changelog_md.constants import FileFormat
from changelog_md.errors import DecodeError
from changelog_md.models import Changelog, Changes, Version
from changelog_md.serialize import as_payload, decode, encode

ALL_FORMATS = list(FileFormat)

DEMO_JSON = """\
{
  "title": "Demo",
  "description": "All notable changes.",
  "repository": "https://github.com/me/demo",
  "unreleased": {
    "added": [
      "First addition"
    ]
  },
  "versions": {
    "1.0.0": {
      "tag": "1.0.0",
      "date": "2025-02-24",
      "added": [
        "Everything"
      ]
    }
  }
}
"""

VERSION_TEMPLATES = {
    FileFormat.json: """\
{{
  "title": "t", "description": "d", "repository": "r", "unreleased": {{}},
  "versions": {{"1.0.0": {{"tag": "1.0.0", "date": {date}}}}}
}}""",
    FileFormat.yaml: """\
title: t
description: d
repository: r
unreleased: {{}}
versions:
  1.0.0:
    tag: 1.0.0
    date: {date}
""",
    FileFormat.toml: """\
title = "t"
description = "d"
repository = "r"

[unreleased]

[versions."1.0.0"]
tag = "1.0.0"
date = {date}
""",
}


def test_json_encoding_is_stable(demo: Changelog):
    assert encode(demo, FileFormat.json) == DEMO_JSON


def test_compact_json_is_one_line(demo: Changelog):
    assert encode(demo, "json", pretty=False).count("\n") == 1


@pytest.mark.parametrize("format", ALL_FORMATS)
@pytest.mark.parametrize("pretty", [True, False])
@pytest.mark.parametrize("seed", range(12))
def test_round_trip(format: FileFormat, pretty: bool, seed: int):
    changelog = random_changelog(seed)
    assert decode(encode(changelog, format, pretty=pretty), format) == changelog


@pytest.mark.parametrize("source, target", list(product(ALL_FORMATS, ALL_FORMATS)))
@pytest.mark.parametrize("seed", range(4))
def test_cross_format_equivalence(source: FileFormat, target: FileFormat, seed: int):
    payload = encode(random_changelog(seed), source)
    direct = decode(payload, source)
    assert decode(encode(direct, target), target) == direct


def test_round_trip_full(full: Changelog):
    for format in ALL_FORMATS:
        assert decode(encode(full, format), format) == full


@pytest.mark.parametrize("format", ALL_FORMATS)
def test_empty_categories_and_nulls_are_omitted(format: FileFormat):
    changelog = Changelog(
        title="t",
        description="d",
        repository="r",
        unreleased=Changes(added=["only added"], changed=[]),
        versions={"1.0.0": Version(tag="1.0.0", date="2025-02-24", description=None)},
    )
    text = encode(changelog, format)
    assert "changed" not in text
    assert "yanked" not in text
    assert "null" not in text
    assert "description = " not in text.split("[versions")[-1]
    assert decode(text, format) == changelog


def test_as_payload_versions_newest_first(full: Changelog):
    assert list(as_payload(full)["versions"]) == [
        "0.10.0",
        "0.2.0",
        "0.2.0-rc.1",
        "0.1.0",
    ]


def test_explicit_empty_and_null_values_decode_as_absent():
    payload = """{"title": "t", "description": "d", "repository": "r",
    "unreleased": {"added": [], "fixed": null},
    "versions": {"1.0.0": {"tag": "1.0.0", "date": "2025-01-01", "description": null, "yanked": null}}}"""
    changelog = decode(payload, "json")
    assert changelog.unreleased.is_empty
    assert changelog.version("1.0.0").description is None
    assert encode(changelog, "json", pretty=False) == (
        '{"title":"t","description":"d","repository":"r","unreleased":{},'
        '"versions":{"1.0.0":{"tag":"1.0.0","date":"2025-01-01"}}}\n'
    )


def test_dates_are_written_as_strings(demo: Changelog):
    assert "date: '2025-02-24'" in encode(demo, FileFormat.yaml)
    assert 'date = "2025-02-24"' in encode(demo, FileFormat.toml)
    assert '"date": "2025-02-24"' in encode(demo, FileFormat.json)


@pytest.mark.parametrize(
    "format, date",
    [
        (FileFormat.yaml, "2025-02-24"),
        (FileFormat.yaml, "'2025-02-24'"),
        (FileFormat.toml, "2025-02-24"),
        (FileFormat.toml, '"2025-02-24"'),
        (FileFormat.json, '"2025-02-24"'),
    ],
)
def test_native_and_quoted_dates_decode_the_same(format: FileFormat, date: str):
    changelog = decode(VERSION_TEMPLATES[format].format(date=date), format)
    assert changelog.version("1.0.0").date == "2025-02-24"


def test_yaml_scalars_keep_their_spelling():
    payload = VERSION_TEMPLATES[FileFormat.yaml].format(date="2025-02-24")
    payload = payload.replace("tag: 1.0.0", "tag: 1.10").replace(
        "unreleased: {}", "unreleased:\n  added:\n  - yes\n  - 0x10"
    )
    changelog = decode(payload, "yaml")
    assert changelog.version("1.0.0").tag == "1.10"
    assert changelog.unreleased.added == ["yes", "0x10"]


@pytest.mark.parametrize("format", ALL_FORMATS)
def test_invalid_date_points_at_the_field(format: FileFormat):
    date = '"2025-2-24"' if format != FileFormat.yaml else "2025-2-24"
    with pytest.raises(DecodeError) as exc:
        decode(VERSION_TEMPLATES[format].format(date=date), format)
    error = exc.value
    assert error.path == ("versions", "1.0.0", "date")
    assert error.format == format
    assert 'versions["1.0.0"].date' in str(error)


def test_every_violation_is_reported():
    payload = """{"title": "t", "description": "d", "repository": "r",
    "unreleased": {"improved": ["x"]},
    "versions": {"1.0.0": {"date": "yesterday"}}}"""
    with pytest.raises(DecodeError) as exc:
        decode(payload, "json")
    locations = {violation.location for violation in exc.value.violations}
    assert locations == {
        "unreleased.improved",
        'versions["1.0.0"].tag',
        'versions["1.0.0"].date',
    }


@pytest.mark.parametrize(
    "format, payload",
    [
        (
            FileFormat.json,
            '{"title": "t", "description": "d", "repository": "r", "unreleased": {},'
            '"versions": {"1.0.0": {"tag": "a", "date": "2025-01-01"},'
            '"1.0.0": {"tag": "b", "date": "2025-01-02"}}}',
        ),
        (
            FileFormat.yaml,
            "title: t\ndescription: d\nrepository: r\nunreleased: {}\nversions:\n"
            "  1.0.0: {tag: a, date: 2025-01-01}\n"
            "  1.0.0: {tag: b, date: 2025-01-02}\n",
        ),
    ],
)
def test_duplicate_versions_are_rejected(format: FileFormat, payload: str):
    with pytest.raises(DecodeError) as exc:
        decode(payload, format)
    assert exc.value.path == ("versions", "1.0.0")
    assert exc.value.cause == "duplicate key"


def test_duplicate_toml_keys_are_rejected():
    payload = VERSION_TEMPLATES[FileFormat.toml].format(date='"2025-01-01"')
    payload += 'tag = "b"\n'
    with pytest.raises(DecodeError) as exc:
        decode(payload, "toml")
    assert exc.value.cause.startswith("syntax error")


@pytest.mark.parametrize(
    "format, payload",
    [
        (FileFormat.json, '{"title": '),
        (FileFormat.yaml, "title: [unclosed"),
        (FileFormat.toml, "title = "),
    ],
)
def test_syntax_errors(format: FileFormat, payload: str):
    with pytest.raises(DecodeError) as exc:
        decode(payload, format)
    assert exc.value.path == ()
    assert "<root>" in str(exc.value)


def test_bytes_must_be_utf8(demo: Changelog):
    assert decode(encode(demo, "json").encode(), "json") == demo
    with pytest.raises(DecodeError, match="utf-8"):
        decode(b"\xff\xfe", "json")


def test_unsupported_payload_type():
    with pytest.raises(TypeError, match="cannot decode dict"):
        decode({"title": "Demo"}, "json")
