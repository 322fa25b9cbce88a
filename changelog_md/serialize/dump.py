from __future__ import annotations

import logging
from typing import Any, Callable

from changelog_md.constants import FileFormat
from changelog_md.models import Changelog, Version
from changelog_md.serialize.json_serialize import dump_json_str
from changelog_md.serialize.toml_serialize import dump_toml_str
from changelog_md.serialize.yaml_serialize import dump_yaml_str

logger = logging.getLogger(__name__)

_payload_dumpers: dict[FileFormat, Callable[[Any, bool], str]] = {
    FileFormat.json: dump_json_str,
    FileFormat.yaml: dump_yaml_str,
    FileFormat.toml: dump_toml_str,
}


def version_payload(version: Version) -> dict[str, Any]:
    payload: dict[str, Any] = {"tag": version.tag, "date": version.date}
    if version.description is not None:
        payload["description"] = version.description
    if version.yanked is not None:
        payload["yanked"] = version.yanked
    payload |= version.categories_dict()
    return payload


def as_payload(changelog: Changelog) -> dict[str, Any]:
    """Plain data in schema order: absent values and empty categories are left out,
    versions are listed newest first."""
    return {
        "title": changelog.title,
        "description": changelog.description,
        "repository": changelog.repository,
        "unreleased": changelog.unreleased.categories_dict(),
        "versions": {
            name: version_payload(version)
            for name, version in changelog.sorted_versions()
        },
    }


def encode(
    changelog: Changelog, format: FileFormat | str, pretty: bool = True
) -> str:
    dumper = _payload_dumpers[FileFormat(format)]
    return dumper(as_payload(changelog), pretty)
