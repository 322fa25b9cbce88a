from __future__ import annotations

import logging
from functools import singledispatch
from typing import Any, Callable

from pydantic import ValidationError

from changelog_md.constants import FileFormat
from changelog_md.errors import DecodeError, Violation
from changelog_md.models import Changelog
from changelog_md.serialize.json_serialize import JSON_SYNTAX_ERRORS, parse_json_str
from changelog_md.serialize.raw import find_duplicate_keys, normalize_raw
from changelog_md.serialize.toml_serialize import TOML_SYNTAX_ERRORS, parse_toml_str
from changelog_md.serialize.yaml_serialize import YAML_SYNTAX_ERRORS, parse_yaml_str

logger = logging.getLogger(__name__)

_format_parsers: dict[FileFormat, Callable[[str], Any]] = {
    FileFormat.json: parse_json_str,
    FileFormat.yaml: parse_yaml_str,
    FileFormat.toml: parse_toml_str,
}
_syntax_errors = JSON_SYNTAX_ERRORS + YAML_SYNTAX_ERRORS + TOML_SYNTAX_ERRORS


def parse_raw(payload: str, format: FileFormat | str) -> Any:
    """Raises DecodeError for broken syntax or duplicated keys."""
    format = FileFormat(format)
    parser = _format_parsers[format]
    try:
        raw = parser(payload)
    except _syntax_errors as e:
        raise DecodeError(format, (), f"syntax error: {e}") from e
    if duplicates := find_duplicate_keys(raw):
        raise DecodeError.from_violations(format, duplicates)
    return normalize_raw(raw)


def as_violations(error: ValidationError) -> list[Violation]:
    return [
        Violation(tuple(details["loc"]), details["msg"]) for details in error.errors()
    ]


def parse_changelog(raw: Any, format: FileFormat | str) -> Changelog:
    try:
        return Changelog.model_validate(raw)
    except ValidationError as e:
        raise DecodeError.from_violations(FileFormat(format), as_violations(e)) from e


@singledispatch
def decode(payload: object, format: FileFormat | str) -> Changelog:
    raise TypeError(f"cannot decode {type(payload).__name__}")


@decode.register
def _decode_str(payload: str, format: FileFormat | str) -> Changelog:
    raw = parse_raw(payload, format)
    return parse_changelog(raw, format)


@decode.register
def _decode_bytes(payload: bytes, format: FileFormat | str) -> Changelog:
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(FileFormat(format), (), f"not valid utf-8: {e}") from e
    return decode(text, format)
