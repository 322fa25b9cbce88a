from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from changelog_md.errors import ChangelogValidationError, FieldPath, Violation
from changelog_md.models import Changelog
from changelog_md.schema import (
    CHANGELOG,
    OBJECT_SPECS,
    FieldKind,
    FieldSpec,
    ObjectSpec,
)

logger = logging.getLogger(__name__)


def _check_string(spec: FieldSpec, value: Any, path: FieldPath) -> list[Violation]:
    if value is None:
        if spec.nullable:
            return []
        return [Violation(path, "expected a string, got null")]
    if not isinstance(value, str):
        return [Violation(path, f"expected a string, got {type(value).__name__}")]
    if spec.non_empty and not value.strip():
        return [Violation(path, "must not be empty")]
    if spec.pattern and not re.match(spec.pattern, value):
        return [Violation(path, f"'{value}' does not match {spec.pattern}")]
    return []


def _check_string_list(value: Any, path: FieldPath) -> list[Violation]:
    if value is None:
        return []
    if not isinstance(value, list):
        return [Violation(path, f"expected a list, got {type(value).__name__}")]
    violations = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str):
            violations.append(
                Violation(
                    (*path, index), f"expected a string, got {type(entry).__name__}"
                )
            )
        elif not entry.strip():
            violations.append(Violation((*path, index), "empty change entry"))
    return violations


def _check_map(spec: FieldSpec, value: Any, path: FieldPath) -> list[Violation]:
    if not isinstance(value, Mapping):
        return [Violation(path, f"expected a mapping, got {type(value).__name__}")]
    violations = []
    item_spec = OBJECT_SPECS[spec.ref]
    for key, item in value.items():
        if not isinstance(key, str) or not key.strip():
            violations.append(Violation((*path, str(key)), "empty version key"))
            continue
        violations.extend(check_object(item_spec, item, (*path, key)))
    return violations


def _check_field(spec: FieldSpec, value: Any, path: FieldPath) -> list[Violation]:
    match spec.kind:
        case FieldKind.STRING:
            return _check_string(spec, value, path)
        case FieldKind.STRING_LIST:
            return _check_string_list(value, path)
        case FieldKind.OBJECT:
            return check_object(OBJECT_SPECS[spec.ref], value, path)
        case FieldKind.MAP:
            return _check_map(spec, value, path)
    raise NotImplementedError(spec.kind)


def check_object(
    spec: ObjectSpec, payload: Any, path: FieldPath = ()
) -> list[Violation]:
    """Collects every violation instead of stopping at the first one."""
    if not isinstance(payload, Mapping):
        return [
            Violation(
                path, f"expected a {spec.name} mapping, got {type(payload).__name__}"
            )
        ]
    violations: list[Violation] = []
    for key in payload:
        if spec.field(key) is None:
            violations.append(Violation((*path, key), f"unknown field in {spec.name}"))
    for field in spec.fields:
        if field.name not in payload:
            if field.required:
                violations.append(Violation((*path, field.name), "missing field"))
            continue
        violations.extend(_check_field(field, payload[field.name], (*path, field.name)))
    return violations


def validate_payload(payload: Any) -> list[Violation]:
    return check_object(CHANGELOG, payload)


def validate_changelog(changelog: Changelog) -> list[Violation]:
    violations = validate_payload(changelog.model_dump())
    for violation in violations:
        logger.debug(f"changelog violation: {violation}")
    return violations


def check_changelog(changelog: Changelog) -> Changelog:
    """Raises ChangelogValidationError listing every violation."""
    if violations := validate_changelog(changelog):
        raise ChangelogValidationError(violations)
    return changelog
