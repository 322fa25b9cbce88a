"""Field level description of the changelog document.

The validator walks payloads with these specs and `changelog_json_schema`
exports them, keep both in mind when adding a field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from zero_3rdparty.enum_utils import StrEnum

from changelog_md.models import DATE_PATTERN

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"
DEFAULT_SCHEMA_ID = "https://changelog-md.github.io/1.0/changelog"


class FieldKind(StrEnum):
    STRING = "string"
    STRING_LIST = "string_list"
    OBJECT = "object"
    MAP = "map"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    description: str
    required: bool = False
    non_empty: bool = False
    nullable: bool = False
    pattern: str | None = None
    ref: str = ""

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"description": self.description}
        match self.kind:
            case FieldKind.STRING:
                schema["type"] = ["string", "null"] if self.nullable else "string"
                if self.pattern:
                    schema["pattern"] = self.pattern
                if self.nullable:
                    schema["default"] = None
            case FieldKind.STRING_LIST:
                schema["type"] = "array"
                schema["items"] = {"type": "string"}
            case FieldKind.OBJECT:
                schema["allOf"] = [{"$ref": f"#/definitions/{self.ref}"}]
            case FieldKind.MAP:
                schema["type"] = "object"
                schema["additionalProperties"] = {"$ref": f"#/definitions/{self.ref}"}
        return schema


@dataclass(frozen=True)
class ObjectSpec:
    name: str
    description: str
    fields: tuple[FieldSpec, ...]

    @property
    def required(self) -> list[str]:
        return [field.name for field in self.fields if field.required]

    def field(self, name: str) -> FieldSpec | None:
        return next((field for field in self.fields if field.name == name), None)

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "description": self.description,
            "type": "object",
            "properties": {field.name: field.json_schema() for field in self.fields},
            "additionalProperties": False,
        }
        if required := self.required:
            schema["required"] = required
        return schema


CHANGES_FIELDS = (
    FieldSpec(
        "added", FieldKind.STRING_LIST, "New additions made in this version"
    ),
    FieldSpec("changed", FieldKind.STRING_LIST, "Changes to existing features"),
    FieldSpec("deprecated", FieldKind.STRING_LIST, "Deprecations"),
    FieldSpec("removed", FieldKind.STRING_LIST, "Changes that removed a feature"),
    FieldSpec("fixed", FieldKind.STRING_LIST, "Fixes to existing features"),
    FieldSpec("security", FieldKind.STRING_LIST, "Security changes"),
)
CHANGES = ObjectSpec(
    "Changes", "Any changes made in this version", fields=CHANGES_FIELDS
)
VERSION = ObjectSpec(
    "Version",
    "A released version",
    fields=(
        FieldSpec(
            "tag",
            FieldKind.STRING,
            "Git tag associated with this version",
            required=True,
            non_empty=True,
        ),
        FieldSpec(
            "date",
            FieldKind.STRING,
            "Date the version was released as an ISO Date String",
            required=True,
            non_empty=True,
            pattern=DATE_PATTERN,
        ),
        FieldSpec(
            "description",
            FieldKind.STRING,
            "Optional Markdown description of this version",
            nullable=True,
        ),
        FieldSpec(
            "yanked",
            FieldKind.STRING,
            "If a version was yanked, the reason why",
            nullable=True,
        ),
        *CHANGES_FIELDS,
    ),
)
CHANGELOG = ObjectSpec(
    "Changelog",
    "A user-friendly format for writing Changelogs in a verifiable and more git-friendly format",
    fields=(
        FieldSpec(
            "title", FieldKind.STRING, "Your changelog's heading", required=True
        ),
        FieldSpec(
            "description",
            FieldKind.STRING,
            "A description of your project. It's recommended to note whether you follow semantic versioning",
            required=True,
        ),
        FieldSpec(
            "repository",
            FieldKind.STRING,
            "Your source repository link",
            required=True,
        ),
        FieldSpec(
            "unreleased",
            FieldKind.OBJECT,
            "Currently unreleased changes",
            required=True,
            ref=CHANGES.name,
        ),
        FieldSpec(
            "versions",
            FieldKind.MAP,
            "Releases keyed by their version",
            required=True,
            ref=VERSION.name,
        ),
    ),
)
OBJECT_SPECS: dict[str, ObjectSpec] = {
    spec.name: spec for spec in (CHANGELOG, CHANGES, VERSION)
}


def changelog_json_schema(schema_id: str = DEFAULT_SCHEMA_ID) -> dict[str, Any]:
    schema: dict[str, Any] = {"$schema": JSON_SCHEMA_DRAFT, "$id": schema_id}
    schema["title"] = CHANGELOG.name
    schema |= CHANGELOG.json_schema()
    schema["definitions"] = {
        spec.name: spec.json_schema() for spec in (CHANGES, VERSION)
    }
    return schema
