from __future__ import annotations

from pathlib import Path

from zero_3rdparty.enum_utils import StrEnum

from changelog_md.errors import UnknownFormatError

DEFAULT_STEM = "CHANGELOG"
MARKDOWN_SUFFIX = ".md"


class FileFormat(StrEnum):
    yaml = "yaml"
    toml = "toml"
    json = "json"

    @property
    def extension(self) -> str:
        return _format_extensions[self]

    @classmethod
    def parse(cls, value: str) -> FileFormat:
        """
        >>> FileFormat.parse("YML")
        'yaml'
        """
        value = value.lower().lstrip(".")
        return cls(_aliases.get(value, value))

    @classmethod
    def from_path(cls, path: Path) -> FileFormat:
        """
        >>> FileFormat.from_path(Path("CHANGELOG.Yaml"))
        'yaml'
        """
        if file_format := _suffix_formats.get(path.suffix.lower()):
            return file_format
        raise UnknownFormatError(path)


_aliases = {"yml": "yaml"}
_format_extensions = {
    FileFormat.yaml: "yml",
    FileFormat.toml: "toml",
    FileFormat.json: "json",
}
_suffix_formats = {
    ".yml": FileFormat.yaml,
    ".yaml": FileFormat.yaml,
    ".toml": FileFormat.toml,
    ".json": FileFormat.json,
}
SUPPORTED_SUFFIXES = tuple(_suffix_formats)
