from pathlib import Path
from typing import ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from changelog_md.constants import FileFormat
from changelog_md.schema import DEFAULT_SCHEMA_ID
from changelog_md.storage import find_source


class ChangelogSettings(BaseSettings):
    ENV_PREFIX: ClassVar[str] = "CHANGELOG_MD_"
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    source: Path | None = Field(
        default=None,
        description="Changelog file to use, auto-detected in the working directory if not set.",
    )
    default_format: FileFormat = Field(
        default=FileFormat.yaml,
        description="Format used by `init` and `convert` when none is given.",
    )
    pretty: bool = True
    log_level: str = "INFO"
    schema_id: str = DEFAULT_SCHEMA_ID

    @field_validator("default_format", mode="before")
    @classmethod
    def parse_format(cls, value: object) -> object:
        if isinstance(value, str):
            return FileFormat.parse(value)
        return value

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()

    def resolve_source(self, cwd: Path) -> Path | None:
        if self.source:
            return self.source if self.source.is_absolute() else cwd / self.source
        return find_source(cwd)


def changelog_settings(
    *,
    source: Path | None = None,
    log_level: str | None = None,
    pretty: bool | None = None,
) -> ChangelogSettings:
    # CLI arg -> env var -> default
    settings = ChangelogSettings()
    if source is not None:
        settings.source = source
    if log_level is not None:
        settings.log_level = log_level.upper()
    if pretty is not None:
        settings.pretty = pretty
    return settings
