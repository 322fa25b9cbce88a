"""CLI commands for changelog-md."""

import logging
from pathlib import Path

import typer
from typer import Typer
from zero_3rdparty.file_utils import ensure_parents_write_text

from changelog_md.cli.options import (
    argument_category,
    argument_description,
    argument_destination,
    argument_reason,
    argument_text,
    argument_version,
    option_changelog,
    option_compact,
    option_date,
    option_force,
    option_format,
    option_log_level,
    option_repository,
    option_tag,
)
from changelog_md.cli.typer_command import exit_on_changelog_error, set_log_level
from changelog_md.constants import DEFAULT_STEM, MARKDOWN_SUFFIX, FileFormat
from changelog_md.errors import IoFailure
from changelog_md.git_url import default_repository
from changelog_md.models import ChangeCategory, Changelog
from changelog_md.operations import add_change, release, yank
from changelog_md.render import render
from changelog_md.schema import changelog_json_schema
from changelog_md.serialize.json_serialize import dump_json_str
from changelog_md.settings import ChangelogSettings, changelog_settings
from changelog_md.storage import (
    edit_changelog,
    find_source,
    read_changelog,
    write_changelog,
)
from changelog_md.validator import check_changelog

logger = logging.getLogger(__name__)
app = Typer(
    name="changelog-md",
    help="Keep a structured changelog and render it to Markdown",
    no_args_is_help=True,
)


def settings_from(ctx: typer.Context) -> ChangelogSettings:
    settings = ctx.obj
    assert isinstance(settings, ChangelogSettings), "settings not initialized"
    return settings


def require_source(settings: ChangelogSettings) -> Path:
    cwd = Path.cwd()
    source = settings.resolve_source(cwd)
    if source is None:
        raise IoFailure(cwd, "Unable to find a CHANGELOG source file")
    return source


def _format_or_default(settings: ChangelogSettings, format: str | None) -> FileFormat:
    return FileFormat.parse(format) if format else settings.default_format


@app.callback()
def main(
    ctx: typer.Context,
    changelog: Path | None = option_changelog,
    log_level: str | None = option_log_level,
    compact: bool = option_compact,
):
    """changelog-md: keep a structured changelog and render it to Markdown"""
    settings = changelog_settings(
        source=changelog, log_level=log_level, pretty=False if compact else None
    )
    set_log_level(settings.log_level)
    ctx.obj = settings


@app.command()
@exit_on_changelog_error
def init(
    ctx: typer.Context,
    format: str | None = option_format,
    repository: str | None = option_repository,
):
    """Generate an initial changelog"""
    settings = settings_from(ctx)
    cwd = Path.cwd()
    file_format = _format_or_default(settings, format)
    path = settings.source or cwd / f"{DEFAULT_STEM}.{file_format.extension}"
    if path.exists():
        raise IoFailure(path, "already exists")
    if settings.source is None and (existing := find_source(cwd)):
        raise IoFailure(existing, "already exists")
    repository = repository or default_repository(cwd, Changelog.DEFAULT_REPOSITORY)
    logger.info(f"Writing initial {path}")
    write_changelog(path, Changelog.default(repository), file_format, settings.pretty)


@app.command()
@exit_on_changelog_error
def add(
    ctx: typer.Context,
    category: ChangeCategory = argument_category,
    text: str = argument_text,
):
    """Add an unreleased change"""
    settings = settings_from(ctx)
    with edit_changelog(require_source(settings), pretty=settings.pretty) as changelog:
        add_change(changelog, category, text)


@app.command(name="release")
@exit_on_changelog_error
def release_command(
    ctx: typer.Context,
    version: str = argument_version,
    description: str | None = argument_description,
    tag: str | None = option_tag,
    date: str | None = option_date,
):
    """Move the unreleased changes into a new version"""
    settings = settings_from(ctx)
    with edit_changelog(require_source(settings), pretty=settings.pretty) as changelog:
        release(changelog, version, tag=tag, date=date, description=description)


@app.command(name="yank")
@exit_on_changelog_error
def yank_command(
    ctx: typer.Context,
    version: str = argument_version,
    reason: str | None = argument_reason,
):
    """Mark a released version as yanked"""
    settings = settings_from(ctx)
    with edit_changelog(require_source(settings), pretty=settings.pretty) as changelog:
        yank(changelog, version, reason)


@app.command()
@exit_on_changelog_error
def convert(
    ctx: typer.Context,
    format: str | None = option_format,
    force: bool = option_force,
):
    """Convert the changelog source to another format"""
    settings = settings_from(ctx)
    source = require_source(settings)
    file_format = _format_or_default(settings, format)
    destination = source.with_suffix(f".{file_format.extension}")
    if destination.exists() and not force:
        raise IoFailure(destination, "already exists, use --force to overwrite")
    changelog = check_changelog(read_changelog(source))
    logger.info(f"Converting {source} to {destination}")
    write_changelog(destination, changelog, file_format, settings.pretty)


@app.command()
@exit_on_changelog_error
def validate(ctx: typer.Context):
    """Validate the changelog source"""
    source = require_source(settings_from(ctx))
    check_changelog(read_changelog(source))
    typer.echo("No issues found")


@app.command(name="render")
@exit_on_changelog_error
def render_command(
    ctx: typer.Context,
    destination: Path | None = argument_destination,
):
    """Render the changelog to Markdown, next to the source unless a destination is given"""
    source = require_source(settings_from(ctx))
    changelog = check_changelog(read_changelog(source))
    path = destination or source.with_suffix(MARKDOWN_SUFFIX)
    logger.info(f"Rendering {source} to {path}")
    ensure_parents_write_text(path, render(changelog))


@app.command()
def schema(
    ctx: typer.Context,
    destination: Path | None = argument_destination,
):
    """Print or write the JSON schema of the changelog"""
    settings = settings_from(ctx)
    text = dump_json_str(changelog_json_schema(settings.schema_id))
    if destination is None:
        typer.echo(text, nl=False)
        return
    ensure_parents_write_text(destination, text)
    logger.info(f"Wrote schema to {destination}")
