"""CLI options and arguments for changelog-md commands."""

import typer

# Argument definitions
argument_category = typer.Argument(..., help="Category of the change")
argument_text = typer.Argument(..., help="Change entry, markdown is kept as written")
argument_version = typer.Argument(..., help="Version identifier, e.g. 1.2.0")
argument_description = typer.Argument(
    None, help="Optional description shown below the version heading"
)
argument_reason = typer.Argument(None, help="Why the version was yanked")
argument_destination = typer.Argument(
    None, help="Destination path, defaults to stdout or a sibling of the source"
)

# Option definitions
option_changelog = typer.Option(
    None,
    "-c",
    "--changelog",
    envvar="CHANGELOG_MD_SOURCE",
    help="Changelog source (yml, yaml, toml or json), auto-detected if not provided",
)

option_log_level = typer.Option(
    None,
    "--log-level",
    envvar="CHANGELOG_MD_LOG_LEVEL",
    help="Log level, e.g. DEBUG, INFO or WARNING",
)

option_compact = typer.Option(
    False,
    "--compact",
    help="Write the changelog without the human friendly layout",
)

option_format = typer.Option(
    None,
    "-f",
    "--format",
    help="Changelog format, uses CHANGELOG_MD_DEFAULT_FORMAT when not set",
)

option_repository = typer.Option(
    None,
    "--repository",
    help="Repository url used for the revision links, read from the git remote if not set",
)

option_tag = typer.Option(
    None, "--tag", help="Git tag of the release, defaults to the version"
)

option_date = typer.Option(
    None, "--date", help="Release date as YYYY-MM-DD, defaults to today"
)

option_force = typer.Option(False, "--force", help="Overwrite an existing destination")
