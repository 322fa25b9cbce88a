# CLI interface domain

from changelog_md.cli.commands import app


def main():
    from changelog_md.cli.typer_command import configure_logging

    configure_logging(app)
    app()


__all__ = ["main", "app"]
