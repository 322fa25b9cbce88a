from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from changelog_md.constants import SUPPORTED_SUFFIXES, FileFormat
from changelog_md.errors import IoFailure
from changelog_md.models import Changelog
from changelog_md.serialize import decode, encode
from changelog_md.validator import check_changelog

logger = logging.getLogger(__name__)
SOURCE_STEM = "changelog"


def find_source(directory: Path) -> Path | None:
    """First `changelog.<yml|yaml|toml|json>` in the directory, stem matched case-insensitively."""
    if not directory.is_dir():
        return None
    for path in sorted(directory.iterdir()):
        if (
            path.is_file()
            and path.stem.lower() == SOURCE_STEM
            and path.suffix.lower() in SUPPORTED_SUFFIXES
        ):
            return path
    return None


def read_changelog(path: Path, format: FileFormat | str | None = None) -> Changelog:
    format = FileFormat(format) if format else FileFormat.from_path(path)
    try:
        payload = path.read_bytes()
    except OSError as e:
        raise IoFailure(path, str(e)) from e
    return decode(payload, format)


def _target_mode(path: Path) -> int:
    """Mode of the existing file, otherwise what a plain `open(path, "w")` would get."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(path: Path, text: str) -> None:
    """The destination is either left untouched or fully replaced, keeping its mode."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = _target_mode(path)
        tmp_fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=".tmp_", suffix=path.suffix
        )
    except OSError as e:
        raise IoFailure(path, str(e)) from e
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise IoFailure(path, str(e)) from e
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_changelog(
    path: Path,
    changelog: Changelog,
    format: FileFormat | str | None = None,
    pretty: bool = True,
) -> None:
    format = FileFormat(format) if format else FileFormat.from_path(path)
    write_text_atomic(path, encode(changelog, format, pretty=pretty))
    logger.info(f"wrote {format} changelog to {path}")


class edit_changelog:
    """Yields the decoded changelog, writes it back only when the block succeeds.

    >>> from pathlib import Path
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> path = Path(tmp.name) / "CHANGELOG.json"
    >>> write_changelog(path, Changelog.default())
    >>> with edit_changelog(path) as changelog:
    ...     changelog.title = "Edited"
    >>> read_changelog(path).title
    'Edited'
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        path: Path,
        format: FileFormat | str | None = None,
        pretty: bool = True,
    ):
        self.path = path
        self.format = FileFormat(format) if format else FileFormat.from_path(path)
        self.pretty = pretty

    def __enter__(self) -> Changelog:
        self.changelog = check_changelog(read_changelog(self.path, self.format))
        return self.changelog

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val:
            return False
        write_changelog(self.path, self.changelog, self.format, pretty=self.pretty)
