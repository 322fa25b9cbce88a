from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, TypeAlias

FieldPath: TypeAlias = tuple[str | int, ...]
_identifier = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def format_path(path: Iterable[str | int]) -> str:
    """
    >>> format_path(("versions", "1.0.0", "date"))
    'versions["1.0.0"].date'
    >>> format_path(("unreleased", "added", 2))
    'unreleased.added[2]'
    >>> format_path(())
    '<root>'
    """
    text = ""
    for part in path:
        if isinstance(part, int):
            text += f"[{part}]"
        elif _identifier.match(part):
            text += f".{part}" if text else part
        else:
            text += f'["{part}"]'
    return text or "<root>"


@dataclass(frozen=True)
class Violation:
    path: FieldPath
    message: str

    @property
    def location(self) -> str:
        return format_path(self.path)

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class ChangelogError(Exception):
    """Base for every error the changelog core reports to its caller."""


class DecodeError(ChangelogError):
    def __init__(
        self,
        format: str,
        path: FieldPath,
        cause: str,
        violations: Sequence[Violation] = (),
    ):
        self.format = format
        self.path = path
        self.cause = cause
        self.violations = list(violations) or [Violation(path, cause)]
        super().__init__(f"invalid {format} changelog @ {format_path(path)}: {cause}")

    @classmethod
    def from_violations(
        cls, format: str, violations: Sequence[Violation]
    ) -> DecodeError:
        first = violations[0]
        return cls(format, first.path, first.message, violations)


class ChangelogValidationError(ChangelogError):
    def __init__(self, violations: Sequence[Violation]):
        if not violations:
            raise ValueError("no violations to report")
        self.violations = list(violations)
        lines = "\n".join(f"  {violation}" for violation in self.violations)
        super().__init__(f"{len(self.violations)} issue(s) found:\n{lines}")


class DuplicateVersion(ChangelogError):
    def __init__(self, version: str):
        self.version = version
        super().__init__(f"version {version} already exists")


class UnknownVersion(ChangelogError):
    def __init__(self, version: str, known: Sequence[str] = ()):
        self.version = version
        self.known = list(known)
        super().__init__(f"version {version} not found, known versions: {self.known}")


class IoFailure(ChangelogError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class UnknownFormatError(IoFailure):
    def __init__(self, path: Path):
        super().__init__(
            path, f"unable to infer a changelog format from suffix '{path.suffix}'"
        )


class RemoteURLNotFound(Exception):
    def __init__(self, reason: str, path: Path):
        self.reason = reason
        self.path = path
        super().__init__(f"Could not find remote URL for git repo @ {path}: {reason}")
