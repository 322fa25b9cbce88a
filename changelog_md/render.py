from __future__ import annotations

import logging

from changelog_md.models import Changelog, Changes, Version

logger = logging.getLogger(__name__)
UNRELEASED_HEADING = "Unreleased"
REVISIONS_HEADING = "Revisions"
UNRELEASED_LABEL = "unreleased"
HEAD_REF = "HEAD"


def _bullet(entry: str) -> str:
    # continuation lines stay inside the list item
    return "- " + entry.replace("\n", "\n  ")


def changes_lines(changes: Changes) -> list[str]:
    lines: list[str] = []
    for category, entries in changes.iter_categories():
        lines.extend([f"### {category.heading}", ""])
        lines.extend(_bullet(entry) for entry in entries)
        lines.append("")
    return lines


def version_heading(name: str, version: Version) -> str:
    heading = f"## {name} - {version.date}"
    if version.is_yanked:
        heading += f" [YANKED] {version.yanked}"
    return heading


def version_lines(name: str, version: Version) -> list[str]:
    lines = [version_heading(name, version), ""]
    if version.description:
        lines.extend([version.description.strip(), ""])
    lines.extend(changes_lines(version))
    return lines


def revision_links(changelog: Changelog) -> list[tuple[str, str]]:
    """Each version compares against the one released before it, the oldest links to its own history."""
    repository = changelog.repository.rstrip("/")
    versions = changelog.sorted_versions()
    if not versions:
        return [(UNRELEASED_LABEL, f"{repository}/commits/")]
    _, newest = versions[0]
    links = [(UNRELEASED_LABEL, f"{repository}/compare/{newest.tag}...{HEAD_REF}")]
    for (name, version), (_, previous) in zip(versions, versions[1:]):
        links.append((name, f"{repository}/compare/{previous.tag}..{version.tag}"))
    oldest_name, oldest = versions[-1]
    links.append((oldest_name, f"{repository}/commits/{oldest.tag}"))
    return links


def render(changelog: Changelog) -> str:
    lines = [f"# {changelog.title}", ""]
    if description := changelog.description.rstrip():
        lines.extend([description, ""])
    if not changelog.unreleased.is_empty:
        lines.extend([f"## {UNRELEASED_HEADING}", ""])
        lines.extend(changes_lines(changelog.unreleased))
    for name, version in changelog.sorted_versions():
        lines.extend(version_lines(name, version))
    lines.extend([f"# {REVISIONS_HEADING}", ""])
    lines.extend(f"- [{label}] <{url}>" for label, url in revision_links(changelog))
    return "\n".join(lines) + "\n"
