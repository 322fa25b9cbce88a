import random
import re
from pathlib import Path
from typing import Protocol

import pytest
from zero_3rdparty.str_utils import ensure_prefix

from changelog_md.models import ChangeCategory, Changelog, Changes, Version

TEST_DATA_PATH = Path(__file__).parent / "testdata"
DEMO_REPOSITORY = "https://github.com/me/demo"


class LocalRegressionCheck(Protocol):
    def __call__(self, text: str, extension: str): ...


@pytest.fixture()
def file_regression_testdata(file_regression, request) -> LocalRegressionCheck:
    basename = re.sub(r"[\W]", "_", request.node.name)

    def local_regression_check(text: str, extension: str):
        dotted_extension = ensure_prefix(extension, ".")
        path = TEST_DATA_PATH / f"{basename}{dotted_extension}"
        return file_regression.check(text, fullpath=path)

    return local_regression_check


def demo_changelog() -> Changelog:
    return Changelog(
        title="Demo",
        description="All notable changes.",
        repository=DEMO_REPOSITORY,
        unreleased=Changes(added=["First addition"]),
        versions={
            "1.0.0": Version(tag="1.0.0", date="2025-02-24", added=["Everything"])
        },
    )


@pytest.fixture()
def demo() -> Changelog:
    return demo_changelog()


def full_changelog() -> Changelog:
    return Changelog(
        title="Changelog",
        description=Changelog.DEFAULT_DESCRIPTION,
        repository="https://github.com/kageurufu/changelog-md",
        unreleased=Changes(
            changed=["Render links with `<url>`"],
            fixed=["Multi line entries\nkeep their indentation"],
        ),
        versions={
            "0.1.0": Version(
                tag="v0.1.0",
                date="2024-11-02",
                description="First public release",
                added=["yaml, toml and json sources", "Markdown rendering"],
            ),
            "0.10.0": Version(
                tag="v0.10.0",
                date="2025-03-01",
                removed=["Python 3.9 support"],
                security=["Strip credentials from remote urls"],
            ),
            "0.2.0-rc.1": Version(
                tag="v0.2.0-rc.1",
                date="2024-12-24",
                yanked="Broken toml output",
                fixed=["Quoting of dates"],
            ),
            "0.2.0": Version(
                tag="v0.2.0",
                date="2025-01-05",
                changed=["Versions sort by semver"],
                deprecated=["The `--source` flag"],
            ),
        },
    )


@pytest.fixture()
def full() -> Changelog:
    return full_changelog()


_words = [
    "add",
    "parser",
    "release",
    "fix",
    "unicode ✓",
    "quote's",
    'double "quoted"',
    "colon: value",
    "# hash",
    "- dash",
    "[link](https://example.com)",
    "1.0",
    "true",
    "null",
    "2025-01-01",
]


def _random_text(rng: random.Random) -> str:
    text = " ".join(rng.choice(_words) for _ in range(rng.randint(1, 5)))
    if rng.random() < 0.15:
        text += "\nsecond line"
    return text


def _random_changes(rng: random.Random) -> dict[str, list[str]]:
    return {
        category.value: [_random_text(rng) for _ in range(rng.randint(1, 3))]
        for category in ChangeCategory
        if rng.random() < 0.4
    }


def _random_version_name(rng: random.Random) -> str:
    if rng.random() < 0.1:
        return rng.choice(["nightly", "legacy", "beta"])
    name = f"{rng.randint(0, 3)}.{rng.randint(0, 12)}.{rng.randint(0, 20)}"
    if rng.random() < 0.2:
        name += f"-rc.{rng.randint(1, 3)}"
    return name


def _random_date(rng: random.Random) -> str:
    return f"{rng.randint(2000, 2030)}-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"


def random_changelog(seed: int) -> Changelog:
    rng = random.Random(seed)
    versions: dict[str, Version] = {}
    for _ in range(rng.randint(0, 6)):
        name = _random_version_name(rng)
        versions[name] = Version(
            tag=rng.choice([name, f"v{name}"]),
            date=_random_date(rng),
            description=_random_text(rng) if rng.random() < 0.3 else None,
            yanked=_random_text(rng) if rng.random() < 0.2 else None,
            **_random_changes(rng),
        )
    return Changelog(
        title=_random_text(rng),
        description=_random_text(rng),
        repository=f"https://github.com/org/{rng.choice(_words[:4])}",
        unreleased=Changes(**_random_changes(rng)),
        versions=versions,
    )

