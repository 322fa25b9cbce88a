from __future__ import annotations

import logging
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import Item

logger = logging.getLogger(__name__)
TOML_SYNTAX_ERRORS = (TOMLKitError,)


def parse_toml_str(payload: str) -> dict[str, Any]:
    """TOML rejects duplicate keys on its own, no tracking needed."""
    return tomlkit.loads(payload).unwrap()


def _can_use_multiline(value: str) -> bool:
    # a newline right after the opening quotes is trimmed by TOML readers
    return (
        "\n" in value
        and not value.startswith("\n")
        and '"' not in value
        and "\r" not in value
    )


def _as_item(value: Any, pretty: bool) -> Item:
    if isinstance(value, dict):
        table = tomlkit.table()
        for key, child in value.items():
            table.add(key, _as_item(child, pretty))
        return table
    if isinstance(value, list):
        array = tomlkit.array()
        for child in value:
            array.append(child)
        if pretty and len(value) > 1:
            array.multiline(True)
        return array
    if pretty and isinstance(value, str) and _can_use_multiline(value):
        return tomlkit.string(value, multiline=True)
    return tomlkit.item(value)


def dump_toml_str(data: dict[str, Any], pretty: bool = True) -> str:
    """Dates arrive as strings and are written as TOML strings, never TOML dates."""
    document = tomlkit.document()
    for key, value in data.items():
        document.add(key, _as_item(value, pretty))
    return tomlkit.dumps(document)
