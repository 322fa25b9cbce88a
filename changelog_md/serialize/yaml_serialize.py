from __future__ import annotations

import logging
from io import StringIO
from typing import Any

import yaml
from yaml.constructor import ConstructorError

from changelog_md.serialize.raw import KeyTrackingDict

logger = logging.getLogger(__name__)
YAML_SYNTAX_ERRORS = (yaml.YAMLError,)


class ChangelogLoader(yaml.SafeLoader):
    """Every plain scalar except null stays a string, so `date: 2025-02-24` and
    `tag: 1.0` keep their spelling. Duplicate keys are tracked, not dropped."""


class ChangelogDumper(yaml.SafeDumper):
    pass


def _construct_plain(loader: ChangelogLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


def _construct_mapping(
    loader: ChangelogLoader, node: yaml.MappingNode
) -> KeyTrackingDict:
    loader.flatten_mapping(node)
    mapping = KeyTrackingDict()
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            raise ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                "expected a scalar key",
                key_node.start_mark,
            )
        mapping.track(key_node.value, loader.construct_object(value_node, deep=True))
    return mapping


for _tag in ("bool", "int", "float", "timestamp"):
    ChangelogLoader.add_constructor(f"tag:yaml.org,2002:{_tag}", _construct_plain)
ChangelogLoader.add_constructor("tag:yaml.org,2002:map", _construct_mapping)


def _str_presenter(dumper: yaml.SafeDumper, data: str):
    if "\n" in data:  # check for multiline string
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


ChangelogDumper.add_representer(str, _str_presenter)


def parse_yaml_str(payload: str) -> Any:
    return yaml.load(StringIO(payload), Loader=ChangelogLoader)


def dump_yaml_str(
    data: object,
    pretty: bool = True,
    width=1000,
    allow_unicode: bool = True,
) -> str:
    s = StringIO()
    yaml.dump(
        data,
        s,
        Dumper=ChangelogDumper if pretty else yaml.SafeDumper,
        default_flow_style=not pretty,
        width=width,
        allow_unicode=allow_unicode,
        sort_keys=False,
    )
    return s.getvalue()
