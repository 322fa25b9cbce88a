from __future__ import annotations

import json
import logging
from typing import Any

from changelog_md.serialize.raw import KeyTrackingDict

logger = logging.getLogger(__name__)
JSON_SYNTAX_ERRORS = (json.JSONDecodeError,)


def parse_json_str(payload: str) -> Any:
    return json.loads(payload, object_pairs_hook=KeyTrackingDict.from_pairs)


def dump_json_str(data: object, pretty: bool = True) -> str:
    """Keys keep their insertion order, the payload builder owns the ordering.

    >>> dump_json_str({"b": 1, "a": ["x"]}, pretty=False)
    '{"b":1,"a":["x"]}\\n'
    """
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False) + "\n"
