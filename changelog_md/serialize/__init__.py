from changelog_md.serialize.dump import as_payload, encode, version_payload
from changelog_md.serialize.parse import decode, parse_changelog, parse_raw

__all__ = [
    "as_payload",
    "decode",
    "encode",
    "parse_changelog",
    "parse_raw",
    "version_payload",
]
