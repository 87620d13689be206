"""
Route-parameter extraction for `/users/<id>`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

USERS_PREFIX = "/users/"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Wider than a signed 64-bit integer counts as malformed, not as a lookup miss.
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


@dataclass(frozen=True)
class PathMatch:
    matched: bool
    segment: str = ""


def match_prefix(path: str, prefix: str) -> PathMatch:
    """
    Match `path` against `prefix` and extract the first segment after it.

    Anything after that segment is ignored, so `/users/1/extra` and
    `/users/1/` both yield segment "1". `/users/` yields an empty segment.
    """
    if not path.startswith(prefix):
        return PathMatch(matched=False)
    rest = path[len(prefix):]
    return PathMatch(matched=True, segment=rest.split("/", 1)[0])


def parse_user_id(segment: str) -> int | None:
    # int() alone would also accept whitespace, underscores and non-ASCII digits.
    if not _INTEGER_RE.fullmatch(segment):
        return None
    value = int(segment)
    if not _MIN_ID <= value <= _MAX_ID:
        return None
    return value
