"""Status range expressions such as ``200-299,400-499``."""

import re

from pm2md.errors import StatusRangeError
from pm2md.parser.base import StatusRange

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_status_ranges(expr: str) -> list[StatusRange] | None:
    """Parse a comma-separated list of status ranges.

    Each range is either a single code (``200``) or a start and end joined
    by a dash (``200-299``). An empty expression returns None, meaning no
    filtering. Examples: "200", "200-299", "200-299,400-499", "200-200".
    """
    if not expr:
        return None

    ranges: list[StatusRange] = []
    for token in expr.split(","):
        start_and_end = token.split("-")
        if len(start_and_end) > 2:
            raise StatusRangeError(
                f"Invalid status format. There should be zero or one dashes in {token}"
            )
        start = _parse_int(start_and_end[0])
        end = _parse_int(start_and_end[1]) if len(start_and_end) > 1 else start
        ranges.append(StatusRange(start=start, end=end))
    return ranges


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise StatusRangeError(
            f"Invalid status range format. Expected an integer, got {text!r}"
        )
    return int(text)
