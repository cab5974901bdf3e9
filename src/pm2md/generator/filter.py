"""Sample response filtering by HTTP status code."""

import logging
from typing import Any

from pm2md.parser.base import StatusRange
from pm2md.parser.collection import expect_list, expect_mapping, expect_number

logger = logging.getLogger(__name__)


def filter_responses_by_status(
    collection: dict[str, Any], status_ranges: list[StatusRange] | None
) -> None:
    """Remove all sample responses with status codes outside the given ranges.

    The collection is changed in place. Without any ranges it is left
    untouched.
    """
    if not status_ranges:
        return
    removed = _filter_items(expect_list(collection.get("item"), "item"), status_ranges, "item")
    logger.debug("Removed %d sample response(s) outside %s", removed, _describe(status_ranges))


def _filter_items(items: list[Any], status_ranges: list[StatusRange], where: str) -> int:
    """Recursively filter items (supports folders)."""
    removed = 0
    for i, item in enumerate(items):
        item_where = f"{where}[{i}]"
        item = expect_mapping(item, item_where)
        if "item" in item:
            removed += _filter_items(
                expect_list(item["item"], f"{item_where}.item"), status_ranges, f"{item_where}.item"
            )
        else:
            removed += _filter_endpoint(item, status_ranges, item_where)
    return removed


def _filter_endpoint(endpoint: dict[str, Any], status_ranges: list[StatusRange], where: str) -> int:
    responses = expect_list(endpoint.get("response"), f"{where}.response")
    kept = []
    for j, response in enumerate(responses):
        response_where = f"{where}.response[{j}]"
        response = expect_mapping(response, response_where)
        code = expect_number(response.get("code"), f"{response_where}.code")
        if any(r.contains(code) for r in status_ranges):
            kept.append(response)
    endpoint["response"] = kept
    return len(responses) - len(kept)


def _describe(status_ranges: list[StatusRange]) -> str:
    return ",".join(
        str(r.start) if r.start == r.end else f"{r.start}-{r.end}" for r in status_ranges
    )
