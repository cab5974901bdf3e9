"""Conversion pipeline: collection JSON -> filtered collection -> Markdown destination."""

import logging
import sys
from pathlib import Path

from pm2md.errors import InputError
from pm2md.generator.destination import resolve_destination
from pm2md.generator.filter import filter_responses_by_status
from pm2md.generator.markdown import render
from pm2md.parser.base import RenderTemplate, StatusRange
from pm2md.parser.collection import collection_name, parse_collection

logger = logging.getLogger(__name__)

STDIN_NAME = "-"


def read_input(json_path: str) -> bytes:
    """Read the collection from a file, or from standard input when the path is "-"."""
    if json_path == STDIN_NAME:
        return sys.stdin.buffer.read()
    try:
        return Path(json_path).read_bytes()
    except OSError as e:
        raise InputError(f"Could not read {json_path!r}: {e.strerror or e}") from e


def json_to_md_file(
    json_bytes: bytes,
    dest_name: str,
    template: RenderTemplate,
    status_ranges: list[StatusRange] | None = None,
    replace: bool = False,
) -> str:
    """Convert collection JSON to Markdown and return the destination's name.

    If the destination name is "-", output goes to standard output. If it
    is empty, a file with a unique name based on the collection's name is
    created; this is the only case where the returned name differs from
    the given one. A file left incomplete by a rendering error is deleted.
    """
    collection = parse_collection(json_bytes)
    filter_responses_by_status(collection, status_ranges)
    name = collection_name(collection)
    logger.debug("Parsed collection %r", name)

    with resolve_destination(dest_name, name, replace) as destination:
        render(destination.sink, collection, template.name, template.source)

    logger.info("Rendered %r with %s", name, template.name)
    return destination.name
