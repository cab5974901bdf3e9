"""Output destinations: standard output, a chosen file, or a generated file name."""

import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from pm2md.errors import DestinationError, DestinationExistsError

logger = logging.getLogger(__name__)

STDOUT_NAME = "-"
FALLBACK_BASE_NAME = "collection"

_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')


@dataclass
class Destination:
    """An open output sink and the name it was opened under.

    Use it as a context manager: the sink is closed on exit, and when the
    block raises, a file sink is deleted so no partial output is left
    behind. Standard output is only flushed.
    """

    name: str
    sink: TextIO

    @property
    def is_stdout(self) -> bool:
        return self.name == STDOUT_NAME

    def __enter__(self) -> "Destination":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.is_stdout:
            self.sink.flush()
            return
        self.sink.close()
        if exc_type is not None:
            Path(self.name).unlink(missing_ok=True)
            logger.debug("Deleted partial output %s", self.name)


def resolve_destination(dest_name: str, collection_name: str, replace: bool = False) -> Destination:
    """Open the destination for the Markdown output.

    "-" selects standard output. An empty name creates a new file whose
    name is derived from the collection's name and made unique. Any other
    name is used as given, but an existing file is only replaced when
    ``replace`` is true.
    """
    if dest_name == STDOUT_NAME:
        return Destination(name=STDOUT_NAME, sink=sys.stdout)

    if not dest_name:
        base = format_file_name(collection_name) or FALLBACK_BASE_NAME
        dest_name = create_unique_file_name(base, ".md")
        mode = "x"
    elif Path(dest_name).exists() and not replace:
        raise DestinationExistsError(
            f'File "{dest_name}" already exists. Run the command again with the '
            "--replace flag to confirm replacing it."
        )
    else:
        mode = "w"

    try:
        sink = open(dest_name, mode, encoding="utf-8", newline="")
    except OSError as e:
        raise DestinationError(f'Could not create "{dest_name}": {e.strerror or e}') from e
    logger.debug("Writing Markdown to %s", dest_name)
    return Destination(name=dest_name, sink=sink)


def create_unique_file_name(base: str, ext: str) -> str:
    """Return ``base + ext``, or ``base(n) + ext`` with the first free n >= 1.

    ``ext`` must be empty or a dot followed by at least one character.
    """
    if ext and (not ext.startswith(".") or len(ext) == 1):
        raise ValueError(f"Invalid file extension {ext!r}: must be empty or start with '.'")
    name = base + ext
    n = 0
    while Path(name).exists():
        n += 1
        name = f"{base}({n}){ext}"
    return name


def format_file_name(name: str) -> str:
    """Remove characters that are not allowed in file names."""
    name = _ILLEGAL_CHARS.sub("", name)
    name = re.sub(r"\s+", " ", name)
    return name.strip(" .")
