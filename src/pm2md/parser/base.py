"""Data models shared by the parsers and generators.

The collection itself stays an untyped JSON tree; only the small
values the pipeline builds on its own are modelled here.
"""

from pydantic import BaseModel


class StatusRange(BaseModel):
    """An inclusive range of HTTP status codes."""

    start: int
    end: int  # not checked against start; an inverted range matches nothing

    def contains(self, code: int | float) -> bool:
        return self.start <= code <= self.end


class RenderTemplate(BaseModel):
    """A Markdown template and the name used to report its errors."""

    name: str  # default.tmpl / custom.tmpl
    source: str
