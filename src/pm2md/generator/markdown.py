"""Markdown rendering of a parsed collection through a Jinja2 template.

Templates see the collection's top-level keys (``info``, ``item``, ...)
as variables; missing fields render as empty and can be chained
(``entry.request.body.raw``). They also get the helper filters in
:data:`HELPERS`. The helper set is part of the template contract and is
versioned by :data:`HELPERS_VERSION`, which templates can read as
``helpers_version``.
"""

import json
import logging
import re
from http import HTTPStatus
from typing import Any, Callable, TextIO

from jinja2 import ChainableUndefined, DictLoader, Environment, TemplateSyntaxError, Undefined

from pm2md.errors import DestinationError, TemplateCompileError, TemplateRenderError

logger = logging.getLogger(__name__)

HELPERS_VERSION = 1


def fence(text: Any, lang: str = "") -> str:
    """Wrap text in a fenced code block longer than any backtick run inside it."""
    text = _text(text)
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    marker = "`" * max(3, longest + 1)
    return f"{marker}{lang}\n{text}\n{marker}"


def pretty_json(text: Any) -> str:
    """Re-indent a JSON body; anything that isn't JSON is returned unchanged."""
    text = _text(text)
    try:
        return json.dumps(json.loads(text), indent=4, ensure_ascii=False)
    except ValueError:
        return text


def code_lang(text: Any) -> str:
    """Guess the code block language of a request or response body."""
    stripped = _text(text).lstrip()
    if stripped.startswith(("{", "[")):
        try:
            json.loads(stripped)
            return "json"
        except ValueError:
            return "text"
    if stripped.startswith("<?xml"):
        return "xml"
    if stripped.startswith("<"):
        return "html"
    return "text"


def url(request: Any) -> str:
    """Return the raw URL of a Postman request."""
    if isinstance(request, str):
        return request
    if not isinstance(request, dict):
        return ""
    target = request.get("url")
    if isinstance(target, dict):
        return _text(target.get("raw"))
    return _text(target)


def md_escape(text: Any) -> str:
    """Escape characters that would change inline Markdown or break a table row."""
    escaped = re.sub(r"([\\`*_\[\]<>|])", r"\\\1", _text(text))
    return re.sub(r"\r\n|\r|\n", " ", escaped)


def anchor(text: Any) -> str:
    """Return the GitHub-style anchor of a heading."""
    slug = re.sub(r"[^\w\- ]", "", _text(text).strip().lower())
    return slug.replace(" ", "-")


def status_text(code: Any) -> str:
    """Return the reason phrase of an HTTP status code, or "" if unknown."""
    if isinstance(code, Undefined):
        return ""
    try:
        return HTTPStatus(int(code)).phrase
    except (TypeError, ValueError):
        return ""


def description(value: Any) -> str:
    """Return the text of a Postman description (plain string or ``{content: ...}``)."""
    if isinstance(value, dict):
        return _text(value.get("content"))
    return _text(value)


HELPERS: dict[str, Callable[..., str]] = {
    "fence": fence,
    "pretty_json": pretty_json,
    "code_lang": code_lang,
    "url": url,
    "md_escape": md_escape,
    "anchor": anchor,
    "status_text": status_text,
    "description": description,
}


def render(sink: TextIO, collection: dict[str, Any], template_name: str, template_source: str) -> None:
    """Render the collection to Markdown and write it to ``sink``.

    Output is written as it is produced, so the sink may hold partial
    output when rendering fails.
    """
    env = _create_env(template_name, template_source)
    try:
        template = env.get_template(template_name)
    except TemplateSyntaxError as e:
        raise TemplateCompileError(
            f"Template parsing error in {template_name!r} (line {e.lineno}): {e.message}"
        ) from e

    logger.debug("Rendering template %s (helpers v%d)", template_name, HELPERS_VERSION)
    try:
        for chunk in template.generate(collection):
            sink.write(chunk)
    except OSError as e:
        raise DestinationError(f"Could not write the output: {e}") from e
    except Exception as e:  # templates can raise anything their expressions do
        raise TemplateRenderError(f"Template execution error in {template_name!r}: {e}") from e


def _create_env(template_name: str, template_source: str) -> Environment:
    env = Environment(
        loader=DictLoader({template_name: template_source}),
        undefined=ChainableUndefined,
        autoescape=False,  # Markdown doesn't need escaping
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters.update(HELPERS)
    env.globals["helpers_version"] = HELPERS_VERSION
    return env


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
