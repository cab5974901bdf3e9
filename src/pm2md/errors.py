"""Error hierarchy for the collection-to-Markdown pipeline.

Every failure the pipeline can report derives from :class:`Pm2mdError`,
so the CLI can turn any of them into a single error line and exit code.
"""


class Pm2mdError(RuntimeError):
    """Base class for all pm2md errors."""


class InputError(Pm2mdError):
    """The collection source could not be read."""


class CollectionDecodeError(Pm2mdError):
    """The collection is not a valid JSON object."""


class SchemaMismatchError(Pm2mdError):
    """The collection was not exported with the supported schema."""


class CollectionShapeError(Pm2mdError):
    """A field the pipeline relies on is missing or has the wrong type."""


class StatusRangeError(Pm2mdError, ValueError):
    """A status range expression is malformed."""


class DestinationError(Pm2mdError):
    """The output destination could not be opened."""


class DestinationExistsError(DestinationError):
    """The output file exists and replacing it was not confirmed."""


class TemplateError(Pm2mdError):
    """Base class for template failures."""


class TemplateLoadError(TemplateError):
    """A custom template could not be read."""


class TemplateCompileError(TemplateError):
    """A template has a syntax error."""


class TemplateRenderError(TemplateError):
    """A template failed while producing output."""


class ConfigError(Pm2mdError):
    """A configuration file or option is invalid."""
