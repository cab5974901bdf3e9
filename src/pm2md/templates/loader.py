"""Template loader: picks the packaged default template or a custom one."""

from pathlib import Path, PurePosixPath

from pm2md.errors import TemplateLoadError
from pm2md.generator.destination import create_unique_file_name
from pm2md.parser.base import RenderTemplate

TEMPLATES_DIR = Path(__file__).parent

DEFAULT_TEMPLATE_NAME = "default.tmpl"
TEMPLATE_SUFFIX = ".tmpl"


def default_template() -> RenderTemplate:
    source = (TEMPLATES_DIR / DEFAULT_TEMPLATE_NAME).read_text(encoding="utf-8")
    return RenderTemplate(name=DEFAULT_TEMPLATE_NAME, source=source)


def load_template(custom_path: str | None = None) -> RenderTemplate:
    """Load a custom template, or the default template if no path is given.

    A custom template is named after its file name, which is what
    template errors refer to.
    """
    if not custom_path:
        return default_template()
    try:
        source = Path(custom_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(f"Could not read template {custom_path!r}: {e}") from e
    name = PurePosixPath(custom_path.replace("\\", "/")).name
    return RenderTemplate(name=name, source=source)


def export_default_template() -> str:
    """Write the default template to a new file in the working directory for customization."""
    file_name = create_unique_file_name("collection", TEMPLATE_SUFFIX)
    with open(file_name, "x", encoding="utf-8", newline="") as f:
        f.write(default_template().source)
    return file_name
