"""CLI entry point for pm2md."""

from pathlib import Path

import click

from pm2md.config import load_config
from pm2md.errors import ConfigError, Pm2mdError
from pm2md.logging import configure_logging
from pm2md.pipeline import STDIN_NAME, json_to_md_file, read_input
from pm2md.templates.loader import TEMPLATE_SUFFIX, export_default_template, load_template

VERSION = "0.1.0"

EXAMPLES = """\b
Examples:
  pm2md collection.json
  pm2md collection.json documentation.md
  pm2md collection.json -
  pm2md collection.json --statuses=200-299,400-499"""


def _check_args(json_path: str | None, get_template: bool, template_path: str | None) -> None:
    if template_path and not template_path.endswith(TEMPLATE_SUFFIX):
        raise click.BadParameter(
            f'"{template_path}" must end with "{TEMPLATE_SUFFIX}"', param_hint="'--template'"
        )
    if json_path is None:
        if get_template:
            return
        raise click.UsageError("Missing argument 'JSON_PATH'.")
    if json_path != STDIN_NAME and not json_path.lower().endswith(".json"):
        raise click.BadParameter(
            f'"{json_path}" must be "-" or end with ".json"', param_hint="'JSON_PATH'"
        )


@click.command(
    epilog=EXAMPLES,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("json_path", required=False)
@click.argument("output", required=False)
@click.option("-s", "--statuses", default=None, envvar="PM2MD_STATUSES", help="Include only the sample responses with status codes in given range(s).")
@click.option("-t", "--template", "template_path", default=None, envvar="PM2MD_TEMPLATE", help="Use a custom template (.tmpl) for the output.")
@click.option("-g", "--get-template", is_flag=True, help="Create a file of the default template for customization.")
@click.option("--replace", is_flag=True, hidden=True, help="Confirm replacing a chosen existing output file.")
@click.option("--config", "config_path", default=None, envvar="PM2MD_CONFIG", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML file with default option values.")
@click.option("-v", "--verbose", is_flag=True, help="Log each conversion step to stderr.")
@click.version_option(VERSION, prog_name="pm2md")
def main(
    json_path: str | None,
    output: str | None,
    statuses: str | None,
    template_path: str | None,
    get_template: bool,
    replace: bool,
    config_path: Path | None,
    verbose: bool,
):
    """Convert a Postman collection to Markdown documentation.

    JSON_PATH is a collection exported from Postman as a v2.1.0 collection,
    or "-" to read it from stdin. OUTPUT is the Markdown file to create, or
    "-" for stdout; by default it is named after the collection.
    """
    _check_args(json_path, get_template, template_path)
    configure_logging(verbose)

    if get_template:
        try:
            file_name = export_default_template()
        except OSError as e:
            raise click.ClickException(f"Could not create the template file: {e}") from e
        click.echo(f'Created "{file_name}"', err=True)
        if json_path is None:
            return

    try:
        config = load_config(config_path, statuses=statuses, template=template_path, replace=replace or None)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    try:
        json_bytes = read_input(json_path)
        template = load_template(config.template)
        dest_name = json_to_md_file(
            json_bytes,
            output or "",
            template,
            config.status_ranges,
            config.replace,
        )
    except Pm2mdError as e:
        raise click.ClickException(str(e)) from e

    if dest_name != "-":
        click.echo(f'Created "{dest_name}"', err=True)
