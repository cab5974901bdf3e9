"""Per-invocation options for a conversion.

Options come from the command line, the ``PM2MD_*`` environment variables
(resolved by click) and an optional YAML file, in that order of precedence.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from pm2md.errors import ConfigError
from pm2md.parser.base import StatusRange
from pm2md.parser.statuses import parse_status_ranges
from pm2md.templates.loader import TEMPLATE_SUFFIX


class ConvertConfig(BaseModel):
    """Options for one conversion."""

    model_config = ConfigDict(extra="forbid")

    statuses: str = ""  # e.g. "200-299,400-499"
    template: str | None = None
    replace: bool = False

    @field_validator("statuses", mode="before")
    @classmethod
    def _check_statuses(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str):
            parse_status_ranges(value)
        return value

    @field_validator("template")
    @classmethod
    def _check_template_suffix(cls, value: str | None) -> str | None:
        if value and not value.endswith(TEMPLATE_SUFFIX):
            raise ValueError(f'"{value}" must end with "{TEMPLATE_SUFFIX}"')
        return value

    @property
    def status_ranges(self) -> list[StatusRange] | None:
        return parse_status_ranges(self.statuses)


def load_config(path: Path | None = None, **overrides: Any) -> ConvertConfig:
    """Build the config from an optional YAML file plus non-None overrides."""
    data: dict[str, Any] = {}
    if path is not None:
        data.update(_read_yaml(path))
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ConvertConfig(**data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {details}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Could not read config file {str(path)!r}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {str(path)!r}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {str(path)!r} must contain a mapping of options")
    return data
