"""
Configuration for rpmgraph runs.

Settings come from, in increasing order of precedence: built-in defaults,
an optional JSON config file, ``RPMGRAPH_*`` environment variables and
explicit overrides (usually command line arguments).
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rpmgraph.constants import SOURCE_RPM_SUFFIX
from rpmgraph.validators import NonEmptyString, PositiveInt

ENVIRONMENT_VARIABLES = {
    "rpm_command": "RPMGRAPH_RPM_COMMAND",
    "workers": "RPMGRAPH_WORKERS",
    "suffix": "RPMGRAPH_SUFFIX",
    "follow_links": "RPMGRAPH_FOLLOW_LINKS",
    "fail_fast": "RPMGRAPH_FAIL_FAST",
}


class Settings(BaseModel):
    """Settings controlling discovery, querying and aggregation."""
    model_config = ConfigDict(extra="forbid")

    rpm_command: NonEmptyString = Field(default="rpm", description="Executable used to query package requirements")
    workers: PositiveInt = Field(
        default_factory=lambda: os.cpu_count() or 1,
        description="Number of worker threads",
    )
    suffix: NonEmptyString = Field(default=SOURCE_RPM_SUFFIX, description="File name suffix of the packages to load")
    follow_links: bool = Field(default=False, description="Whether to follow symlinked directories")
    fail_fast: bool = Field(default=False, description="Abort on the first package that cannot be loaded")


def load_config_file(config_file: Path) -> dict[str, Any]:
    """
    Load settings from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object
    """
    if not config_file.exists():
        raise FileNotFoundError(f"Config file {config_file} not found")
    try:
        content = json.loads(config_file.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding {config_file}: {e}") from e
    if not isinstance(content, dict):
        raise ValueError(f"Config file {config_file} must contain a JSON object")
    return content


def load_environment() -> dict[str, str]:
    return {
        key: value
        for key, variable in ENVIRONMENT_VARIABLES.items()
        if (value := os.getenv(variable)) is not None
    }


def load_settings(config_file: Path | None = None, **overrides: Any) -> Settings:
    """
    Build the settings for a run.

    Args:
        config_file: Optional JSON file with settings
        overrides: Explicit values; None values are ignored

    Raises:
        FileNotFoundError: If config_file does not exist
        ValueError: If config_file cannot be decoded
        pydantic.ValidationError: If the resulting settings are invalid
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        values.update(load_config_file(config_file))
    values.update(load_environment())
    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings.model_validate(values)
