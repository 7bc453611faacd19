"""Project configuration discovery and validation."""

from pathlib import Path

from pydantic import ValidationError

from woodc.exceptions import ConfigError

from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import ProjectConfig

CONFIG_FILE_NAME = "woodc.toml"


def load_config(
    project_root: Path,
    *,
    include_env: bool = True,
    overrides: dict[str, object] | None = None,
) -> ProjectConfig:
    """Load the configuration of a project.

    Sources in increasing precedence: built-in defaults, `woodc.toml` in the
    project root (optional), `WOODC_` environment variables, overrides.

    Args:
        project_root: Project root directory.
        include_env: Whether environment variables are applied.
        overrides: Explicit values, e.g. from command line options.

    Returns:
        The validated ProjectConfig.

    Raises:
        ConfigLoadError: If the configuration file cannot be parsed.
        ConfigError: If the merged configuration is invalid.
    """
    data: dict[str, object] = {}
    config_file = project_root / CONFIG_FILE_NAME
    if config_file.is_file():
        data = read_toml_file(config_file)
    if include_env:
        data = deep_merge(data, parse_env_vars())
    if overrides:
        data = deep_merge(data, overrides)

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid project configuration in |{config_file}|: {e}"
        raise ConfigError(msg) from e
