"""Project configuration.

Configuration is read from an optional `woodc.toml` file in the project
root, merged with `WOODC_` environment variables:

    name = "site"
    display = "Site"
    operators = "xmlns"

    [[media]]
    alias = "print"
    expression = "orientation: portrait"
    media = "print"

    [[custom_elements]]
    tag = "site-header"
    compo = "res/compo/header"
"""

from ._load import CONFIG_FILE_NAME, load_config
from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import (
    CustomElementConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    MediaAliasConfig,
    ProjectConfig,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "CustomElementConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "MediaAliasConfig",
    "ProjectConfig",
    "deep_merge",
    "load_config",
    "parse_env_vars",
    "read_toml_file",
]
