"""Configuration models.

Pydantic models for the `woodc.toml` project configuration file.
"""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from woodc.operators import Operator, OperatorsNaming
from woodc.paths import DEFAULT_MEDIA


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class MediaAliasConfig(BaseModel):
    """A project media alias, extending or overriding the built-in ones.

    Attributes:
        alias: Token used in style file names.
        expression: CSS media feature expression.
        weight: Rank of variants using the alias.
        media: CSS media type.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    alias: str = Field(pattern=r"^[a-z][a-z0-9]*$")
    expression: str
    weight: int = 0
    media: str = DEFAULT_MEDIA


class CustomElementConfig(BaseModel):
    """A custom element tag bound to a component.

    Attributes:
        tag: Custom element tag name; must contain a hyphen.
        compo: Component path inserted for the tag.
        operator: Operator injected on the tag, compo or template.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    tag: str = Field(pattern=r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)+$")
    compo: str
    operator: Operator = Operator.COMPO


class ProjectConfig(BaseModel):
    """Project configuration.

    Attributes:
        name: Project name.
        display: Project display name, prefix of derived component displays.
        default_locale: Locale used when none is requested.
        locales: Locales the project is built for.
        operators: Composition operators naming strategy.
        asset_dir: Directory holding project-wide variables and media.
        theme_dir: Directory holding site styles.
        media: Additional media aliases.
        custom_elements: Custom element tags bound to components.
        logging: Logging configuration.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    display: str = ""
    default_locale: str = "en"
    locales: tuple[str, ...] = ("en",)
    operators: OperatorsNaming = OperatorsNaming.DATA_ATTR
    asset_dir: str = "res/asset"
    theme_dir: str = "res/theme"
    media: tuple[MediaAliasConfig, ...] = ()
    custom_elements: tuple[CustomElementConfig, ...] = ()
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
