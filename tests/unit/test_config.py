from pathlib import Path

import pytest

from woodc.config import (
    CONFIG_FILE_NAME,
    LogLevel,
    MediaAliasConfig,
    ProjectConfig,
    deep_merge,
    load_config,
    parse_env_vars,
)
from woodc.exceptions import ConfigError, ConfigLoadError
from woodc.operators import OperatorsNaming
from woodc.project import Project

CONFIG = """\
name = "site"
display = "Site"
operators = "xmlns"

[logging]
level = "debug"

[[media]]
alias = "print"
expression = "orientation: portrait"
media = "print"
weight = 5

[[custom_elements]]
tag = "site-header"
compo = "res/compo/header"
"""


class TestLoadConfig:
    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, include_env=False)

        assert config == ProjectConfig()
        assert config.operators is OperatorsNaming.DATA_ATTR
        assert config.default_locale == "en"
        assert config.asset_dir == "res/asset"

    def test_file(self, tmp_path: Path) -> None:
        _ = (tmp_path / CONFIG_FILE_NAME).write_text(CONFIG)

        config = load_config(tmp_path, include_env=False)

        assert config.name == "site"
        assert config.operators is OperatorsNaming.XMLNS
        assert config.logging.level is LogLevel.DEBUG
        assert config.media[0].alias == "print"
        assert config.media[0].weight == 5
        assert config.custom_elements[0].compo == "res/compo/header"

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _ = (tmp_path / CONFIG_FILE_NAME).write_text(CONFIG)
        monkeypatch.setenv("WOODC_DISPLAY", "Env Site")
        monkeypatch.setenv("WOODC_LOGGING__LEVEL", "error")

        config = load_config(tmp_path)

        assert config.display == "Env Site"
        assert config.logging.level is LogLevel.ERROR
        assert config.name == "site"

    def test_overrides_win(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("WOODC_DEFAULT_LOCALE", "de")

        config = load_config(tmp_path, overrides={"default_locale": "fr"})

        assert config.default_locale == "fr"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _ = (tmp_path / CONFIG_FILE_NAME).write_text('name = "site"\ndisplay = \n')

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = load_config(tmp_path, include_env=False)

        assert exc_info.value.path == tmp_path / CONFIG_FILE_NAME

    def test_invalid_value(self, tmp_path: Path) -> None:
        _ = (tmp_path / CONFIG_FILE_NAME).write_text('operators = "camel"\n')

        with pytest.raises(ConfigError, match="Invalid project configuration"):
            _ = load_config(tmp_path, include_env=False)

    def test_invalid_custom_element_tag(self, tmp_path: Path) -> None:
        _ = (tmp_path / CONFIG_FILE_NAME).write_text(
            '[[custom_elements]]\ntag = "header"\ncompo = "res/compo/header"\n'
        )

        with pytest.raises(ConfigError):
            _ = load_config(tmp_path, include_env=False)


class TestMerging:
    def test_deep_merge(self) -> None:
        base = {"logging": {"level": "info", "format": "text"}, "locales": ["en"]}
        override = {"logging": {"level": "debug"}, "locales": ["de"]}

        merged = deep_merge(base, override)

        assert merged == {
            "logging": {"level": "debug", "format": "text"},
            "locales": ["de"],
        }
        assert base["logging"] == {"level": "info", "format": "text"}

    def test_parse_env_vars(self) -> None:
        environ = {
            "WOODC_NAME": "site",
            "WOODC_LOGGING__FILE": "logs/woodc.log",
            "WOODC_LOCALES": '["en", "de"]',
            "WOODC_": "ignored",
            "HOME": "/root",
        }

        assert parse_env_vars(environ=environ) == {
            "name": "site",
            "logging": {"file": "logs/woodc.log"},
            "locales": ["en", "de"],
        }


class TestProjectConfig:
    def test_media_aliases_extend_defaults(self, tmp_path: Path) -> None:
        config = ProjectConfig(
            media=(
                MediaAliasConfig(
                    alias="print", expression="orientation: portrait", media="print"
                ),
            )
        )
        project = Project(tmp_path, config)

        variants = project.file_path("res/page/page_print_lgd.css").variants

        assert variants.media == "all"
        assert variants.expression == (
            "( orientation: portrait ) and ( min-width: 1200px )"
        )
