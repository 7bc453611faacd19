"""Shared test fixtures for WOODC tests."""

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from rich.console import Console

from woodc.config import ProjectConfig
from woodc.project import Project

SiteFactory = Callable[..., Project]


def write_files(root: Path, files: Mapping[str, str]) -> None:
    """Write source files under a project root, creating directories."""
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def make_site(tmp_path: Path) -> SiteFactory:
    """Return a factory creating a project over source files.

    Structure:
        tmp_path/
            site/
                res/...    # files given by relative path
    """

    def _make(
        files: Mapping[str, str], config: ProjectConfig | None = None
    ) -> Project:
        root = tmp_path / "site"
        root.mkdir(exist_ok=True)
        write_files(root, files)
        return Project(root, config)

    return _make


@pytest.fixture
def console() -> Console:
    return Console(
        width=200,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
