"""Integration tests for the style command."""

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from tests.conftest import SiteFactory


@pytest.fixture
def site(make_site: "SiteFactory") -> Path:
    project = make_site(
        {
            "res/page/page.css": "h1 { color: @color/accent; }\n",
            "res/page/page_smd.css": "h1 { margin: 0; }",
            "res/page/colors.xml": "<color><accent>#123456</accent></color>",
        }
    )
    return project.root


class TestStyleCommand:
    def test_prints_merged_stylesheet(
        self,
        site: Path,
        capsys: pytest.CaptureFixture[str],
        woodc_cli_with_exit_code: Callable[..., int],
    ) -> None:
        exit_code = woodc_cli_with_exit_code(
            "style", "res/page/page.css", "--project-root", str(site)
        )

        assert exit_code == 0
        assert capsys.readouterr().out == (
            "h1 { color: #123456; }\n"
            "@media screen and ( max-width: 767px ) {\n\n"
            "h1 { margin: 0; }\n"
            "}\n"
        )

    def test_missing_variable(
        self,
        site: Path,
        capsys: pytest.CaptureFixture[str],
        woodc_cli_with_exit_code: Callable[..., int],
    ) -> None:
        _ = (site / "res/page/colors.xml").write_text("<color/>")

        exit_code = woodc_cli_with_exit_code(
            "style", "res/page/page.css", "--project-root", str(site)
        )

        assert exit_code == 1
        assert "Missing variable value" in capsys.readouterr().out
