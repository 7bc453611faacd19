import json
from pathlib import Path

import pytest

from woodc.utils import create_cli_logger


class TestCliLogger:
    def test_json_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WOODC_DEBUG", raising=False)
        log_file = tmp_path / "logs" / "woodc.log"

        logger = create_cli_logger(
            level="info", log_format="json", log_file=str(log_file), command="compo"
        )
        logger.info("component built", layout="res/page/page.htm")
        logger.debug("filtered out")

        lines = log_file.read_text().splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["event"] == "component built"
        assert entry["command"] == "compo"
        assert entry["level"] == "info"
        assert entry["layout"] == "res/page/page.htm"

    def test_debug_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("WOODC_DEBUG", "1")
        log_file = tmp_path / "woodc.log"

        logger = create_cli_logger(
            level="error", log_format="text", log_file=str(log_file)
        )
        logger.debug("variables loaded")

        assert "variables loaded" in log_file.read_text()
