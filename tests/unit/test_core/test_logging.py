"""Unit tests for logging configuration."""

import json
from pathlib import Path

from loguru import logger

from civicos.core.logging import INGESTION_LOG_FILE_NAME, LOG_FILE_NAME, log_ingestion_run, setup_logging


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_does_not_raise(self) -> None:
        """setup_logging with valid log level does not raise."""
        setup_logging("DEBUG")
        setup_logging("INFO")
        setup_logging("WARNING")

    def test_setup_logging_case_insensitive(self) -> None:
        """setup_logging accepts case-insensitive log levels."""
        setup_logging("info")
        setup_logging("debug")

    def test_log_dir_creates_file_sink(self, tmp_path: Path) -> None:
        """A log directory gets a civicos.log file."""
        log_dir = tmp_path / "logs"
        setup_logging("INFO", str(log_dir))
        logger.info("ingestion finished")
        # Removing the sinks closes and flushes the file.
        setup_logging("INFO")

        log_file = log_dir / LOG_FILE_NAME
        assert log_file.exists()
        assert "ingestion finished" in log_file.read_text()

    def test_run_summaries_get_their_own_file(self, tmp_path: Path) -> None:
        """Only ingestion run summaries reach ingestion.jsonl, one JSON object per line."""
        setup_logging("WARNING", str(tmp_path))
        logger.warning("unrelated warning")
        log_ingestion_run({"elections": {"inserted": 9}}, "Full ingestion finished")
        setup_logging("INFO")

        lines = (tmp_path / INGESTION_LOG_FILE_NAME).read_text().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])["record"]
        assert record["message"] == "Full ingestion finished"
        assert record["extra"]["ingestion_run"] == {"elections": {"inserted": 9}}

    def test_run_summaries_ignore_configured_level(self, tmp_path: Path) -> None:
        """A WARNING threshold keeps INFO run summaries out of civicos.log but not ingestion.jsonl."""
        setup_logging("WARNING", str(tmp_path))
        log_ingestion_run({}, "quiet run")
        setup_logging("INFO")

        assert "quiet run" not in (tmp_path / LOG_FILE_NAME).read_text()
        assert "quiet run" in (tmp_path / INGESTION_LOG_FILE_NAME).read_text()

    def test_without_log_dir_no_files(self, tmp_path: Path) -> None:
        setup_logging("INFO")
        log_ingestion_run({}, "stderr only")

        assert list(tmp_path.iterdir()) == []
