"""Loguru sinks for the API process and the CLI.

Everything goes to stderr in a single line format.  With a ``log_dir``
two files are added there:

* ``civicos.log``: the same lines as stderr, rotated daily.
* ``ingestion.jsonl``: one serialized record per pipeline run, written by
  ``log_ingestion_run``.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"

# Records carrying this extra key are ingestion run summaries.
INGESTION_RUN_KEY = "ingestion_run"

LOG_FILE_NAME = "civicos.log"
INGESTION_LOG_FILE_NAME = "ingestion.jsonl"


def _is_ingestion_run(record: dict) -> bool:
    return INGESTION_RUN_KEY in record["extra"]


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Replace any existing Loguru sinks with the CivicOS ones.

    Args:
        log_level: Minimum level for stderr and ``civicos.log``, any case.
        log_dir: Directory for the log files.  Created if missing; when
            None only stderr is written.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if not log_dir:
        return

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(log_path / LOG_FILE_NAME, level=level, format=_LOG_FORMAT, rotation="24h", retention="7 days")
    # Run summaries are kept regardless of the configured level.
    logger.add(
        log_path / INGESTION_LOG_FILE_NAME,
        level="INFO",
        serialize=True,
        filter=_is_ingestion_run,
        rotation="10 MB",
        retention="30 days",
    )


def log_ingestion_run(summary: dict[str, Any], message: str) -> None:
    """Emit an ingestion run summary; it lands in ``ingestion.jsonl`` when file logging is on."""
    logger.bind(**{INGESTION_RUN_KEY: summary}).info(message)
