"""
Run-level logging utility

Mirrors everything logged during one render into a file (--log-file), with
start and end markers, so a long batch run can be reviewed afterwards.
"""

import logging
from pathlib import Path
from typing import Optional
from datetime import datetime, timezone

from trackheat.utils.constants import LOG_DATE_FORMAT, LOG_FORMAT

logger = logging.getLogger(__name__)


class RunLogHandler:
    """
    Context manager for run-level file logging.

    Attaches a FileHandler to the root logger on enter and removes it on exit.
    A log file that cannot be created only produces a warning; the run itself
    continues.
    """

    def __init__(self, log_file: Path, label: str = "trackheat"):
        self.log_file = log_file
        self.label = label
        self.file_handler: Optional[logging.FileHandler] = None
        self.root_logger = logging.getLogger()

    def __enter__(self):
        """Set up file logging for this run."""
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            self.file_handler = logging.FileHandler(self.log_file, mode="w", encoding="utf-8")
            self.file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            self.file_handler.setLevel(self.root_logger.level or logging.INFO)
            self.root_logger.addHandler(self.file_handler)

            start_time = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
            self.root_logger.info("=" * 80)
            self.root_logger.info(f"Run started: {self.label}")
            self.root_logger.info(f"Start time: {start_time}")
            self.root_logger.info("=" * 80)
        except OSError as e:
            logger.warning(f"Failed to initialize run logging at {self.log_file}: {e}")
            self.file_handler = None

        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Write the end marker and detach the handler."""
        if self.file_handler:
            try:
                end_time = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
                self.root_logger.info("=" * 80)
                if exc_type is None:
                    self.root_logger.info(f"Run completed successfully: {self.label}")
                else:
                    self.root_logger.error(f"Run failed: {self.label} - {exc_type.__name__}: {exc_val}")
                self.root_logger.info(f"End time: {end_time}")
                self.root_logger.info("=" * 80)
                self.file_handler.flush()
            finally:
                self.file_handler.close()
                self.root_logger.removeHandler(self.file_handler)
                self.file_handler = None
        return False
