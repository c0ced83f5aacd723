"""
Structured logging system for FounderMatch.

Provides centralized logging with console and file outputs, log levels,
and metrics tracking for match generation runs.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for match generation and status updates.
    """

    def __init__(
        self,
        name: str = "foundermatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "generation_runs": 0,
            "candidates_scored": 0,
            "matches_created": 0,
            "matches_updated": 0,
            "status_updates": 0,
            "failures": 0,
            "errors_by_kind": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"foundermatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_generation_run(self, candidates: int):
        """Count a generation run and the candidates it scored."""
        self.metrics["generation_runs"] += 1
        self.metrics["candidates_scored"] += candidates

    def record_match_created(self):
        self.metrics["matches_created"] += 1

    def record_match_updated(self):
        self.metrics["matches_updated"] += 1

    def record_status_update(self):
        self.metrics["status_updates"] += 1

    def record_failure(self, kind: str):
        """Record a failed operation under its error kind."""
        self.metrics["failures"] += 1
        errors = self.metrics["errors_by_kind"]
        errors[kind] = errors.get(kind, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics, with the share of scored candidates that matched."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_kind"] = dict(self.metrics["errors_by_kind"])
        scored = metrics_copy["candidates_scored"]
        matched = metrics_copy["matches_created"] + metrics_copy["matches_updated"]
        metrics_copy["match_rate"] = round(matched / scored, 3) if scored else 0.0
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Matching Session Metrics ===")
        self.info(f"Generation runs: {metrics['generation_runs']}")
        self.info(
            f"Candidates scored: {metrics['candidates_scored']} "
            f"({metrics['match_rate'] * 100:.1f}% above threshold)"
        )
        self.info(f"Matches: {metrics['matches_created']} created, {metrics['matches_updated']} refreshed")
        self.info(f"Status updates: {metrics['status_updates']}")

        if metrics["errors_by_kind"]:
            self.info("Failures:")
            for kind, count in metrics["errors_by_kind"].items():
                self.info(f"  {kind}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "foundermatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
