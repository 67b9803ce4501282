"""
Gate Logger - Structured logging for quality-gate decisions.

This module provides structured logging for the code quality gate.
It captures:
- Validation outcomes (score, grade, issue counts)
- Auto-fix runs (applied fixes, remaining issues)
- Stream completion (extracted sizes)
- Save decisions (accepted or the rejection reason)

Log Format:
==========
Each entry is one JSON payload with an "event" name and a UTC timestamp,
prefixed by a short human-readable label.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Dict, Optional

from codegate.contracts.results import AutoFixResult, ValidationResult
from codegate.core.config import settings

# Configure the gate logger
logger = logging.getLogger("codegate.gate")
logger.setLevel(settings.LOG_LEVEL)

# Create console handler if not exists
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(settings.LOG_LEVEL)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class GateLogger:
    """
    Structured logger for quality-gate operations.

    Usage:
        gate_logger.log_validation(result, sources={"html": len(html)})
        gate_logger.log_save_decision(False, reason="validation failed")
    """

    def __init__(self):
        """Initialize the gate logger."""
        self._logger = logger

    def log_validation(
        self,
        result: ValidationResult,
        sources: Optional[Dict[str, int]] = None,
    ) -> None:
        """
        Log one validate_all outcome.

        Args:
            result: The validation result
            sources: Length of each validated source, keyed by kind
        """
        log_data = {
            "event": "validation",
            "passed": result.passed,
            "score": result.summary.score,
            "grade": result.summary.grade,
            "errors": len(result.errors),
            "warnings": len(result.warnings),
            "rules": sorted({issue.rule for issue in result.errors}),
            "timestamp": _timestamp(),
        }

        if sources:
            log_data["sources"] = sources

        level = logging.INFO if result.passed else logging.WARNING
        self._logger.log(level, f"Validation: {json.dumps(log_data)}")

    def log_autofix(self, result: AutoFixResult) -> None:
        """
        Log one auto-fix run.

        Args:
            result: The auto-fix result
        """
        log_data = {
            "event": "autofix",
            "applied": len(result.applied_fixes),
            "applied_fixes": result.applied_fixes,
            "remaining_issues": result.remaining_issues,
            "fixed_length": len(result.fixed),
            "timestamp": _timestamp(),
        }

        self._logger.info(f"Auto-fix: {json.dumps(log_data)}")

    def log_stream_complete(
        self,
        accumulated_length: int,
        extracted: Dict[str, int],
        passed: Optional[bool] = None,
    ) -> None:
        """
        Log the end of a generation stream.

        Args:
            accumulated_length: Total characters received
            extracted: Length of each extracted code block
            passed: Validation outcome of the final extraction
        """
        log_data = {
            "event": "stream_complete",
            "accumulated_length": accumulated_length,
            "extracted": extracted,
            "passed": passed,
            "timestamp": _timestamp(),
        }

        self._logger.info(f"Stream Complete: {json.dumps(log_data)}")

    def log_save_decision(self, save: bool, reason: Optional[str] = None) -> None:
        """
        Log whether generated code may be persisted.

        Args:
            save: The decision
            reason: Why the code was rejected (None when accepted)
        """
        log_data = {
            "event": "save_decision",
            "save": save,
            "timestamp": _timestamp(),
        }

        if reason:
            log_data["reason"] = reason

        level = logging.INFO if save else logging.WARNING
        self._logger.log(level, f"Save Decision: {json.dumps(log_data)}")


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
gate_logger = GateLogger()
