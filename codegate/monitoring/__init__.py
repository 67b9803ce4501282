"""
Monitoring Module - Structured logging for quality-gate decisions.

Usage:
======
    from codegate.monitoring import gate_logger

    gate_logger.log_validation(result)
    gate_logger.log_save_decision(False, reason="HTML is incomplete")
"""

from codegate.monitoring.logger import GateLogger, gate_logger

__all__ = ["GateLogger", "gate_logger"]
