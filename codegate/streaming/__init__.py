"""
Streaming - Completeness gate for code generated token by token.

Usage:
    from codegate.streaming import process_stream, should_save_code

    state = await process_stream(events)
    if should_save_code(state):
        ...
"""

from .handler import (
    extract_code_blocks,
    get_validation_error_message,
    normalize_event,
    process_stream,
    save_rejection_reason,
    should_save_code,
)

__all__ = [
    "extract_code_blocks",
    "normalize_event",
    "process_stream",
    "should_save_code",
    "save_rejection_reason",
    "get_validation_error_message",
]
