"""
Streaming Handler - Completeness gate for code arriving token by token.

State machine per session:

    STREAMING --(end event)--> COMPLETE

While STREAMING every text delta is appended and the fenced code blocks
are re-extracted for live preview; nothing is validated. On the end
event the final extraction is validated once. should_save_code() then
decides, without side effects, whether the result may be persisted.

Usage:
    from codegate.streaming import process_stream, should_save_code

    state = await process_stream(llm_events, on_progress=send_preview)
    if should_save_code(state):
        save(state.html, state.css, state.js)
    else:
        raise GenerationError(get_validation_error_message(state.validation))
"""

import inspect
import logging
import re
from typing import Any, AsyncIterable, Callable, Iterable, Optional, Union

from ..contracts.results import ValidationResult
from ..contracts.streaming import ExtractedCode, StreamEvent, StreamingState
from ..monitoring.logger import gate_logger
from ..validators.code_validator import CodeValidator, get_code_validator
from ..validators.completeness import CodeKind, is_code_complete


logger = logging.getLogger(__name__)


ProgressCallback = Callable[[StreamingState], Any]
EventSource = Union[AsyncIterable[Any], Iterable[Any]]

# Opening fences; the language tag must end the word (```json is not js)
HTML_FENCE = re.compile(r"```html(?![\w-])[^\S\n]*(?:\n|$)", re.IGNORECASE)
CSS_FENCE = re.compile(r"```css(?![\w-])[^\S\n]*(?:\n|$)", re.IGNORECASE)
JS_FENCE = re.compile(r"```(?:javascript|js)(?![\w-])[^\S\n]*(?:\n|$)", re.IGNORECASE)
CLOSING_FENCE = "```"
PARTIAL_CLOSING_FENCE = re.compile(r"`{1,2}$")

SYNTAX_RULES = frozenset({"js-syntax", "js-brackets"})
COMPLETENESS_RULES = frozenset({"js-completeness", "html-truncated", "css-truncated"})


# =============================================================================
# EXTRACTION
# =============================================================================


def extract_code_blocks(text: str) -> ExtractedCode:
    """
    Extract HTML, CSS and JS from markdown code fences.

    For each language the last opening fence wins. A block that is
    still open runs to the end of the text.

    Args:
        text: Accumulated model output

    Returns:
        ExtractedCode with stripped blocks ("" for missing ones)
    """
    return ExtractedCode(
        html=_extract_block(text, HTML_FENCE),
        css=_extract_block(text, CSS_FENCE),
        js=_extract_block(text, JS_FENCE),
    )


def _extract_block(text: str, fence: "re.Pattern") -> str:
    opening = None
    for opening in fence.finditer(text):
        pass
    if opening is None:
        return ""

    start = opening.end()
    end = text.find(CLOSING_FENCE, start)
    if end != -1:
        return text[start:end].strip()

    # Still streaming: drop a closing fence that has only partly arrived
    body = text[start:].rstrip()
    return PARTIAL_CLOSING_FENCE.sub("", body).strip()


# =============================================================================
# EVENT NORMALIZATION
# =============================================================================


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def normalize_event(event: Any) -> Optional[StreamEvent]:
    """
    Convert an upstream event into a StreamEvent.

    Accepts StreamEvent, bare str fragments, and Anthropic message stream
    events (objects or dicts): content_block_delta/text_delta carries
    text, message_stop ends the stream.

    Returns:
        StreamEvent, or None for events that carry nothing of interest
    """
    if isinstance(event, StreamEvent):
        return event
    if isinstance(event, str):
        return StreamEvent.delta(event)

    event_type = _field(event, "type")
    if event_type == "content_block_delta":
        delta = _field(event, "delta")
        if delta is not None and _field(delta, "type") == "text_delta":
            return StreamEvent.delta(_field(delta, "text") or "")
    elif event_type == "message_stop":
        return StreamEvent.end()
    return None


async def _iterate(events: EventSource):
    if hasattr(events, "__aiter__"):
        async for event in events:
            yield event
    else:
        for event in events:
            yield event


# =============================================================================
# STREAM PROCESSING
# =============================================================================


async def process_stream(
    events: EventSource,
    on_progress: Optional[ProgressCallback] = None,
    validator: Optional[CodeValidator] = None,
) -> StreamingState:
    """
    Consume a generation stream and validate the final code.

    Args:
        events: Async (or plain) iterable of upstream events
        on_progress: Called with the state after every delta; may be async
        validator: Validator for the final extraction (shared default if None)

    Returns:
        StreamingState, complete only if an end event arrived
    """
    validator = validator or get_code_validator()
    state = StreamingState()
    ignored_after_end = 0

    async for raw_event in _iterate(events):
        event = normalize_event(raw_event)
        if event is None:
            logger.debug(f"Ignoring stream event: {type(raw_event).__name__}")
            continue

        if state.is_complete:
            ignored_after_end += 1
            continue

        if event.is_end:
            _finalize(state, validator)
            continue

        state.accumulated_code += event.text or ""
        state.apply_extraction(extract_code_blocks(state.accumulated_code))

        if on_progress is not None:
            result = on_progress(state)
            if inspect.isawaitable(result):
                await result

    if ignored_after_end:
        logger.debug(f"Ignored {ignored_after_end} event(s) after end of stream")
    if not state.is_complete:
        logger.warning(
            f"Stream ended without completion event after "
            f"{len(state.accumulated_code)} chars"
        )
    return state


def _finalize(state: StreamingState, validator: CodeValidator) -> None:
    """STREAMING -> COMPLETE: final extraction and the one validation run."""
    state.is_complete = True
    state.apply_extraction(extract_code_blocks(state.accumulated_code))
    state.validation = validator.validate(state.html, state.css, state.js)

    if not state.validation.passed:
        logger.warning(
            f"Code validation failed: {len(state.validation.errors)} error(s), "
            f"score {state.validation.score}"
        )
    else:
        logger.info("Code validation passed")

    gate_logger.log_stream_complete(
        accumulated_length=len(state.accumulated_code),
        extracted={"html": len(state.html), "css": len(state.css), "js": len(state.js)},
        passed=state.validation.passed,
    )


# =============================================================================
# SAVE DECISION
# =============================================================================


def save_rejection_reason(state: StreamingState) -> Optional[str]:
    """
    Explain why a session's code must not be saved.

    Returns:
        Reason string, or None when the code may be saved
    """
    if not state.is_complete:
        return "stream is not complete"

    if state.validation is not None and state.validation.errors:
        return f"validation failed with {len(state.validation.errors)} error(s)"

    if not state.html or not state.html.strip():
        return "HTML is missing"

    if not is_code_complete(state.html, CodeKind.HTML):
        return "HTML appears incomplete"

    if state.css.strip() and not is_code_complete(state.css, CodeKind.CSS):
        return "CSS appears incomplete"

    if state.js.strip() and not is_code_complete(state.js, CodeKind.JS):
        return "JavaScript appears incomplete"

    return None


def should_save_code(state: StreamingState) -> bool:
    """
    Decide whether generated code may be persisted.

    Pure with respect to state: nothing is mutated and the validator is
    not re-run. Asking before the stream completed returns False.

    Args:
        state: Session state returned by process_stream

    Returns:
        True only for complete, validated, structurally complete code
    """
    reason = save_rejection_reason(state)
    gate_logger.log_save_decision(reason is None, reason=reason)
    return reason is None


def get_validation_error_message(validation: ValidationResult) -> str:
    """
    Build a user-facing explanation of a failed validation.

    Args:
        validation: Result of the final validation

    Returns:
        "" when validation passed, otherwise a one-line message
    """
    if validation.passed:
        return ""

    first_message = validation.errors[0].message
    has_syntax_errors = any(e.rule in SYNTAX_RULES for e in validation.errors)
    has_completeness_errors = any(e.rule in COMPLETENESS_RULES for e in validation.errors)

    if has_syntax_errors and has_completeness_errors:
        return (
            "This app's JavaScript failed to generate correctly and is not running. "
            "Please try regenerating or contact support."
        )
    if has_syntax_errors:
        syntax_message = next(e.message for e in validation.errors if e.rule in SYNTAX_RULES)
        return f"JavaScript syntax error: {syntax_message}"
    if has_completeness_errors:
        return "The code generation was interrupted. Please try regenerating."

    return f"Code validation failed: {first_message}"
