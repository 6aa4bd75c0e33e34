"""Conversion of arbitrary caller data into an Event.

Accepted inputs:
  - an Event instance (returned as-is)
  - any object with a ``to_event()`` method
  - a Python exception (backtrace taken from its traceback)
  - crash report text (handed to the exception parser)
  - ``{"type": ..., "data": {...}}`` or a single-key ``{type: {...}}`` mapping
"""

import logging
import traceback
from collections.abc import Mapping
from typing import Any

from logcodec.events import CustomEvent, Event, ExceptionEvent, Frame, is_event
from logcodec.exception_parser import ParseFailure, parse_exception

logger = logging.getLogger(__name__)


def exception_to_event(exc: BaseException) -> ExceptionEvent | None:
    """Build an ExceptionEvent from a raised Python exception.

    Returns None for an exception that was never raised (no traceback).
    """
    frames = []
    for frame, lineno in traceback.walk_tb(exc.__traceback__):
        module = frame.f_globals.get("__name__") or ""
        frames.append(Frame(
            function=frame.f_code.co_name,
            file=frame.f_code.co_filename,
            line=lineno,
            app_name=module.split(".")[0] or None,
        ))
    if not frames:
        logger.debug("Exception %s has no traceback, no event built", type(exc).__name__)
        return None
    return ExceptionEvent(
        name=type(exc).__name__,
        message=str(exc).strip(),
        backtrace=tuple(frames),
    )


def _mapping_to_event(data: Mapping) -> CustomEvent:
    if set(data) == {"type", "data"}:
        event_type, payload = data["type"], data["data"]
    elif len(data) == 1:
        (event_type, payload), = data.items()
    else:
        raise ValueError(
            "Custom event mappings need 'type' and 'data' keys or a single type key"
        )
    if not isinstance(payload, Mapping):
        raise ValueError(f"Custom event data must be a mapping, got {type(payload).__name__}")
    return CustomEvent(type=str(event_type), data=dict(payload))


def to_event(data: Any) -> Event | None:
    """Convert *data* into an Event.

    Returns None for text that is not a crash report. Raises TypeError or
    ValueError for data that cannot describe an event.
    """
    if is_event(data):
        return data
    if hasattr(data, "to_event"):
        return data.to_event()
    if isinstance(data, BaseException):
        return exception_to_event(data)
    if isinstance(data, str):
        result = parse_exception(data)
        if isinstance(result, ParseFailure):
            logger.debug("Event text is not a crash report: %s", result.reason)
            return None
        return result
    if isinstance(data, Mapping):
        return _mapping_to_event(data)
    raise TypeError(f"Cannot convert {type(data).__name__} to an event")
