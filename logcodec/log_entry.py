"""Canonical log entry and its projection into the wire map.

A LogEntry is built once per log call from the timestamp, level, message
and metadata the caller captured, and is read-only from then on. ``to_map``
produces the structure handed to the JSON or logfmt encoder::

    {
        "$schema": SCHEMA_URL,
        "dt": "2024-01-15T10:30:00.000000Z",
        "level": "error",
        "message": "(RuntimeError) boom",
        "context": {...},
        "event": {"server_side_app": {"exception": {...}}}
    }
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable

from logcodec.blanks import drop_blanks
from logcodec.config import EntryConfig
from logcodec.events import (
    ControllerCallEvent,
    CustomEvent,
    Event,
    ExceptionEvent,
    HTTPClientRequestEvent,
    HTTPClientResponseEvent,
    HTTPServerRequestEvent,
    HTTPServerResponseEvent,
    SQLQueryEvent,
    TemplateRenderEvent,
    is_event,
)

logger = logging.getLogger(__name__)

SCHEMA_URL = "https://raw.githubusercontent.com/timberio/log-event-json-schema/1.0.0/schema.json"
SCHEMA_KEY = "$schema"
EVENT_NAMESPACE = "server_side_app"
FIELDS = ("context", "dt", "level", "message", "event")

# Every variant except CustomEvent, which is keyed by its own type.
WIRE_KEYS: dict[type, str] = {
    ControllerCallEvent: "controller_call",
    ExceptionEvent: "exception",
    HTTPClientRequestEvent: "http_client_request",
    HTTPClientResponseEvent: "http_client_response",
    HTTPServerRequestEvent: "http_server_request",
    HTTPServerResponseEvent: "http_server_response",
    SQLQueryEvent: "sql_query",
    TemplateRenderEvent: "template_render",
}
CUSTOM_WIRE_KEY = "custom"


@dataclass(frozen=True)
class LogEntry:
    dt: str
    level: str
    message: Any  # str or nested lists of str
    context: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    event: Event | None = None


def chardata_to_string(message: Any) -> str:
    """Flatten a str or arbitrarily nested list/tuple of str into one str."""
    if isinstance(message, str):
        return message
    if isinstance(message, (list, tuple)):
        return "".join(chardata_to_string(part) for part in message)
    return str(message)


def build_log_entry(
    timestamp: Any,
    level: str,
    message: Any,
    metadata: Mapping[str, Any] | None = None,
    config: EntryConfig | None = None,
) -> LogEntry:
    """Create a LogEntry from a captured log call.

    The context comes from ``metadata[config.context_key]`` (empty when
    absent) and the event from ``metadata[config.event_key]`` passed through
    ``config.event_converter``. Event data the converter rejects is logged
    and dropped, so an entry is always produced.
    """
    config = config or EntryConfig()
    metadata = metadata or {}

    context = metadata.get(config.context_key) or {}
    if not isinstance(context, Mapping):
        logger.warning("Ignoring non-mapping context of type %s", type(context).__name__)
        context = {}

    event = None
    raw_event = metadata.get(config.event_key)
    if raw_event is not None:
        try:
            event = config.event_converter(raw_event)
        except Exception as e:
            logger.warning("Dropping unconvertible event data (%s): %r",
                           type(raw_event).__name__, e)
        else:
            if event is not None and not is_event(event):
                logger.warning("Dropping event data converted to %s, not an event",
                               type(event).__name__)
                event = None

    return LogEntry(
        dt=config.timestamp_formatter(timestamp),
        level=level,
        message=message,
        context=MappingProxyType(dict(context)),
        event=event,
    )


def to_api_map(event: Event) -> dict[str, Any]:
    """Map an event to its wire shape under the ``server_side_app`` namespace."""
    if isinstance(event, CustomEvent):
        return {EVENT_NAMESPACE: {CUSTOM_WIRE_KEY: {event.type: event.data}}}
    key = WIRE_KEYS.get(type(event))
    if key is None:
        raise TypeError(f"No wire key for event type {type(event).__name__}")
    return {EVENT_NAMESPACE: {key: event.to_dict()}}


def to_map(entry: LogEntry, only: Iterable[str] | None = None) -> dict[str, Any]:
    """Project *entry* into the pruned, schema-tagged wire map.

    ``only`` restricts the top-level fields; the ``$schema`` tag is always
    added after filtering.
    """
    data = {
        "context": entry.context,
        "dt": entry.dt,
        "level": entry.level,
        "message": chardata_to_string(entry.message),
        "event": to_api_map(entry.event) if entry.event is not None else None,
    }
    only = tuple(only or ())
    if only:
        data = {k: v for k, v in data.items() if k in only}
    data[SCHEMA_KEY] = SCHEMA_URL
    return drop_blanks(data)
