"""Render log entries as JSON documents or pretty logfmt blocks."""

from typing import Any, Iterable

from logcodec import logfmt
from logcodec.config import FORMATS, EntryConfig
from logcodec.log_entry import LogEntry, to_map


def encode_json(data: dict[str, Any], config: EntryConfig) -> str:
    return config.json_encoder(data)


def encode_logfmt(data: dict[str, Any]) -> str:
    """Two-section block: a Context line then an Event line, each only if present.

    This is a pretty-print for humans, not a flat logfmt line of the whole map.
    """
    parts = []
    context = data.get("context")
    if context:
        parts.append("\n\tContext: " + logfmt.encode(context))
    event = data.get("event")
    if event:
        parts.append("\n\tEvent: " + logfmt.encode(event))
    return "".join(parts)


def render(
    entry: LogEntry,
    fmt: str = "json",
    only: Iterable[str] | None = None,
    config: EntryConfig | None = None,
) -> str:
    """Encode *entry* in *fmt* ("json" or "logfmt").

    Errors raised by the JSON or logfmt encoders propagate to the caller.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format {fmt!r}, expected one of {FORMATS}")
    config = config or EntryConfig()
    data = to_map(entry, only if only is not None else config.only)
    if fmt == "json":
        return encode_json(data, config)
    return encode_logfmt(data)
