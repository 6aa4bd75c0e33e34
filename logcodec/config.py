"""Configuration loading from an optional YAML file and env vars."""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable

import yaml

from logcodec.eventable import to_event
from logcodec.timestamp import format_timestamp

logger = logging.getLogger(__name__)

FORMATS = ("json", "logfmt")


@dataclass(frozen=True)
class EntryConfig:
    context_key: str = "context"   # metadata key holding the context mapping
    event_key: str = "event"       # metadata key holding raw event data
    fmt: str = "json"              # "json" or "logfmt"
    only: tuple[str, ...] = ()     # top-level fields to keep; empty keeps all
    schema_path: str | None = None
    json_encoder: Callable[[dict], str] = field(default=json.dumps, repr=False)
    timestamp_formatter: Callable[[Any], str] = field(default=format_timestamp, repr=False)
    event_converter: Callable[[Any], Any] = field(default=to_event, repr=False)

    def __post_init__(self):
        if self.fmt not in FORMATS:
            raise ValueError(f"Unknown format {self.fmt!r}, expected one of {FORMATS}")


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
        return data
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}


def load_config(yaml_data: dict | None = None) -> EntryConfig:
    """Build EntryConfig from parsed YAML data, with env var overrides."""
    yaml_data = yaml_data or {}
    return EntryConfig(
        context_key=os.environ.get("LOGCODEC_CONTEXT_KEY", yaml_data.get("context_key", "context")),
        event_key=os.environ.get("LOGCODEC_EVENT_KEY", yaml_data.get("event_key", "event")),
        fmt=os.environ.get("LOGCODEC_FORMAT", yaml_data.get("format", "json")),
        only=tuple(yaml_data.get("only") or ()),
        schema_path=yaml_data.get("schema_path"),
    )
