"""Structured event variants attached to log entries.

Each variant is an immutable dataclass; ``Event`` is the closed union of all
of them. ``to_dict()`` gives the generic shape used on the wire and
``from_dict()`` rebuilds a variant from that shape.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Union


@dataclass(frozen=True)
class _EventBase:
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class ControllerCallEvent(_EventBase):
    controller: str
    action: str
    params_json: str | None = None
    pipelines: tuple[str, ...] | None = None


@dataclass(frozen=True)
class CustomEvent(_EventBase):
    """Caller-defined event; ``type`` becomes the wire key for ``data``."""

    type: str
    data: dict[str, Any]


@dataclass(frozen=True)
class Frame:
    function: str
    file: str | None = None
    line: int | None = None
    app_name: str | None = None


@dataclass(frozen=True)
class ExceptionEvent(_EventBase):
    name: str
    message: str
    backtrace: tuple[Frame, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExceptionEvent":
        frames = tuple(
            f if isinstance(f, Frame) else Frame(**f)
            for f in data.get("backtrace") or ()
        )
        return cls(name=data["name"], message=data.get("message", ""), backtrace=frames)

    def log_message(self) -> list[str]:
        """Chardata used as the log line for this exception: ``(Name) message``."""
        return ["(", self.name, ") ", self.message]


@dataclass(frozen=True)
class HTTPClientRequestEvent(_EventBase):
    method: str
    host: str
    path: str | None = None
    port: int | None = None
    query_string: str | None = None
    scheme: str | None = None
    headers: dict[str, str] | None = None
    request_id: str | None = None
    service_name: str | None = None


@dataclass(frozen=True)
class HTTPClientResponseEvent(_EventBase):
    status: int
    time_ms: float
    headers: dict[str, str] | None = None
    request_id: str | None = None
    service_name: str | None = None


@dataclass(frozen=True)
class HTTPServerRequestEvent(_EventBase):
    method: str
    host: str
    path: str | None = None
    port: int | None = None
    query_string: str | None = None
    scheme: str | None = None
    headers: dict[str, str] | None = None
    request_id: str | None = None


@dataclass(frozen=True)
class HTTPServerResponseEvent(_EventBase):
    status: int
    time_ms: float
    headers: dict[str, str] | None = None
    request_id: str | None = None


@dataclass(frozen=True)
class SQLQueryEvent(_EventBase):
    sql: str
    time_ms: float


@dataclass(frozen=True)
class TemplateRenderEvent(_EventBase):
    name: str
    time_ms: float


Event = Union[
    ControllerCallEvent,
    CustomEvent,
    ExceptionEvent,
    HTTPClientRequestEvent,
    HTTPClientResponseEvent,
    HTTPServerRequestEvent,
    HTTPServerResponseEvent,
    SQLQueryEvent,
    TemplateRenderEvent,
]

EVENT_TYPES: tuple[type, ...] = (
    ControllerCallEvent,
    CustomEvent,
    ExceptionEvent,
    HTTPClientRequestEvent,
    HTTPClientResponseEvent,
    HTTPServerRequestEvent,
    HTTPServerResponseEvent,
    SQLQueryEvent,
    TemplateRenderEvent,
)


def is_event(value: Any) -> bool:
    return isinstance(value, EVENT_TYPES)
