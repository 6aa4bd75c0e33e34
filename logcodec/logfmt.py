"""Minimal logfmt encoder (``key=value key2="quoted value"``).

Nested mappings are flattened with dotted keys and sequences with their
index, so ``{"http": {"status": 200}, "tags": ["a"]}`` encodes as
``http.status=200 tags.0=a``.
"""

from collections.abc import Mapping
from typing import Any, Iterator

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _needs_quoting(text: str) -> bool:
    if not text:
        return True
    return any(ch.isspace() or ch in '="' for ch in text)


def encode_value(value: Any) -> str:
    if value is None:
        text = ""
    elif isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)

    if not _needs_quoting(text):
        return text
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in text) + '"'


def _flatten(prefix: str, value: Any) -> Iterator[tuple[str, Any]]:
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield from _flatten(f"{prefix}.{key}" if prefix else str(key), item)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _flatten(f"{prefix}.{index}" if prefix else str(index), item)
    else:
        yield prefix, value


def encode(data: Mapping[str, Any]) -> str:
    """Encode a mapping as a single logfmt line."""
    if not isinstance(data, Mapping):
        raise TypeError(f"logfmt can only encode mappings, got {type(data).__name__}")
    return " ".join(f"{key}={encode_value(value)}" for key, value in _flatten("", data))
