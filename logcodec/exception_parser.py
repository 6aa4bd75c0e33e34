"""Line-oriented parser for runtime crash reports.

Turns text such as::

    ** (RuntimeError) boom
        (myapp) lib/my_app/worker.ex:42: MyApp.Worker.run/1
        (elixir) lib/task/supervised.ex:85: Task.Supervised.do_apply/2

into an ``ExceptionEvent``. Lines are scanned once, left to right. Until the
``** (Name) message`` header is found every other line is ignored; after it,
lines starting with ``(`` are read as backtrace frames and anything else is
skipped, so banners, blank lines and wrapped text do not break parsing.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from logcodec.events import ExceptionEvent, Frame

logger = logging.getLogger(__name__)

COULD_NOT_PARSE_MESSAGE = "could_not_parse_message"

_EXIT_MARKER = "** (exit) "
_HEADER_MARKER = "** ("
_FRAME_MARKER = "("

_LINE_NUMBER_RE = re.compile(r"^\s*(\d+)")


class _State(Enum):
    SEEKING_HEADER = "seeking_header"
    ACCUMULATING = "accumulating"


@dataclass(frozen=True)
class ParseFailure:
    """Returned instead of an event when the text is not a crash report."""

    reason: str = COULD_NOT_PARSE_MESSAGE

    def __bool__(self) -> bool:
        return False


def _parse_line_number(segment: str) -> int | None:
    m = _LINE_NUMBER_RE.match(segment)
    if not m:
        return None
    return int(m.group(1))


def _parse_header(suffix: str) -> tuple[str, str] | None:
    """Split ``RuntimeError) boom`` → ("RuntimeError", " boom")."""
    name, sep, message = suffix.partition(")")
    if not sep or not name:
        return None
    return name, message


def _parse_frame(suffix: str) -> Frame | None:
    """Parse ``myapp) lib/foo.ex:10: MyApp.Foo.bar/1`` into a Frame."""
    app_name, sep, rest = suffix.partition(")")
    if not sep:
        return None
    file, sep, rest = rest.partition(":")
    if not sep:
        return None
    line_number, sep, function = rest.partition(":")
    if not sep:
        return None
    return Frame(
        function=function.strip(),
        file=file.strip(),
        line=_parse_line_number(line_number),
        app_name=app_name,
    )


def parse_exception(raw_text: str) -> ExceptionEvent | ParseFailure:
    """Parse a crash report into an ExceptionEvent.

    Returns a ParseFailure when no header was found or the header was not
    followed by at least one frame. Never raises on string input.
    """
    state = _State.SEEKING_HEADER
    name: str | None = None
    message = ""
    # Frames in raw-text order, innermost call first.
    frames: list[Frame] = []

    for raw_line in raw_text.split("\n"):
        line = raw_line.strip()

        if state is _State.SEEKING_HEADER:
            if line.startswith(_EXIT_MARKER):
                continue
            if line.startswith(_HEADER_MARKER):
                header = _parse_header(line[len(_HEADER_MARKER):])
                if header is None:
                    continue
                name, message = header
                state = _State.ACCUMULATING
            continue

        if line.startswith(_FRAME_MARKER):
            frame = _parse_frame(line[len(_FRAME_MARKER):])
            if frame is not None:
                frames.append(frame)

    if name is None or not frames:
        logger.debug("Could not parse exception from %d chars of text", len(raw_text))
        return ParseFailure()

    frames.reverse()
    logger.debug("Parsed %s with %d frame(s)", name, len(frames))
    return ExceptionEvent(name=name, message=message.strip(), backtrace=tuple(frames))
