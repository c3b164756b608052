"""GitHub Actions workflow commands: log levels, groups, masks, and step outputs."""
from __future__ import annotations

import logging
import os
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _stream(stream: Optional[TextIO]) -> TextIO:
    return sys.stdout if stream is None else stream


def issue_command(command: str, message: str = "", *, stream: Optional[TextIO] = None) -> None:
    out = _stream(stream)
    out.write(f"::{command}::{_escape_data(message)}\n")
    out.flush()


class WorkflowCommandHandler(logging.Handler):
    """Render log records the way the runner expects them on stdout.

    INFO goes out verbatim; DEBUG, WARNING and ERROR become ``::debug::``,
    ``::warning::`` and ``::error::`` commands.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(level=logging.DEBUG)
        self._stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            out = _stream(self._stream)
            if record.levelno >= logging.ERROR:
                issue_command("error", message, stream=out)
            elif record.levelno >= logging.WARNING:
                issue_command("warning", message, stream=out)
            elif record.levelno >= logging.INFO:
                out.write(message + "\n")
                out.flush()
            else:
                issue_command("debug", message, stream=out)
        except Exception:  # pragma: no cover - logging must not raise
            self.handleError(record)


def configure_logging(logger_name: str = "packages", stream: Optional[TextIO] = None) -> logging.Handler:
    """Attach a ``WorkflowCommandHandler`` to ``logger_name`` and return it."""

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if isinstance(existing, WorkflowCommandHandler):
            logger.removeHandler(existing)
    handler = WorkflowCommandHandler(stream)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


@contextmanager
def group(title: str, *, stream: Optional[TextIO] = None) -> Iterator[None]:
    issue_command("group", title, stream=stream)
    try:
        yield
    finally:
        issue_command("endgroup", stream=stream)


def add_mask(value: str, *, stream: Optional[TextIO] = None) -> None:
    if value:
        issue_command("add-mask", value, stream=stream)


def set_failed(message: str, *, stream: Optional[TextIO] = None) -> None:
    issue_command("error", message, stream=stream)


def set_output(name: str, value: str, *, stream: Optional[TextIO] = None) -> None:
    """Publish a step output through ``$GITHUB_OUTPUT``.

    Falls back to the legacy ``::set-output`` command when the file is not
    provided by the runner.
    """

    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        out = _stream(stream)
        out.write(f"::set-output name={name}::{_escape_data(value)}\n")
        out.flush()
        return

    with open(output_file, "a", encoding="utf-8") as handle:
        if "\n" in value or "\r" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            handle.write(f"{name}={value}\n")


__all__ = [
    "WorkflowCommandHandler",
    "add_mask",
    "configure_logging",
    "group",
    "issue_command",
    "set_failed",
    "set_output",
]
