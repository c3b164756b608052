"""Run ``sonar-scanner`` or publish its parameters in config-only mode."""
from __future__ import annotations

import enum
import logging
import subprocess
from typing import Callable, Iterable, List, Sequence

from packages.sonar_params.builder import redact_parameters
from packages.workflow import commands

_LOG = logging.getLogger(__name__)

SCANNER_EXECUTABLE = "sonar-scanner"
OUTPUT_NAME = "sonarParameters"


class Outcome(str, enum.Enum):
    EXECUTED = "executed"
    PUBLISHED = "published"


class ScannerError(RuntimeError):
    """Base class for scanner execution failures."""


class ScannerFailedError(ScannerError):
    """The scanner exited with the failure status."""


class ScannerNotFoundError(ScannerError):
    """The scanner executable is not on ``PATH``."""


def run_scanner(
    parameters: Sequence[str],
    *,
    only_config: bool,
    executable: str = SCANNER_EXECUTABLE,
    secrets: Iterable[str] = (),
    runner: Callable[[List[str]], int] = subprocess.call,
) -> Outcome:
    """Execute the scanner with ``parameters``, or publish them when ``only_config``.

    Only exit status 1 marks the step failed; other statuses are returned as a
    successful run after a warning.
    """

    if only_config:
        _LOG.info("Skipping running scanner.")
        commands.set_output(OUTPUT_NAME, " ".join(parameters))
        return Outcome.PUBLISHED

    cmd = [executable, *parameters]
    with commands.group("Running SonarQube"):
        _LOG.debug(
            "Running SonarQube with parameters: %s",
            ", ".join(redact_parameters(parameters, secrets)),
        )
        try:
            exit_code = runner(cmd)
        except FileNotFoundError as exc:
            commands.set_failed(f"{executable} not found on PATH.")
            raise ScannerNotFoundError(f"Scanner executable not found: {executable}") from exc

        if exit_code == 1:
            commands.set_failed("SonarScanner failed.")
            raise ScannerFailedError("SonarScanner failed")
        if exit_code != 0:
            _LOG.warning("%s exited with status %s", executable, exit_code)

    return Outcome.EXECUTED


__all__ = [
    "OUTPUT_NAME",
    "Outcome",
    "SCANNER_EXECUTABLE",
    "ScannerError",
    "ScannerFailedError",
    "ScannerNotFoundError",
    "run_scanner",
]
