"""Typer CLI entrypoint for the SonarQube scan step."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import typer
from rich.console import Console

from packages.action_inputs.inputs import InputsFileError, MissingInputError, load_inputs_file, read_invocation
from packages.github_context.context import EventPayloadError, read_context
from packages.sonar_params.builder import REDACTED, build_parameters, redact_parameters
from packages.sonar_runner.invoke import SCANNER_EXECUTABLE, ScannerError, run_scanner
from packages.workflow import commands

app = typer.Typer(add_completion=False)
console = Console(highlight=False)


class DebugLogger:
    """JSONL debug trace writer used during CLI runs."""

    def __init__(self, path: Optional[Path]):
        self._handle = None
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = path.open("w", encoding="utf-8")

    def log(self, event: str, payload: Optional[dict] = None, **extra: object) -> None:
        if not self._handle:
            return
        entry: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event,
        }
        if payload:
            entry.update(payload)
        if extra:
            entry.update(extra)
        self._handle.write(json.dumps(entry, ensure_ascii=False) + "\n")
        self._handle.flush()

    def close(self) -> None:
        if self._handle:
            self._handle.close()
            self._handle = None


@app.command()
def scan(
    inputs_file: Optional[Path] = typer.Option(
        None,
        "--inputs-file",
        help="YAML file with default input values; INPUT_* variables take precedence",
    ),
    event_path: Optional[Path] = typer.Option(
        None, "--event-path", help="Override GITHUB_EVENT_PATH"
    ),
    ref: Optional[str] = typer.Option(None, "--ref", help="Override GITHUB_REF"),
    scanner: str = typer.Option(SCANNER_EXECUTABLE, "--scanner", help="Scanner executable to run"),
    debug_log: Optional[Path] = typer.Option(
        None,
        "--debug-log",
        help="Write debug trace JSONL to this path",
    ),
) -> None:
    """Assemble sonar-scanner parameters from action inputs and run the scanner."""

    commands.configure_logging()
    debug = DebugLogger(debug_log)

    try:
        debug.log("start", {"scanner": scanner, "inputs_file": str(inputs_file) if inputs_file else None})

        try:
            defaults: Dict[str, str] = load_inputs_file(inputs_file) if inputs_file else {}
            invocation = read_invocation(defaults=defaults)
            context = read_context(event_path=event_path, ref=ref)
        except (MissingInputError, InputsFileError, EventPayloadError) as exc:
            commands.set_failed(str(exc))
            debug.log("error", {"stage": "configuration", "message": str(exc)})
            debug.log("exit", {"code": 1})
            raise typer.Exit(code=1) from exc

        commands.add_mask(invocation.token)
        debug.log("inputs", {"invocation": invocation.model_dump(exclude={"token"}), "token": REDACTED})
        debug.log("context", {"context": context.model_dump()})

        parameters = build_parameters(invocation, context)
        debug.log("parameters", {"parameters": redact_parameters(parameters, [invocation.token])})

        try:
            outcome = run_scanner(
                parameters,
                only_config=invocation.only_config,
                executable=scanner,
                secrets=[invocation.token],
            )
        except ScannerError as exc:
            console.print(f"[red]{exc}[/]")
            debug.log("error", {"stage": "scanner", "message": str(exc)})
            debug.log("exit", {"code": 1})
            raise typer.Exit(code=1) from exc

        console.print(f"[green]SonarQube step finished ({outcome.value})[/]")
        debug.log("exit", {"code": 0, "outcome": outcome.value})
        raise typer.Exit(code=0)

    finally:
        debug.close()


if __name__ == "__main__":  # pragma: no cover - manual execution
    app()
