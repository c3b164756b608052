import os

import pytest

_RUNNER_VARS = ("GITHUB_REF", "GITHUB_EVENT_PATH", "GITHUB_OUTPUT")


@pytest.fixture
def action_env(monkeypatch, tmp_path):
    """Isolate tests from the runner environment and provide a GITHUB_OUTPUT file."""

    for name in list(os.environ):
        if name.startswith("INPUT_") or name in _RUNNER_VARS:
            monkeypatch.delenv(name, raising=False)
    output_file = tmp_path / "github_output"
    output_file.write_text("")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    return output_file
