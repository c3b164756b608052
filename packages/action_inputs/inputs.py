"""Read action inputs from the runner environment and an optional YAML defaults file."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from packages.schema.models import ScannerInvocation

_LOG = logging.getLogger(__name__)


class MissingInputError(ValueError):
    """A required input was absent or empty."""

    def __init__(self, name: str):
        super().__init__(f"Input required and not supplied: {name}")
        self.name = name


class InputsFileError(ValueError):
    """The inputs file could not be interpreted as a mapping of inputs."""


def _env_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(
    name: str,
    *,
    required: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    defaults: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the trimmed value of input ``name``.

    The runner environment wins over ``defaults``. Raises ``MissingInputError``
    when ``required`` is set and neither source supplies a non-empty value.
    """

    env = os.environ if environ is None else environ
    value = env.get(_env_name(name), "").strip()
    if not value and defaults:
        value = str(defaults.get(name, "")).strip()
    if required and not value:
        raise MissingInputError(name)
    return value


def get_boolean_input(
    name: str,
    *,
    environ: Optional[Mapping[str, str]] = None,
    defaults: Optional[Mapping[str, str]] = None,
) -> bool:
    return get_input(name, environ=environ, defaults=defaults).lower() == "true"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_inputs_file(path: Path) -> Dict[str, str]:
    """Load input defaults from a YAML mapping of input name to scalar value."""

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InputsFileError(f"Inputs file {path} is not valid YAML: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise InputsFileError(f"Inputs file {path} must contain a mapping of input names")

    defaults: Dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, (dict, list)):
            raise InputsFileError(f"Input '{key}' in {path} must be a scalar value")
        defaults[str(key)] = _stringify(value)
    _LOG.debug("Loaded %d input default(s) from %s", len(defaults), path)
    return defaults


def read_invocation(
    environ: Optional[Mapping[str, str]] = None,
    defaults: Optional[Mapping[str, str]] = None,
) -> ScannerInvocation:
    """Resolve every action input into a ``ScannerInvocation``."""

    def text(name: str, required: bool = False) -> str:
        return get_input(name, required=required, environ=environ, defaults=defaults)

    def flag(name: str) -> bool:
        return get_boolean_input(name, environ=environ, defaults=defaults)

    return ScannerInvocation(
        project_name=text("projectName", required=True),
        project_key=text("projectKey", required=True),
        base_dir=text("baseDir"),
        token=text("token", required=True),
        url=text("url", required=True),
        scm_provider=text("scmProvider", required=True),
        source_encoding=text("sourceEncoding"),
        enable_pull_request_decoration=flag("enablePullRequestDecoration"),
        only_config=flag("onlyConfig"),
        is_community_edition=flag("isCommunityEdition"),
        run_quality_gate=flag("runQualityGate"),
        quality_gate_timeout=text("qualityGateTimeout"),
        organization=text("organization"),
        extra_args=text("extraArgs"),
    )


__all__ = [
    "InputsFileError",
    "MissingInputError",
    "get_boolean_input",
    "get_input",
    "load_inputs_file",
    "read_invocation",
]
