"""Resolve the triggering ref and pull request from the GitHub Actions environment."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from packages.schema.models import ActionContext, PullRequest

_LOG = logging.getLogger(__name__)


class EventPayloadError(ValueError):
    """The workflow event payload could not be parsed."""


def branch_or_tag_name(ref: str) -> str:
    """Return the final ``/`` segment of ``ref`` (``refs/tags/v1.0`` -> ``v1.0``)."""

    return ref.split("/")[-1]


def load_event_payload(path: Optional[Path]) -> Dict[str, Any]:
    if path is None or not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise EventPayloadError(f"Event payload {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise EventPayloadError(f"Event payload {path} must be a JSON object")
    return payload


def _pull_request_from_payload(payload: Mapping[str, Any]) -> Optional[PullRequest]:
    pr = payload.get("pull_request")
    if not pr:
        return None
    try:
        return PullRequest(
            number=pr["number"],
            head_ref=pr["head"]["ref"],
            base_ref=pr["base"]["ref"],
        )
    except (KeyError, TypeError) as exc:
        raise EventPayloadError(f"Pull request payload is missing field: {exc}") from exc


def read_context(
    environ: Optional[Mapping[str, str]] = None,
    *,
    event_path: Optional[Path] = None,
    ref: Optional[str] = None,
) -> ActionContext:
    """Build the ``ActionContext`` for this run.

    ``event_path`` and ``ref`` override ``GITHUB_EVENT_PATH`` and ``GITHUB_REF``.
    """

    env = os.environ if environ is None else environ
    if event_path is None and env.get("GITHUB_EVENT_PATH"):
        event_path = Path(env["GITHUB_EVENT_PATH"])
    if ref is None:
        ref = env.get("GITHUB_REF", "")

    payload = load_event_payload(event_path)
    pull_request = _pull_request_from_payload(payload)
    _LOG.debug(
        "Resolved CI context: ref=%s pull_request=%s",
        ref,
        pull_request.number if pull_request else None,
    )
    return ActionContext(ref=ref, pull_request=pull_request)


__all__ = ["EventPayloadError", "branch_or_tag_name", "load_event_payload", "read_context"]
