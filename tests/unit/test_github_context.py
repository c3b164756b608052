import json
from pathlib import Path

import pytest

from packages.github_context import context
from packages.github_context.context import EventPayloadError


def write_event(tmp_path: Path, payload) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps(payload))
    return path


@pytest.mark.parametrize(
    "ref, expected",
    [
        ("refs/heads/feature/foo", "foo"),
        ("refs/tags/v1.0", "v1.0"),
        ("refs/heads/main", "main"),
        ("main", "main"),
        ("", ""),
    ],
)
def test_branch_or_tag_name(ref, expected):
    assert context.branch_or_tag_name(ref) == expected


def test_read_context_push_event(tmp_path):
    event = write_event(tmp_path, {"ref": "refs/heads/main", "commits": []})
    env = {"GITHUB_REF": "refs/heads/main", "GITHUB_EVENT_PATH": str(event)}
    ctx = context.read_context(env)
    assert ctx.ref == "refs/heads/main"
    assert ctx.pull_request is None


def test_read_context_pull_request_event(tmp_path):
    event = write_event(
        tmp_path,
        {
            "pull_request": {
                "number": 42,
                "head": {"ref": "feature/login"},
                "base": {"ref": "develop"},
            }
        },
    )
    env = {"GITHUB_REF": "refs/pull/42/merge", "GITHUB_EVENT_PATH": str(event)}
    ctx = context.read_context(env)
    assert ctx.pull_request is not None
    assert ctx.pull_request.number == 42
    assert ctx.pull_request.head_ref == "feature/login"
    assert ctx.pull_request.base_ref == "develop"


def test_read_context_overrides(tmp_path):
    event = write_event(tmp_path, {})
    ctx = context.read_context({"GITHUB_REF": "refs/heads/ignored"}, event_path=event, ref="refs/tags/v2")
    assert ctx.ref == "refs/tags/v2"
    assert ctx.pull_request is None


def test_missing_event_file_yields_empty_payload(tmp_path):
    assert context.load_event_payload(None) == {}
    assert context.load_event_payload(tmp_path / "absent.json") == {}
    ctx = context.read_context({})
    assert ctx.ref == ""
    assert ctx.pull_request is None


def test_malformed_event_payload(tmp_path):
    path = tmp_path / "event.json"
    path.write_text("{not json")
    with pytest.raises(EventPayloadError):
        context.load_event_payload(path)

    with pytest.raises(EventPayloadError):
        context.load_event_payload(write_event(tmp_path, ["list"]))


def test_incomplete_pull_request_payload(tmp_path):
    event = write_event(tmp_path, {"pull_request": {"number": 3, "head": {"ref": "x"}}})
    with pytest.raises(EventPayloadError):
        context.read_context({"GITHUB_EVENT_PATH": str(event)})
