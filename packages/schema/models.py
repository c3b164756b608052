"""Core schema models shared by the input reader, parameter builder, and runner."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PullRequest(BaseModel):
    """Pull request identity taken from the triggering event payload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    number: int
    head_ref: str
    base_ref: str


class ActionContext(BaseModel):
    """CI context of the running workflow."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ref: str = ""
    pull_request: Optional[PullRequest] = None


class ScannerInvocation(BaseModel):
    """Resolved action inputs for a single scanner run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    project_name: str = Field(min_length=1)
    project_key: str = Field(min_length=1)
    token: str = Field(min_length=1, repr=False)
    url: str = Field(min_length=1)
    scm_provider: str = Field(min_length=1)
    base_dir: str = ""
    source_encoding: str = ""
    enable_pull_request_decoration: bool = False
    only_config: bool = False
    is_community_edition: bool = False
    run_quality_gate: bool = False
    quality_gate_timeout: str = ""
    organization: str = ""
    extra_args: str = ""
