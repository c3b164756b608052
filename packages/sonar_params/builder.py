"""Translate resolved action inputs into ``sonar-scanner`` command-line parameters."""
from __future__ import annotations

import logging
from typing import Iterable, List

from packages.github_context.context import branch_or_tag_name
from packages.schema.models import ActionContext, ScannerInvocation

_LOG = logging.getLogger(__name__)

REDACTED = "***"


def _bool(value: bool) -> str:
    return "true" if value else "false"


def configuration_summary(invocation: ScannerInvocation) -> str:
    """Multi-line summary of the resolved inputs with the token redacted."""

    rows = [
        ("ProjectName", invocation.project_name),
        ("ProjectKey", invocation.project_key),
        ("BaseDir", invocation.base_dir),
        ("Token", REDACTED),
        ("URL", invocation.url),
        ("scmProvider", invocation.scm_provider),
        ("sourceEncoding", invocation.source_encoding),
        ("enablePullRequestDecoration", _bool(invocation.enable_pull_request_decoration)),
        ("onlyConfig", _bool(invocation.only_config)),
        ("isCommunityEdition", _bool(invocation.is_community_edition)),
        ("runQualityGate", _bool(invocation.run_quality_gate)),
        ("qualityGateTimeout", invocation.quality_gate_timeout),
        ("organization", invocation.organization),
        ("extraArgs", invocation.extra_args),
    ]
    width = max(len(label) for label, _ in rows)
    lines = ["Using Configuration:", ""]
    lines.extend(f"  {label.ljust(width)} : {value}" for label, value in rows)
    return "\n".join(lines)


def redact_parameters(parameters: Iterable[str], secrets: Iterable[str]) -> List[str]:
    masked = [secret for secret in secrets if secret]
    redacted = []
    for param in parameters:
        for secret in masked:
            param = param.replace(secret, REDACTED)
        redacted.append(param)
    return redacted


def build_parameters(invocation: ScannerInvocation, context: ActionContext) -> List[str]:
    """Return the ordered ``-D`` parameters for ``invocation``.

    The base parameters always come first, in a fixed order. Optional
    parameters follow, then the branch or pull request parameters unless the
    server is a community edition.
    """

    params = [
        f"-Dsonar.login={invocation.token}",
        f"-Dsonar.host.url={invocation.url}",
        f"-Dsonar.projectKey={invocation.project_key}",
        f"-Dsonar.projectName='{invocation.project_name}'",
        f"-Dsonar.scm.provider={invocation.scm_provider}",
        f"-Dsonar.sourceEncoding={invocation.source_encoding}",
        f"-Dsonar.qualitygate.wait={_bool(invocation.run_quality_gate)}",
    ]

    # Passed through as one opaque entry; the caller owns its formatting.
    if invocation.extra_args:
        params.append(invocation.extra_args)
    if invocation.base_dir:
        params.append(f"-Dsonar.projectBaseDir={invocation.base_dir}")
    if invocation.organization:
        params.append(f"-Dsonar.organization={invocation.organization}")

    if invocation.quality_gate_timeout:
        if invocation.run_quality_gate:
            params.append(f"-Dsonar.qualitygate.timeout={invocation.quality_gate_timeout}")
        else:
            _LOG.warning('"runQualityGate" not set, ignoring provided quality gate timeout')

    _LOG.info(configuration_summary(invocation))

    if invocation.is_community_edition:
        _LOG.debug("Community edition: skipping branch and pull request parameters")
        return params

    pr = context.pull_request
    if pr is None:
        branch_name = branch_or_tag_name(context.ref)
        params.append(f"-Dsonar.branch.name={branch_name}")
        _LOG.info("-- Configuration for branch:\n  branchName : %s", branch_name)
    elif invocation.enable_pull_request_decoration:
        _LOG.info(
            "-- Configuration for pull request decoration:\n"
            "  Pull request number      : %s\n"
            "  Pull request branch      : %s\n"
            "  Pull request base branch : %s",
            pr.number,
            pr.head_ref,
            pr.base_ref,
        )
        params.append(f"-Dsonar.pullrequest.key={pr.number}")
        params.append(f"-Dsonar.pullrequest.base={pr.base_ref}")
        params.append(f"-Dsonar.pullrequest.branch={pr.head_ref}")
    else:
        _LOG.debug(
            "Pull request #%s found but decoration is disabled; no branch parameters added",
            pr.number,
        )

    return params


__all__ = ["REDACTED", "build_parameters", "configuration_summary", "redact_parameters"]
