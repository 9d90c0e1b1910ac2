"""FixPullRequestsRunner: scan, aggregate, and fix each package in turn."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import structlog

from vulnfixer.core.config import FixParams
from vulnfixer.core.github import PullRequestCreator
from vulnfixer.core.usage import report_usage
from vulnfixer.engines.branch_workflow import BranchWorkflow, FixOutcome, GitManager
from vulnfixer.engines.fix_resolver import FixPolicy, create_fix_versions_map
from vulnfixer.engines.fix_resolver.aggregator import has_package_type
from vulnfixer.engines.fix_resolver.models import FixVersionsMap, ScanResponse
from vulnfixer.engines.package_updater import UpdateContext, build_maven_property_map
from vulnfixer.engines.scanner import Scanner
from vulnfixer.exceptions import UnsupportedPackageTypeError

log = structlog.get_logger("vulnfixer.engine")

FEATURE_NAME = "create-fix-pull-requests"


@dataclass
class RunSummary:
    """Per-package outcome of one run."""

    opened: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    unsupported: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class FixPullRequestsRunner:
    """Open one fix pull request per vulnerable package.

    Scan and aggregation failures propagate; a failure while fixing one
    package is logged and the next package is attempted.
    """

    def __init__(
        self,
        params: FixParams,
        scanner: Scanner,
        pr_creator: PullRequestCreator,
        git: GitManager | None = None,
    ) -> None:
        self._params = params
        self._scanner = scanner
        self._pr_creator = pr_creator
        self._git = git or GitManager(params.workdir, params.remote)

    async def run(self) -> RunSummary:
        usage_task = asyncio.create_task(report_usage(self._params.usage_url, FEATURE_NAME))
        try:
            responses = await self._scanner.scan()
            context = self._build_context(responses)
            policy = FixPolicy(context.maven_properties)
            fix_versions = create_fix_versions_map(responses, policy.should_fix)
            log.info("runner.fix_versions_resolved", packages=len(fix_versions))
            summary = await self._fix_all(fix_versions, context)
        finally:
            await usage_task

        log.info(
            "runner.completed",
            opened=len(summary.opened),
            skipped=len(summary.skipped),
            unsupported=len(summary.unsupported),
            failed=len(summary.failed),
        )
        return summary

    def _build_context(self, responses: list[ScanResponse]) -> UpdateContext:
        """Compute per-run inputs shared by the policy and the updaters."""
        maven_properties: dict[str, set[str]] = {}
        if has_package_type(responses, "Maven"):
            maven_properties = build_maven_property_map(self._params.workdir)
        return UpdateContext(workdir=self._params.workdir, maven_properties=maven_properties)

    async def _fix_all(self, fix_versions: FixVersionsMap, context: UpdateContext) -> RunSummary:
        workflow = BranchWorkflow(self._params, self._git, self._pr_creator, context)
        summary = RunSummary()
        for package, info in fix_versions.items():
            log.info("runner.fixing", package=package, version=info.fix_version)
            try:
                outcome = await workflow.fix_package(package, info)
            except UnsupportedPackageTypeError:
                log.warning(
                    "runner.package_unsupported",
                    package=package,
                    version=info.fix_version,
                    package_type=info.package_type,
                )
                summary.unsupported.append(package)
                continue
            except Exception as exc:
                log.error(
                    "runner.package_failed",
                    package=package,
                    version=info.fix_version,
                    package_type=info.package_type,
                    error=str(exc),
                )
                summary.failed.append(package)
                continue
            if outcome is FixOutcome.SKIPPED:
                summary.skipped.append(package)
            else:
                summary.opened.append(package)
        return summary
