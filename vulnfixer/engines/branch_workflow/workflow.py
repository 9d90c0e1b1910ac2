"""Per-package branch workflow: branch, update, commit, push, open PR."""

from __future__ import annotations

import enum
import re

import structlog

from vulnfixer.core.config import FixParams
from vulnfixer.core.github import PullRequestCreator
from vulnfixer.engines.branch_workflow.git import GitManager
from vulnfixer.engines.fix_resolver.models import FixVersionInfo
from vulnfixer.engines.package_updater import PackageUpdater, UpdateContext, get_updater
from vulnfixer.engines.package_updater.registry import UnsupportedPackageUpdater
from vulnfixer.exceptions import NoChangesError, UnsupportedPackageTypeError

log = structlog.get_logger("vulnfixer.engine")

# Characters git forbids in ref names, plus whitespace
_ILLEGAL_BRANCH_CHARS_RE = re.compile(r"[:\s~^?*\[\\]")

PR_BODY = (
    "This pull request was opened automatically to upgrade a dependency with "
    "known vulnerabilities to the lowest version that fixes them."
)


class FixOutcome(enum.Enum):
    SKIPPED = "skipped"
    PR_OPENED = "pr_opened"


def sanitize_package_name(package_name: str) -> str:
    """Replace characters that are illegal in git branch names with ``_``."""
    return _ILLEGAL_BRANCH_CHARS_RE.sub("_", package_name)


def fix_branch_name(prefix: str, package_name: str, info: FixVersionInfo) -> str:
    return f"{prefix}-{info.package_type}-{sanitize_package_name(package_name)}-{info.fix_version}"


def commit_message(package_name: str, fix_version: str) -> str:
    return f"[bot] Upgrade {package_name} to {fix_version}"


class BranchWorkflow:
    """Isolates each package fix on its own branch.

    The working tree is always returned to ``params.base_branch`` once a
    branch has been checked out, whatever the outcome.
    """

    def __init__(
        self,
        params: FixParams,
        git: GitManager,
        pr_creator: PullRequestCreator,
        context: UpdateContext,
    ) -> None:
        self._params = params
        self._git = git
        self._pr_creator = pr_creator
        self._context = context

    async def fix_package(self, package_name: str, info: FixVersionInfo) -> FixOutcome:
        """Run the full workflow for one package.

        Returns :attr:`FixOutcome.SKIPPED` if the fix branch already exists on
        the remote. Any failure after checkout is raised after rollback.
        """
        updater = get_updater(info.package_type)
        if isinstance(updater, UnsupportedPackageUpdater):
            raise UnsupportedPackageTypeError(info.package_type)

        branch = fix_branch_name(self._params.branch_prefix, package_name, info)
        if await self._git.branch_exists_on_remote(branch):
            log.info("workflow.branch_exists", branch=branch, package=package_name)
            return FixOutcome.SKIPPED

        log.info("workflow.create_branch", branch=branch, base=self._params.base_branch)
        await self._git.create_branch(branch, self._params.base_branch)

        body_failed = True
        try:
            await self._git.checkout(branch)
            await self._apply_and_publish(updater, package_name, info, branch)
            body_failed = False
        finally:
            await self._rollback(branch, suppress_errors=body_failed)
        return FixOutcome.PR_OPENED

    async def _apply_and_publish(
        self,
        updater: PackageUpdater,
        package_name: str,
        info: FixVersionInfo,
        branch: str,
    ) -> None:
        await updater.update(package_name, info.fix_version, self._context)

        if await self._git.is_clean():
            raise NoChangesError(package_name, info.fix_version)

        message = commit_message(package_name, info.fix_version)
        log.info("workflow.commit", branch=branch, message=message)
        await self._git.add_all()
        await self._git.commit(message)

        log.info("workflow.push", branch=branch)
        await self._git.push(branch, self._params.push_url, token=self._params.token)

        log.info("workflow.create_pull_request", branch=branch, base=self._params.base_branch)
        await self._pr_creator.create_pull_request(
            self._params.repo_owner,
            self._params.repo,
            branch,
            self._params.base_branch,
            message,
            PR_BODY,
        )

    async def _rollback(self, branch: str, *, suppress_errors: bool) -> None:
        """Check out the base branch.

        When the workflow already failed, uncommitted changes and untracked
        files are discarded and the local fix branch is deleted so none of
        them leaks into the next package or a re-run. Rollback errors are then
        logged instead of raised so the original error propagates.
        """
        try:
            await self._git.checkout(self._params.base_branch, force=suppress_errors)
            if suppress_errors:
                await self._git.clean()
                await self._git.delete_branch(branch)
        except Exception:
            if not suppress_errors:
                raise
            log.error(
                "workflow.rollback_failed",
                branch=branch,
                base=self._params.base_branch,
                exc_info=True,
            )
