"""CLI entry point: vulnfixer.

Subcommands:
    vulnfixer create-fix-pull-requests --report scan.json
    vulnfixer create-fix-pull-requests --scan-command "jf audit --format=simple-json"
"""

from __future__ import annotations

import asyncio
import sys

import click
import structlog
from dotenv import load_dotenv

from vulnfixer.core.config import FixParams, load_params
from vulnfixer.core.github import GitHubClient
from vulnfixer.core.logging import setup_logging
from vulnfixer.engines.scanner import CommandScanner, ReportFileScanner, Scanner
from vulnfixer.exceptions import VulnFixerError
from vulnfixer.runner import FixPullRequestsRunner, RunSummary

log = structlog.get_logger("vulnfixer.cli")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """vulnfixer: open upgrade pull requests for vulnerable dependencies."""
    load_dotenv()
    try:
        setup_logging(verbose)
    except VulnFixerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


async def _run(params: FixParams, scanner: Scanner) -> RunSummary:
    async with GitHubClient(params.token, params.api_url) as client:
        runner = FixPullRequestsRunner(params, scanner, client)
        return await runner.run()


@main.command("create-fix-pull-requests")
@click.option(
    "--report",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Scan report JSON file",
)
@click.option("--scan-command", default=None, help="Command printing the scan report JSON")
@click.option(
    "--scan-findings-exit-code",
    "findings_exit_codes",
    type=int,
    multiple=True,
    envvar="VULNFIXER_SCAN_FINDINGS_EXIT_CODES",
    help="Non-zero scan command exit code that still means a valid report (repeatable)",
)
@click.option("--repo-owner", default=None, help="Repository owner (VULNFIXER_GIT_REPO_OWNER)")
@click.option("--repo", default=None, help="Repository name (VULNFIXER_GIT_REPO)")
@click.option("--base-branch", default=None, help="Base branch (VULNFIXER_GIT_BASE_BRANCH)")
@click.option("--workdir", default=None, help="Repository working tree (VULNFIXER_WORKDIR)")
def create_fix_pull_requests(
    report: str | None,
    scan_command: str | None,
    findings_exit_codes: tuple[int, ...],
    repo_owner: str | None,
    repo: str | None,
    base_branch: str | None,
    workdir: str | None,
) -> None:
    """Scan the repository and open one fix pull request per vulnerable package."""
    if (report is None) == (scan_command is None):
        click.echo("Error: exactly one of --report or --scan-command is required", err=True)
        sys.exit(1)

    try:
        params = load_params(
            repo_owner=repo_owner, repo=repo, base_branch=base_branch, workdir=workdir
        )
    except VulnFixerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    scanner: Scanner
    if report is not None:
        scanner = ReportFileScanner(report)
    else:
        scanner = CommandScanner(  # type: ignore[arg-type]
            scan_command, params.workdir, findings_exit_codes=findings_exit_codes
        )

    try:
        summary = asyncio.run(_run(params, scanner))
    except VulnFixerError as e:
        log.error("cli.run_failed", error=str(e))
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"Opened {len(summary.opened)} pull request(s), "
        f"skipped {len(summary.skipped)}, unsupported {len(summary.unsupported)}, "
        f"failed {len(summary.failed)}"
    )


if __name__ == "__main__":
    main()
