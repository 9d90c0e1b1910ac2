"""Scan report sources: a JSON file or an external audit command."""

from __future__ import annotations

import json
import shlex
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog
from pydantic import ValidationError

from vulnfixer.core.process import run_command
from vulnfixer.engines.fix_resolver.models import ScanResponse
from vulnfixer.exceptions import CommandError, ScanError, ScanReportError

log = structlog.get_logger("vulnfixer.engine")


@runtime_checkable
class Scanner(Protocol):
    """Interface that every scan report source must satisfy."""

    async def scan(self) -> list[ScanResponse]: ...


def parse_scan_report(content: str) -> list[ScanResponse]:
    """Parse a JSON scan report (a list of responses, or a single one).

    Raises :class:`ScanReportError` on invalid JSON or schema mismatch.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ScanReportError(f"scan report is not valid JSON: {exc}") from exc

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ScanReportError(f"scan report must be a list or object, got {type(data).__name__}")

    try:
        return [ScanResponse.model_validate(item) for item in data]
    except ValidationError as exc:
        raise ScanReportError(f"invalid scan report: {exc}") from exc


class ReportFileScanner:
    """Read a report previously written by the scanning service."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    async def scan(self) -> list[ScanResponse]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ScanError(f"cannot read scan report {self.path}: {exc}") from exc
        responses = parse_scan_report(content)
        log.info("scan.completed", source=str(self.path), responses=len(responses))
        return responses


class CommandScanner:
    """Run an external audit command that prints the JSON report on stdout.

    Audit tools commonly exit non-zero when they find vulnerabilities while
    still printing a complete report; list those codes in
    *findings_exit_codes* so the report is parsed instead of rejected.
    """

    def __init__(
        self,
        command: str | list[str],
        workdir: Path | str = ".",
        findings_exit_codes: Iterable[int] = (),
    ) -> None:
        self.cmd = shlex.split(command) if isinstance(command, str) else list(command)
        self.workdir = Path(workdir)
        self.ok_exit_codes = frozenset({0, *findings_exit_codes})

    async def scan(self) -> list[ScanResponse]:
        log.info("scan.started", command=" ".join(self.cmd))
        try:
            output = await run_command(
                self.cmd, self.workdir, merge_stderr=False, ok_returncodes=self.ok_exit_codes
            )
        except (CommandError, OSError) as exc:
            raise ScanError(f"scan command failed: {exc}") from exc
        responses = parse_scan_report(output)
        log.info("scan.completed", source="command", responses=len(responses))
        return responses
