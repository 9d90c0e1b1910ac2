"""Fold a scan report into one fix-version decision per impacted package."""

from __future__ import annotations

from collections.abc import Callable, Mapping

import structlog

from vulnfixer.engines.fix_resolver.models import (
    FixVersionInfo,
    FixVersionsMap,
    ScanResponse,
    VulnerabilityRow,
)
from vulnfixer.engines.fix_resolver.normalize import prepare_vulnerabilities
from vulnfixer.engines.fix_resolver.version_range import parse_version_change_string

log = structlog.get_logger("vulnfixer.engine")

ShouldFix = Callable[[VulnerabilityRow], bool]


class FixPolicy:
    """Per-ecosystem inclusion rules for the aggregator.

    Maven packages are fixed only when they are direct dependencies, i.e.
    present as a key of *maven_properties*. Every other ecosystem is fixed
    unconditionally.
    """

    def __init__(self, maven_properties: Mapping[str, set[str]] | None = None) -> None:
        self._maven_properties = maven_properties or {}

    def should_fix(self, row: VulnerabilityRow) -> bool:
        if row.impacted_package_type == "Maven":
            return row.impacted_package_name in self._maven_properties
        return True


def _fix_all(row: VulnerabilityRow) -> bool:
    return True


def create_fix_versions_map(
    responses: list[ScanResponse],
    should_fix: ShouldFix = _fix_all,
) -> FixVersionsMap:
    """Build the package -> :class:`FixVersionInfo` map for a scan report.

    For every package, the stored fix version is the lowest version resolved
    from the first fix range of each vulnerability naming it. Ranges without
    a closed lower bound are ignored.

    Raises :class:`ScanReportError` if normalization fails.
    """
    fix_versions: FixVersionsMap = {}
    for response in responses:
        if response.violations:
            # Violations are not fixed yet.
            log.debug("aggregator.violations_skipped", count=len(response.violations))
            continue
        if not response.vulnerabilities:
            continue

        for row in prepare_vulnerabilities(response.vulnerabilities):
            if not row.fixed_versions:
                continue
            if not should_fix(row):
                log.debug(
                    "aggregator.package_excluded",
                    package=row.impacted_package_name,
                    package_type=row.impacted_package_type,
                )
                continue

            fix_version = parse_version_change_string(row.fixed_versions[0])
            if not fix_version:
                log.debug(
                    "aggregator.unresolved_range",
                    package=row.impacted_package_name,
                    expression=row.fixed_versions[0],
                )
                continue

            existing = fix_versions.get(row.impacted_package_name)
            if existing is not None:
                existing.update_fix_version(fix_version)
            else:
                fix_versions[row.impacted_package_name] = FixVersionInfo(
                    fix_version=fix_version,
                    package_type=row.impacted_package_type,
                )

    return fix_versions


def has_package_type(responses: list[ScanResponse], package_type: str) -> bool:
    """True if any vulnerability in *responses* impacts a *package_type* package."""
    for response in responses:
        if response.violations:
            continue
        for row in prepare_vulnerabilities(response.vulnerabilities):
            if row.impacted_package_type == package_type:
                return True
    return False
