"""Flatten raw scan vulnerabilities into one row per impacted component."""

from __future__ import annotations

from vulnfixer.engines.fix_resolver.models import RawVulnerability, VulnerabilityRow
from vulnfixer.exceptions import ScanReportError

# Component id scheme -> ecosystem tag
PACKAGE_TYPES: dict[str, str] = {
    "go": "Go",
    "npm": "npm",
    "gav": "Maven",
    "pypi": "Pip",
    "nuget": "NuGet",
    "composer": "Composer",
    "cargo": "Cargo",
    "docker": "Docker",
    "deb": "Debian",
    "rpm": "RPM",
    "generic": "Generic",
}


def split_component_id(component_id: str) -> tuple[str, str, str]:
    """Split ``"<scheme>://<name>:<version>"`` into (package_type, name, version).

    Unknown schemes are passed through as the package type so that the
    updater registry can reject them explicitly.

    Raises :class:`ScanReportError` if the id is malformed.
    """
    scheme, sep, rest = component_id.partition("://")
    if not sep or not scheme or not rest:
        raise ScanReportError(f"malformed component id: {component_id!r}")

    name, sep, version = rest.rpartition(":")
    if not sep or not name:
        # No version part (e.g. "npm://lodash")
        name, version = rest, ""

    return PACKAGE_TYPES.get(scheme.lower(), scheme), name, version


def prepare_vulnerabilities(vulnerabilities: list[RawVulnerability]) -> list[VulnerabilityRow]:
    """Return one :class:`VulnerabilityRow` per (vulnerability, component)."""
    rows: list[VulnerabilityRow] = []
    for vuln in vulnerabilities:
        for component_id, fix in vuln.components.items():
            package_type, name, version = split_component_id(component_id)
            rows.append(
                VulnerabilityRow(
                    issue_id=vuln.issue_id,
                    impacted_package_name=name,
                    impacted_package_version=version,
                    impacted_package_type=package_type,
                    fixed_versions=list(fix.fixed_versions),
                    severity=vuln.severity,
                )
            )
    return rows
