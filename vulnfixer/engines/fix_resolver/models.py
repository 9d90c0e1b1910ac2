"""Data models for the fix resolver engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from vulnfixer.engines.fix_resolver.version_range import is_lower_version


# ── raw scan report (as produced by the scanning service) ───────────────


class ComponentFix(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fixed_versions: list[str] = Field(default_factory=list)


class RawVulnerability(BaseModel):
    model_config = ConfigDict(extra="ignore")

    issue_id: str = ""
    severity: str | None = None
    summary: str | None = None
    # component id ("gav://group:artifact:1.0") -> fix info
    components: dict[str, ComponentFix] = Field(default_factory=dict)


class ScanResponse(BaseModel):
    """One scan result returned by the scanning service."""

    model_config = ConfigDict(extra="ignore")

    scan_id: str | None = None
    violations: list[dict[str, Any]] = Field(default_factory=list)
    vulnerabilities: list[RawVulnerability] = Field(default_factory=list)


# ── normalized rows + aggregation output ────────────────────────────────


@dataclass
class VulnerabilityRow:
    """A single (vulnerability, impacted component) pair.

    This is a pure data structure produced by normalization.
    """

    issue_id: str
    impacted_package_name: str
    impacted_package_version: str
    impacted_package_type: str
    fixed_versions: list[str] = field(default_factory=list)
    severity: str | None = None


@dataclass
class FixVersionInfo:
    """The version a package will be upgraded to, and its ecosystem."""

    fix_version: str
    package_type: str

    def update_fix_version(self, new_fix_version: str) -> None:
        """Lower the stored fix version to *new_fix_version* if it is smaller.

        Empty values never replace a valid version; equal versions keep the
        existing one.
        """
        if not new_fix_version:
            return
        if not self.fix_version or is_lower_version(new_fix_version, self.fix_version):
            self.fix_version = new_fix_version


FixVersionsMap = dict[str, FixVersionInfo]
