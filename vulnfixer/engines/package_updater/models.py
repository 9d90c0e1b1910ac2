"""Data models for the package updater engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

# "groupId:artifactId" -> names of POM properties holding its version
MavenPropertyMap = Mapping[str, set[str]]


@dataclass(frozen=True)
class UpdateContext:
    """What an updater needs besides the package and version."""

    workdir: Path
    maven_properties: MavenPropertyMap = field(default_factory=dict)
