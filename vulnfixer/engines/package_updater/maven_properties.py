"""Index the direct Maven dependencies of a repo and their version properties."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

import structlog

log = structlog.get_logger("vulnfixer.engine")

_NS = "{http://maven.apache.org/POM/4.0.0}"

_PROP_RE = re.compile(r"\$\{([^}]+)\}")

# Build-time properties that versions:set-property cannot change.
_BUILTIN_PREFIXES = ("project.", "pom.", "env.", "settings.")

_SKIP_DIRS = {"target", "node_modules", ".git"}


def _text(element: ET.Element | None) -> str | None:
    if element is None:
        return None
    return element.text.strip() if element.text else None


def version_properties(version: str | None) -> set[str]:
    """Return the user-defined ``${property}`` names referenced by *version*."""
    if not version:
        return set()
    return {
        name for name in _PROP_RE.findall(version) if not name.startswith(_BUILTIN_PREFIXES)
    }


def parse_pom(content: str) -> dict[str, set[str]]:
    """Map every dependency declared in one POM to its version properties.

    Dependencies with a literal (or missing) version map to an empty set, so
    the keys of the result are exactly the POM's direct dependencies.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError:
        return {}

    result: dict[str, set[str]] = {}
    # Try both namespaced and non-namespaced
    for ns in (_NS, ""):
        for dep_el in root.iter(f"{ns}dependency"):
            group_id = _text(dep_el.find(f"{ns}groupId"))
            artifact_id = _text(dep_el.find(f"{ns}artifactId"))
            if not group_id or not artifact_id:
                continue
            coordinate = f"{group_id}:{artifact_id}"
            props = version_properties(_text(dep_el.find(f"{ns}version")))
            result.setdefault(coordinate, set()).update(props)
    return result


def build_maven_property_map(repo_path: Path) -> dict[str, set[str]]:
    """Scan every ``pom.xml`` under *repo_path* and merge their indexes.

    Unparseable POMs are skipped with a warning.
    """
    merged: dict[str, set[str]] = {}
    for pom in sorted(repo_path.glob("**/pom.xml")):
        if not pom.is_file() or _SKIP_DIRS.intersection(pom.relative_to(repo_path).parts):
            continue
        content = pom.read_text(encoding="utf-8", errors="replace")
        parsed = parse_pom(content)
        if not parsed and "<dependency" in content:
            log.warning("maven.pom_unparsed", pom=str(pom.relative_to(repo_path)))
        for coordinate, props in parsed.items():
            merged.setdefault(coordinate, set()).update(props)

    log.info("maven.property_map_built", dependencies=len(merged))
    return merged
