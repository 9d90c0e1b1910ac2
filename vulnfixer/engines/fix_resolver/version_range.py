"""Fix-version range parsing and version ordering."""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

_NUMERIC_RE = re.compile(r"\d+")


def parse_version_change_string(fix_version: str) -> str:
    """Return the smallest concrete version satisfying a feed range expression.

    Only a closed (inclusive) lower bound yields a result::

        1.0         --> 1.0 <= x          -> "1.0"
        [1.0]       --> x == 1.0          -> "1.0"
        [1.0, 2.0]  --> 1.0 <= x <= 2.0   -> "1.0"
        (1.0, 2.0)  --> 1.0 < x < 2.0     -> ""
        (,1.0]      --> x <= 1.0          -> ""
        (,1.0)      --> x < 1.0           -> ""
        (1.0,)      --> 1.0 < x           -> ""

    Only the first comma-delimited segment is consulted.
    """
    lower = fix_version.split(",")[0].strip()
    if not lower or lower.startswith("("):
        return ""
    return lower.lstrip("[").rstrip("]").strip()


def _fallback_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in _NUMERIC_RE.findall(version))


def is_lower_version(candidate: str, current: str) -> bool:
    """True if *candidate* orders strictly before *current*.

    Uses PEP 440 ordering (which covers plain semver, including pre-releases
    such as ``1.0.0-beta.1``). A leading ``v`` is ignored. When either side
    cannot be parsed, the numeric segments are compared as tuples.
    """
    a, b = candidate.lstrip("vV"), current.lstrip("vV")
    try:
        return Version(a) < Version(b)
    except InvalidVersion:
        return _fallback_key(a) < _fallback_key(b)
