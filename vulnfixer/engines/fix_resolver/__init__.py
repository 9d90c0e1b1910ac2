"""Fix resolver engine — turn a scan report into per-package fix versions."""

from vulnfixer.engines.fix_resolver.aggregator import FixPolicy, create_fix_versions_map
from vulnfixer.engines.fix_resolver.models import FixVersionInfo, ScanResponse
from vulnfixer.engines.fix_resolver.version_range import parse_version_change_string

__all__ = [
    "FixPolicy",
    "FixVersionInfo",
    "ScanResponse",
    "create_fix_versions_map",
    "parse_version_change_string",
]
