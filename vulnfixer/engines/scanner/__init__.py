"""Scanner collaborators: obtain a scan report for the working tree."""

from vulnfixer.engines.scanner.scanner import (
    CommandScanner,
    ReportFileScanner,
    Scanner,
    parse_scan_report,
)

__all__ = ["CommandScanner", "ReportFileScanner", "Scanner", "parse_scan_report"]
