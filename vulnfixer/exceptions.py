"""Custom exceptions for vulnfixer."""


class VulnFixerError(Exception):
    """Base exception for all vulnfixer errors."""


class ConfigError(VulnFixerError):
    """Raised when required run parameters are missing or invalid."""


class ScanError(VulnFixerError):
    """Raised when the scanning stage fails to produce a report."""


class ScanReportError(VulnFixerError):
    """Raised when a scan report cannot be parsed or normalized."""


class CommandError(VulnFixerError):
    """Raised when an external command exits with a non-zero status.

    The combined stdout/stderr of the process is kept on ``output`` and
    included in the message.
    """

    tool = "command"

    def __init__(self, cmd: list[str], returncode: int, output: str):
        self.cmd = cmd
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"{self.tool} command failed (exit {returncode}): {' '.join(cmd)} - {output.strip()}"
        )


class GitCommandError(CommandError):
    """Raised when a git command fails."""

    tool = "git"


class PackageManagerError(CommandError):
    """Raised when a package-manager command (go, npm, mvn) fails."""

    tool = "package manager"


class UnsupportedPackageTypeError(VulnFixerError):
    """Raised when no updater is registered for a package type."""

    def __init__(self, package_type: str):
        self.package_type = package_type
        super().__init__(f"unsupported package type: {package_type!r}")


class NoChangesError(VulnFixerError):
    """Raised when an update leaves the working tree clean."""

    def __init__(self, package_name: str, fix_version: str):
        self.package_name = package_name
        self.fix_version = fix_version
        super().__init__(
            f"no changes detected after upgrading {package_name} to {fix_version}"
        )


class PullRequestError(VulnFixerError):
    """Raised when the hosting API rejects a pull request."""
