"""Run parameters, loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from vulnfixer.exceptions import ConfigError

DEFAULT_BRANCH_PREFIX = "vulnfixer"
DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class FixParams:
    """Everything a fix run needs to know about the repository and remote."""

    token: str
    repo_owner: str
    repo: str
    base_branch: str = "main"
    remote: str = "origin"
    api_url: str = DEFAULT_API_URL
    git_server: str = "github.com"
    branch_prefix: str = DEFAULT_BRANCH_PREFIX
    usage_url: str | None = None
    workdir: Path = Path(".")

    @property
    def push_url(self) -> str:
        """Authenticated HTTPS URL used for ``git push``."""
        return f"https://{self.token}@{self.git_server}/{self.repo_owner}/{self.repo}.git"


def _env(key: str, default: str | None = None) -> str | None:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def load_params(**overrides: str | None) -> FixParams:
    """Build :class:`FixParams` from ``VULNFIXER_*`` environment variables.

    Non-``None`` keyword *overrides* win over the environment.

    Raises :class:`ConfigError` if the token, owner, or repo is missing.
    """
    values: dict[str, str | None] = {
        "token": _env("VULNFIXER_GIT_TOKEN") or _env("GITHUB_TOKEN"),
        "repo_owner": _env("VULNFIXER_GIT_REPO_OWNER"),
        "repo": _env("VULNFIXER_GIT_REPO"),
        "base_branch": _env("VULNFIXER_GIT_BASE_BRANCH", "main"),
        "remote": _env("VULNFIXER_GIT_REMOTE", "origin"),
        "api_url": _env("VULNFIXER_GIT_API_URL", DEFAULT_API_URL),
        "git_server": _env("VULNFIXER_GIT_SERVER", "github.com"),
        "branch_prefix": _env("VULNFIXER_BRANCH_PREFIX", DEFAULT_BRANCH_PREFIX),
        "usage_url": _env("VULNFIXER_USAGE_URL"),
        "workdir": _env("VULNFIXER_WORKDIR", "."),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    missing = [k for k in ("token", "repo_owner", "repo") if not values.get(k)]
    if missing:
        raise ConfigError(f"missing required parameters: {', '.join(missing)}")

    return FixParams(
        token=values["token"],  # type: ignore[arg-type]
        repo_owner=values["repo_owner"],  # type: ignore[arg-type]
        repo=values["repo"],  # type: ignore[arg-type]
        base_branch=values["base_branch"],  # type: ignore[arg-type]
        remote=values["remote"],  # type: ignore[arg-type]
        api_url=values["api_url"].rstrip("/"),  # type: ignore[union-attr]
        git_server=values["git_server"],  # type: ignore[arg-type]
        branch_prefix=values["branch_prefix"],  # type: ignore[arg-type]
        usage_url=values["usage_url"],
        workdir=Path(values["workdir"]),  # type: ignore[arg-type]
    )
