"""Git command wrapper for the branch workflow."""

from __future__ import annotations

from pathlib import Path

from vulnfixer.core.process import run_command
from vulnfixer.exceptions import GitCommandError


class GitManager:
    """Runs git commands against a single working tree.

    Every failure raises :class:`GitCommandError` with the command's
    combined output.
    """

    def __init__(self, repo_path: Path | str = ".", remote: str = "origin") -> None:
        self.repo_path = Path(repo_path)
        self.remote = remote

    async def _git(self, *args: str, redact: str | None = None) -> str:
        return await run_command(
            ["git", *args], self.repo_path, error_cls=GitCommandError, redact=redact
        )

    async def current_branch(self) -> str:
        output = await self._git("rev-parse", "--abbrev-ref", "HEAD")
        return output.strip()

    async def branch_exists_on_remote(self, branch: str) -> bool:
        output = await self._git("ls-remote", "--heads", self.remote, branch)
        ref = f"refs/heads/{branch}"
        return any(line.split()[-1] == ref for line in output.splitlines() if line.strip())

    async def create_branch(self, branch: str, start_point: str | None = None) -> None:
        """Create *branch* at *start_point*, or at HEAD when none is given."""
        if start_point:
            await self._git("branch", branch, start_point)
        else:
            await self._git("branch", branch)

    async def checkout(self, branch: str, *, force: bool = False) -> None:
        if force:
            await self._git("checkout", "--force", branch)
        else:
            await self._git("checkout", branch)

    async def delete_branch(self, branch: str) -> None:
        await self._git("branch", "-D", branch)

    async def clean(self) -> None:
        """Remove untracked files and directories (ignored files are kept)."""
        await self._git("clean", "-fd")

    async def is_clean(self) -> bool:
        output = await self._git("status", "--porcelain")
        return not output.strip()

    async def add_all(self) -> None:
        await self._git("add", "-A")

    async def commit(self, message: str) -> None:
        await self._git("commit", "-m", message)

    async def push(self, branch: str, push_url: str | None = None, token: str | None = None) -> None:
        """Push *branch* to *push_url* (authenticated) or the configured remote.

        *token* is masked in any raised error.
        """
        await self._git("push", push_url or self.remote, branch, redact=token)
