"""Subprocess helper shared by the git, package-manager and scanner layers."""

from __future__ import annotations

import asyncio
from collections.abc import Collection
from pathlib import Path

from vulnfixer.exceptions import CommandError


async def run_command(
    cmd: list[str],
    cwd: Path | str | None = None,
    *,
    error_cls: type[CommandError] = CommandError,
    redact: str | None = None,
    merge_stderr: bool = True,
    ok_returncodes: Collection[int] = (0,),
) -> str:
    """Run *cmd* to completion and return its output.

    With *merge_stderr* (the default) the returned text is the combined
    stdout/stderr; otherwise only stdout is returned, but stderr is still
    included in the error.

    Raises *error_cls* when the exit code is not in *ok_returncodes*. If
    *redact* is given, every occurrence of it is masked in the raised error
    (used for push tokens).
    """
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=str(cwd) if cwd is not None else None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT if merge_stderr else asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()
    output = stdout.decode(errors="replace") if stdout else ""
    if proc.returncode not in ok_returncodes:
        combined = output + (stderr.decode(errors="replace") if stderr else "")
        shown_cmd = list(cmd)
        if redact:
            shown_cmd = [part.replace(redact, "***") for part in shown_cmd]
            combined = combined.replace(redact, "***")
        raise error_cls(shown_cmd, proc.returncode, combined)
    return output
