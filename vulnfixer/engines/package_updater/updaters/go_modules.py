"""Updater for Go modules (go.mod / go.sum)."""

from __future__ import annotations

import structlog

from vulnfixer.core.process import run_command
from vulnfixer.engines.package_updater.models import UpdateContext
from vulnfixer.engines.package_updater.registry import register_updater
from vulnfixer.exceptions import PackageManagerError

log = structlog.get_logger("vulnfixer.engine")


class GoModulesUpdater:
    package_type = "Go"

    async def update(self, package_name: str, fix_version: str, context: UpdateContext) -> None:
        version = fix_version if fix_version.startswith("v") else f"v{fix_version}"
        target = f"{package_name}@{version}"
        log.info("updater.go_get", target=target)
        await run_command(["go", "get", target], context.workdir, error_cls=PackageManagerError)


register_updater(GoModulesUpdater())
