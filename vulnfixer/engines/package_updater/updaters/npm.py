"""Updater for npm packages (package.json / package-lock.json)."""

from __future__ import annotations

import structlog

from vulnfixer.core.process import run_command
from vulnfixer.engines.package_updater.models import UpdateContext
from vulnfixer.engines.package_updater.registry import register_updater
from vulnfixer.exceptions import PackageManagerError

log = structlog.get_logger("vulnfixer.engine")


class NpmUpdater:
    package_type = "npm"

    async def update(self, package_name: str, fix_version: str, context: UpdateContext) -> None:
        target = f"{package_name}@{fix_version}"
        log.info("updater.npm_install", target=target)
        await run_command(["npm", "install", target], context.workdir, error_cls=PackageManagerError)


register_updater(NpmUpdater())
