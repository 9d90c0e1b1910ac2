"""Updater for Maven dependencies (pom.xml)."""

from __future__ import annotations

import structlog

from vulnfixer.core.process import run_command
from vulnfixer.engines.package_updater.models import UpdateContext
from vulnfixer.engines.package_updater.registry import register_updater
from vulnfixer.exceptions import PackageManagerError

log = structlog.get_logger("vulnfixer.engine")


class MavenUpdater:
    """Pin a dependency version with the versions-maven-plugin.

    ``use-dep-version`` only rewrites literal versions, so every POM
    property that holds the dependency's version is set as well.
    """

    package_type = "Maven"

    async def update(self, package_name: str, fix_version: str, context: UpdateContext) -> None:
        log.info("updater.maven_use_dep_version", package=package_name, version=fix_version)
        await run_command(
            [
                "mvn",
                "-B",
                "versions:use-dep-version",
                f"-Dincludes={package_name}",
                f"-DdepVersion={fix_version}",
                "-DforceVersion=true",
                "-DgenerateBackupPoms=false",
            ],
            context.workdir,
            error_cls=PackageManagerError,
        )

        for prop in sorted(context.maven_properties.get(package_name, ())):
            log.info("updater.maven_set_property", package=package_name, property=prop)
            await run_command(
                [
                    "mvn",
                    "-B",
                    "versions:set-property",
                    f"-Dproperty={prop}",
                    f"-DnewVersion={fix_version}",
                    "-DgenerateBackupPoms=false",
                ],
                context.workdir,
                error_cls=PackageManagerError,
            )


register_updater(MavenUpdater())
