"""Updater registry: map package types to manifest updaters."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vulnfixer.engines.package_updater.models import UpdateContext
from vulnfixer.exceptions import UnsupportedPackageTypeError


@runtime_checkable
class PackageUpdater(Protocol):
    """Interface that every package updater must satisfy."""

    package_type: str

    async def update(self, package_name: str, fix_version: str, context: UpdateContext) -> None: ...


class UnsupportedPackageUpdater:
    """Fallback for package types without a registered updater."""

    def __init__(self, package_type: str) -> None:
        self.package_type = package_type

    async def update(self, package_name: str, fix_version: str, context: UpdateContext) -> None:
        raise UnsupportedPackageTypeError(self.package_type)


UPDATER_REGISTRY: dict[str, PackageUpdater] = {}


def register_updater(updater: PackageUpdater) -> None:
    """Register an updater instance by its package_type."""
    UPDATER_REGISTRY[updater.package_type] = updater


def get_updater(package_type: str) -> PackageUpdater:
    """Return the updater for *package_type*, or an unsupported fallback."""
    return UPDATER_REGISTRY.get(package_type) or UnsupportedPackageUpdater(package_type)
