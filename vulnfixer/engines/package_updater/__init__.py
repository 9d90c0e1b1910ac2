"""Package updater engine — mutate manifests to a fixed dependency version."""

# Ensure updaters are registered before any lookup.
import vulnfixer.engines.package_updater.updaters  # noqa: F401
from vulnfixer.engines.package_updater.maven_properties import build_maven_property_map
from vulnfixer.engines.package_updater.models import UpdateContext
from vulnfixer.engines.package_updater.registry import (
    UPDATER_REGISTRY,
    PackageUpdater,
    get_updater,
)

__all__ = [
    "PackageUpdater",
    "UPDATER_REGISTRY",
    "UpdateContext",
    "build_maven_property_map",
    "get_updater",
]
