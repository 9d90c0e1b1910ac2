"""Package updaters — auto-registered on import."""

from vulnfixer.engines.package_updater.updaters import (
    go_modules,  # noqa: F401
    maven,  # noqa: F401
    npm,  # noqa: F401
)
