"""vulnfixer — open one upgrade pull request per fixable vulnerable package."""

__version__ = "0.1.0"
