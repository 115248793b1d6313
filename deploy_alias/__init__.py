"""Branch-aware alias assignment for `now` deployments."""

__version__ = "0.1.0"
