"""ExploreWithMe: event listing main service and hit statistics service."""

__version__ = "1.0.0"
