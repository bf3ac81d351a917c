"""Exceptions raised while deploying the Zecrey Legend contracts."""


class LegendDeploymentError(Exception):
    """Base exception for deployment errors."""


class EventNotFoundError(LegendDeploymentError, ValueError):
    """Raised when a receipt carries no log for the expected event."""


class AmbiguousEventError(LegendDeploymentError, ValueError):
    """Raised when a receipt carries more than one log for the expected event."""


class PluginNotInstalled(LegendDeploymentError, ImportError):
    """Raised when a required ape plugin is missing."""
