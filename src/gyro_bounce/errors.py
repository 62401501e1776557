"""
errors.py: Exceptions raised at the boundaries of the simulation.
"""


class GameError(Exception):
    """Base class for everything this package raises on purpose."""


class ConfigurationError(GameError, ValueError):
    """An unknown or invalid difficulty (or other setting) was requested."""


class StorageError(GameError):
    """The high-score store could not be read or written."""
