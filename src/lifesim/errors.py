"""Exception types raised by the life simulation engine."""


class LifeSimError(Exception):
    """Base class for all simulation errors."""


class ConfigurationError(LifeSimError):
    """World parameters leave no room to place the requested entities."""


class PersistenceError(LifeSimError):
    """A saved simulation could not be read or written."""


class InvalidRequestError(LifeSimError):
    """A malformed add/remove/modify request for an agent."""
