class CatalogError(Exception):
    """Base class for errors raised by the user directory."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreError(CatalogError):
    """The underlying store failed to run a statement."""


class InvalidToken(CatalogError, ValueError):
    """A pagination token is malformed or carries an unsupported version."""


class MappingError(CatalogError):
    """A stored value could not be mapped back to its domain type."""
