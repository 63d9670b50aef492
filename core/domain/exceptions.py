"""
Domain exceptions.

Domain exceptions represent conditions the license engine cannot turn
into an ordinary result. Validation problems and rate limiting are
returned as results, not raised.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class StorageError(DomainException):
    """Raised when a storage adapter fails (connectivity, constraint violation)."""

    def __init__(self, message: str = "Storage failure"):
        super().__init__(message, code="STORAGE_ERROR")


class ConfigurationError(DomainException):
    """Raised when the engine is constructed with unusable settings."""

    def __init__(self, message: str = "Invalid license engine configuration"):
        super().__init__(message, code="CONFIGURATION_ERROR")
