"""Custom exceptions for the contracts application."""


class ContractsDeskException(Exception):
    """Base exception for the contracts application."""

    pass


class ValidationError(ContractsDeskException):
    """Raised when validation fails."""

    pass


class DatabaseError(ContractsDeskException):
    """Raised when a database operation fails outside a manager."""

    pass


class ConfigurationError(ContractsDeskException):
    """Raised when configuration is invalid."""

    pass


class StartupError(ContractsDeskException):
    """Raised when the application cannot start (no database file resolved)."""

    pass
