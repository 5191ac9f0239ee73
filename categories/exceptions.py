"""Errors raised by the categories core."""


class CategoriesError(Exception):
    """Base error for the categories package."""


class ConfigurationError(CategoriesError):
    """Raised when required options are missing or null."""


class InvalidArgumentError(CategoriesError, ValueError):
    """Raised when an operation receives an argument it cannot handle."""


class ConstraintViolation(CategoriesError):
    """
    Raised when the storage layer rejects a write.

    Wraps the database integrity error (slug uniqueness race lost,
    dangling category reference). The original error is chained.
    """


class NotFoundError(CategoriesError, LookupError):
    """Raised when a category reference does not resolve to a row."""
