"""Custom exceptions used across sheettable."""


class SheetTableError(Exception):
    """Base error for the package."""


class ArgumentError(SheetTableError, ValueError):
    """Raised when placement arguments, flags or sheet references are malformed."""


class DatasetTypeError(SheetTableError, TypeError):
    """Raised when the input dataset is not tabular."""


class ValidationError(SheetTableError, ValueError):
    """Raised when a value falls outside a closed enumeration (table styles, column types)."""


class ConfigError(SheetTableError):
    """Configuration related error."""
