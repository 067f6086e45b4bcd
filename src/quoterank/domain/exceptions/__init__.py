"""Custom exceptions for the quoterank package."""

# Base exceptions
from .base import (
    QuoteRankError,
    ConfigurationError,
)

# Processing exceptions
from .processing import (
    ProcessingError,
    BatchProcessingError,
)

# Validation exceptions
from .validation import (
    ValidationError,
    InvalidInputError,
    FileValidationError,
    InvalidFileFormatError,
)

__all__ = [
    # Base
    "QuoteRankError",
    "ConfigurationError",

    # Processing
    "ProcessingError",
    "BatchProcessingError",

    # Validation
    "ValidationError",
    "InvalidInputError",
    "FileValidationError",
    "InvalidFileFormatError",
]
