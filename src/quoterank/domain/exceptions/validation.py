"""Input validation exceptions."""

from typing import Optional, List, Any
from .base import QuoteRankError

class ValidationError(QuoteRankError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if field_name:
            self.add_context('field_name', field_name)
        if field_value is not None:
            self.add_context('field_value', str(field_value))

    def _get_default_error_code(self) -> str:
        return "VALIDATION_ERROR"


class InvalidInputError(ValidationError):
    """Raised when an input document does not have the expected shape at all.

    Missing or odd business values (a quote line absent, an unknown currency)
    never raise; they are substituted inside the engine. This error is only
    for documents the engine cannot read, and it is raised before any score
    is produced.
    """

    def __init__(
        self,
        message: str,
        *,
        document: Optional[str] = None,
        index: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.document = document
        if document:
            self.add_context('document', document)
        if index is not None:
            self.add_context('index', index)

    def _get_default_error_code(self) -> str:
        return "INVALID_INPUT"


class FileValidationError(ValidationError):
    """Raised when a request file cannot be used."""

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        validation_type: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if file_path:
            self.add_context('file_path', file_path)
        if validation_type:
            self.add_context('validation_type', validation_type)

    def _get_default_error_code(self) -> str:
        return "FILE_VALIDATION_FAILED"


class InvalidFileFormatError(FileValidationError):
    """Raised when a request file is not parseable JSON."""
    def __init__(
        self,
        file_path: str,
        expected_formats: List[str],
        actual_format: Optional[str] = None,
        **kwargs
    ):
        formats_str = ", ".join(expected_formats)
        message = f"Invalid file format for {file_path}. Expected: {formats_str}"
        super().__init__(message, file_path=file_path, validation_type="format_check", **kwargs)
        self.add_context('expected_formats', expected_formats)
        if actual_format:
            self.add_context('actual_format', actual_format)
        self.add_suggestion(f"Ensure the file is valid {formats_str}")
    def _get_default_error_code(self) -> str:
        return "INVALID_FILE_FORMAT"
