"""Exceptions raised inside the ingestion pipeline.

None of these leave the package: the facade in ``processor`` turns each
one into a failed ``FileUploadResult``.
"""

from .constants import (
    NO_DATA_MESSAGE,
    NO_VALID_ROWS_MESSAGE,
    PDF_NOT_SUPPORTED_MESSAGE,
    UNSUPPORTED_FILE_MESSAGE,
)


class IngestionError(Exception):
    """Base class for ingestion failures carrying a user-facing message."""

    default_message = "Error processing file"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class UnsupportedFormatError(IngestionError):
    """Raised when the file extension is not CSV, TXT, XLSX or XLS."""

    default_message = UNSUPPORTED_FILE_MESSAGE


class NotYetSupportedError(IngestionError):
    """Raised for PDF uploads."""

    default_message = PDF_NOT_SUPPORTED_MESSAGE


class EmptyTableError(IngestionError):
    """Raised when a file yields fewer than two rows."""

    default_message = NO_DATA_MESSAGE


class NoValidRowsError(IngestionError):
    """Raised when every row failed the product name / quantity check."""

    default_message = NO_VALID_ROWS_MESSAGE


class ReadFailureError(IngestionError):
    """Raised when the file cannot be decoded or the workbook cannot be opened."""

    def __init__(self, cause: BaseException | str):
        # KeyError.__str__ quotes its argument
        if isinstance(cause, KeyError) and cause.args:
            detail = str(cause.args[0])
        else:
            detail = str(cause) or type(cause).__name__
        super().__init__(f"Error processing file: {detail}")
