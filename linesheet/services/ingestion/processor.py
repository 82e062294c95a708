"""Entry point for ingesting an uploaded vendor order sheet."""

import logging

from linesheet.schemas.line_items import FileUploadResult

from .constants import TEXT_EXTENSIONS, WORKBOOK_EXTENSIONS
from .converters import IdFactory, normalize_table
from .errors import (
    EmptyTableError,
    IngestionError,
    NotYetSupportedError,
    ReadFailureError,
    UnsupportedFormatError,
)
from .readers import RawTable, decode_text, get_file_extension, read_delimited_text, read_workbook

logger = logging.getLogger(__name__)


def read_table(content: bytes, filename: str) -> RawTable:
    """Read a file into a raw table, choosing the reader by extension.

    Args:
        content: Raw file bytes.
        filename: Original file name; only its extension is used.

    Returns:
        Rows of string cells.

    Raises:
        NotYetSupportedError: For PDF files.
        UnsupportedFormatError: For any extension other than csv, txt, xlsx, xls.
        EmptyTableError: If the file yields fewer than two rows.
        ReadFailureError: If the file cannot be decoded.
    """
    ext = get_file_extension(filename)

    if ext in TEXT_EXTENSIONS:
        table = read_delimited_text(decode_text(content))
    elif ext in WORKBOOK_EXTENSIONS:
        table = read_workbook(content, ext)
    elif ext == "pdf":
        raise NotYetSupportedError()
    else:
        raise UnsupportedFormatError()

    if not table:
        raise EmptyTableError()
    return table


def process_uploaded_file(
    content: bytes,
    filename: str,
    id_factory: IdFactory | None = None,
) -> FileUploadResult:
    """Ingest an uploaded CSV, TXT, XLSX or XLS file into line items.

    Never raises: every failure, including unexpected reader errors, is
    returned as a result with ``success`` false and ``error`` set.

    Args:
        content: Raw file bytes.
        filename: Original file name, used to pick the reader.
        id_factory: Identifier source for the created items.

    Returns:
        FileUploadResult for the file.
    """
    try:
        table = read_table(content, filename)
        result = normalize_table(table, id_factory=id_factory)
    except IngestionError as e:
        logger.warning("Could not ingest '%s': %s", filename, e.message)
        return FileUploadResult.failure(e.message)
    except Exception as e:
        logger.exception("Unexpected error ingesting '%s'", filename)
        return FileUploadResult.failure(ReadFailureError(e).message)

    if not result.success:
        logger.warning("No valid line items in '%s'", filename)
    return result
