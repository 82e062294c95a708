"""Upload endpoints for ingesting vendor order sheets."""

import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from linesheet.config import settings
from linesheet.schemas.line_items import ColumnPreviewResponse, FileUploadResult, InferredColumn
from linesheet.services.ingestion import (
    IngestionError,
    find_header_row,
    infer_numeric_columns,
    process_uploaded_file,
    read_table,
    suggest_column_mapping,
    table_to_raw_rows,
)

logger = logging.getLogger(__name__)

router = APIRouter()

limiter = Limiter(key_func=get_remote_address)

CHUNK_SIZE = 64 * 1024  # 64 KB
PREVIEW_ROWS = 5


def _rate_limit() -> str:
    return f"{settings.rate_limit_per_minute}/minute"


async def _read_upload(file: UploadFile) -> bytes:
    """Read an upload in chunks, rejecting files above the configured size."""
    max_bytes = settings.max_upload_size_bytes
    chunks: list[bytes] = []
    total_size = 0
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File exceeds maximum size of {settings.max_upload_size_mb} MB",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post(
    "/upload",
    response_model=FileUploadResult,
    response_model_exclude_none=True,
)
@limiter.limit(_rate_limit)
async def upload_line_items(
    request: Request,  # Required for rate limiting
    file: UploadFile = File(..., description="CSV, TXT, XLSX or XLS order sheet"),
) -> FileUploadResult:
    """Upload an order sheet and get back normalized line items.

    Ingestion failures are reported in the body with ``success: false``.
    """
    content = await _read_upload(file)
    filename = file.filename or ""

    result = process_uploaded_file(content, filename)
    logger.info(
        "Upload '%s' (%d bytes): success=%s items=%d",
        filename,
        len(content),
        result.success,
        len(result.data or []),
    )
    return result


@router.post("/preview", response_model=ColumnPreviewResponse)
@limiter.limit(_rate_limit)
async def preview_columns(
    request: Request,  # Required for rate limiting
    file: UploadFile = File(..., description="CSV, TXT, XLSX or XLS order sheet"),
) -> ColumnPreviewResponse:
    """Show the detected header row and how each column would be mapped."""
    content = await _read_upload(file)
    filename = file.filename or ""

    try:
        table = read_table(content, filename)
    except IngestionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    header_index = find_header_row(table)
    headers, rows = table_to_raw_rows(table, header_index)

    return ColumnPreviewResponse(
        filename=filename,
        header_row_index=header_index,
        headers=headers,
        row_count=len(rows),
        suggested_mapping=suggest_column_mapping(headers),
        inferred_columns=[
            InferredColumn(header=header, role=role)
            for header, role in infer_numeric_columns(headers, rows)
        ],
        preview_rows=rows[:PREVIEW_ROWS],
    )
