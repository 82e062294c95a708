"""Export endpoints for downloading parsed line items."""

from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse, Response

from linesheet.config import settings
from linesheet.schemas.export import ExportFormat
from linesheet.schemas.line_items import LineItem
from linesheet.services import export_service

router = APIRouter()


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f"attachment; filename={filename}"}


@router.post("/line-items")
async def export_line_items(
    items: list[LineItem] = Body(..., description="Line items to export"),
    format: ExportFormat = Query(default=ExportFormat.JSON, description="Export format"),
) -> Response:
    """Export line items as CSV, XLSX, YAML or JSON."""
    filename = export_service.generate_filename("line_items", format)

    if format == ExportFormat.JSON:
        return JSONResponse(
            content=export_service.export_line_items_to_json(items),
            headers=_attachment(filename),
        )

    if format == ExportFormat.CSV:
        content = export_service.export_line_items_to_csv(items)
    elif format == ExportFormat.XLSX:
        content = export_service.export_line_items_to_xlsx(items)
    else:
        content = export_service.export_line_items_to_yaml(items)

    return Response(
        content=content,
        media_type=export_service.get_content_type(format),
        headers=_attachment(filename),
    )


@router.post("/shopify")
async def export_shopify(
    items: list[LineItem] = Body(..., description="Line items to export"),
    vendor: str | None = Query(default=None, description="Vendor column value"),
    product_type: str | None = Query(default=None, description="Type column value"),
    tags: list[str] | None = Query(default=None, description="Product tags"),
    published: bool | None = Query(default=None, description="Publish products on import"),
) -> Response:
    """Export line items as a Shopify product import CSV."""
    options = settings.shopify_export_options(
        vendor=vendor,
        product_type=product_type,
        tags=tags,
        published=published,
    )
    content = export_service.export_to_shopify_csv(items, options)
    return Response(
        content=content.encode("utf-8"),
        media_type=export_service.get_content_type(ExportFormat.CSV),
        headers=_attachment(export_service.generate_filename("shopify", ExportFormat.CSV)),
    )
