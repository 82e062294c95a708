"""Pydantic schemas for line item ingestion results."""

from pydantic import BaseModel, ConfigDict, Field


class LineItem(BaseModel):
    """One normalized product/variant row from a vendor order sheet."""

    model_config = ConfigDict(frozen=True)

    id: str
    sku: str | None = None
    vendor_sku: str | None = None
    product_name: str = Field(..., min_length=1)
    variant_title: str | None = None
    size: str | None = None
    color: str | None = None
    material: str | None = None
    qty: float = Field(..., gt=0)
    unit_cost: float = Field(..., ge=0)
    unit_retail: float | None = None
    barcode: str | None = None
    weight: float | None = None
    hs_code: str | None = None
    country_of_origin: str | None = None


class UploadSummary(BaseModel):
    """Row and total counts for one ingestion run."""

    model_config = ConfigDict(frozen=True)

    total_rows: int
    valid_rows: int
    skipped_rows: int
    total_units: float
    total_cost: float


class FileUploadResult(BaseModel):
    """Outcome of ingesting one uploaded file.

    ``error`` is set only when ``success`` is false, ``data`` only when
    items were parsed and ``warnings`` only when rows were skipped with a
    diagnosable reason.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    data: list[LineItem] | None = None
    error: str | None = None
    warnings: list[str] | None = None
    summary: UploadSummary | None = None

    @classmethod
    def failure(cls, error: str) -> "FileUploadResult":
        """Build a failed result carrying only an error message."""
        return cls(success=False, error=error)

    def to_payload(self) -> dict:
        """Serialize to the JSON shape handed to the UI, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


class InferredColumn(BaseModel):
    """An unmapped column recognized by its values."""

    header: str
    role: str


class ColumnPreviewResponse(BaseModel):
    """Header detection and mapping preview for an uploaded file."""

    filename: str
    header_row_index: int
    headers: list[str]
    row_count: int
    suggested_mapping: dict[str, str | None]
    inferred_columns: list[InferredColumn]
    preview_rows: list[dict[str, str]]
