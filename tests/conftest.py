"""Pytest configuration and fixtures for LineSheet tests."""

import io
import os
import zipfile
from collections.abc import AsyncGenerator, Iterator, Sequence
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from openpyxl import Workbook

from linesheet.config import reset_settings
from linesheet.main import app
from linesheet.routers import uploads
from linesheet.services.ingestion import map_column


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Isolate every test from LINESHEET_* variables and any local config.toml."""
    for key in list(os.environ):
        if key.startswith("LINESHEET_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()
    map_column.cache_clear()


@pytest.fixture
def no_rate_limit() -> Iterator[None]:
    """Disable the upload rate limiter for the duration of a test."""
    uploads.limiter.enabled = False
    yield
    uploads.limiter.enabled = True


@pytest_asyncio.fixture(scope="function")
async def client(no_rate_limit) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the LineSheet app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_csv(rows: Sequence[Sequence[Any]], delimiter: str = ",") -> bytes:
    """Build delimited text from rows, quoting cells that contain the delimiter."""
    lines = []
    for row in rows:
        cells = []
        for value in row:
            text = str(value)
            cells.append(f'"{text}"' if delimiter in text else text)
        lines.append(delimiter.join(cells))
    return ("\n".join(lines) + "\n").encode("utf-8")


def make_xlsx(sheets: dict[str, Sequence[Sequence[Any]]]) -> bytes:
    """Build an XLSX workbook with one sheet per entry, in insertion order."""
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for row in rows:
            ws.append(list(row))
    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def make_plain_zip() -> bytes:
    """Build a zip archive that holds no workbook parts."""
    output = io.BytesIO()
    with zipfile.ZipFile(output, "w") as zf:
        zf.writestr("hello.txt", "not a workbook")
    return output.getvalue()


@pytest.fixture
def order_sheet_rows() -> list[list[Any]]:
    """A small order sheet with a vendor preamble above the header row."""
    return [
        ["ACME Footwear Ltd", "", "", "", "", ""],
        ["Purchase Order 4471", "", "", "", "", ""],
        ["Style #", "Description", "Size", "Qty", "FOB", "MSRP"],
        ["TR2-9", "Trail Runner 2", "9", "4", "40.00", "120.00"],
        ["TR2-10", "Trail Runner 2", "10", "6", "40.00", "120.00"],
        ["CAP-1", "Logo Cap", "", "12", "8.50", ""],
    ]
