"""API routers for LineSheet."""

from linesheet.routers import export, uploads

__all__ = ["export", "uploads"]
