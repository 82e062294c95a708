"""LineSheet - vendor order sheet ingestion for release and inbound order tracking."""

__version__ = "0.3.0"
