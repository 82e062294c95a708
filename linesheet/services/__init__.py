"""Services for LineSheet."""
