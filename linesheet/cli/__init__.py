"""Command line tools for LineSheet."""
