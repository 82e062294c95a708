"""Invoke tasks for LineSheet development."""

import sys

from invoke import task
from invoke.context import Context


@task
def start(ctx: Context, host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Start the LineSheet API server.

    Args:
        ctx: Invoke context
        host: Host to bind to (default: 127.0.0.1)
        port: Port to bind to (default: 8000)
        reload: Enable auto-reload for development
    """
    cmd = f"uv run linesheet-server --host {host} --port {port}"
    if reload:
        cmd += " --reload"

    try:
        ctx.run(cmd, pty=True)
    except KeyboardInterrupt:
        print("\nServer stopped")
        sys.exit(0)


@task
def test(ctx: Context, verbose: bool = False, coverage: bool = False) -> None:
    """Run the test suite.

    Args:
        ctx: Invoke context
        verbose: Enable verbose output
        coverage: Run with coverage report
    """
    cmd = "uv run pytest"
    if verbose:
        cmd += " -v"
    if coverage:
        cmd += " --cov=linesheet --cov-report=term-missing"
    ctx.run(cmd, pty=True)


@task
def ingest(ctx: Context, path: str, json: bool = False, shopify: str = "") -> None:
    """Parse an order sheet and print the line items.

    Args:
        ctx: Invoke context
        path: CSV, TXT, XLSX or XLS file
        json: Print the raw JSON result
        shopify: Optional output path for a Shopify product CSV
    """
    cmd = f"uv run linesheet-ingest {path}"
    if json:
        cmd += " --json"
    if shopify:
        cmd += f" --shopify {shopify}"
    ctx.run(cmd, warn=True)


@task
def clean(ctx: Context) -> None:
    """Clean up temporary files."""
    for pattern in ["__pycache__", "*.pyc", "*.pyo", ".pytest_cache"]:
        ctx.run(f"find . -name '{pattern}' -exec rm -rf {{}} + 2>/dev/null || true", warn=True)

    for path in ["build", "dist", "*.egg-info", ".eggs"]:
        ctx.run(f"rm -rf {path} 2>/dev/null || true", warn=True)

    print("Cleanup complete")
