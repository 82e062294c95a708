"""Run the LineSheet API server.

Usage:
    linesheet-server
    linesheet-server --host 0.0.0.0 --port 9000
    linesheet-server --reload
"""

import argparse
import sys

import uvicorn

from linesheet.config import settings


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run the LineSheet API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--host", help="Host to bind to (default from config)")
    parser.add_argument("--port", type=int, help="Port to bind to (default from config)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    args = parser.parse_args()
    host = args.host or settings.host
    port = args.port or settings.port

    print(f"Starting {settings.app_name} on http://{host}:{port}")
    uvicorn.run(
        "linesheet.main:app",
        host=host,
        port=port,
        reload=args.reload or settings.debug,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
