"""
qBittorrent Port Sync Server

Runs the FastAPI status server and the background reconciliation loop.

Usage:
    python -m qbit_port_sync                  # Run on SERVER_PORT (default 5000)
    python -m qbit_port_sync --port 8080      # Run on custom port
"""

import argparse
import uvicorn
from .config import Config
from .logger import configure, logger


UVICORN_LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


def main():
    parser = argparse.ArgumentParser(
        description="qBittorrent Port Sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m qbit_port_sync                    Run on the configured port
  python -m qbit_port_sync --port 8080        Run on custom port
  python -m qbit_port_sync --host 127.0.0.1   Listen on localhost only

Endpoints:
    GET      /status         Last synced port and time until next update
    GET|POST /force-update   Run an update cycle now
    GET      /health         Health check
    GET      /               Status page
        """
    )

    parser.add_argument(
        "--host",
        type=str,
        default=Config.HOST,
        help=f"Host to bind to (default: {Config.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=Config.SERVER_PORT,
        help=f"Port to bind to (default: {Config.SERVER_PORT})"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=Config.LOG_LEVEL,
        help=f"Log level (default: {Config.LOG_LEVEL})"
    )

    args = parser.parse_args()

    configure(args.log_level.upper())
    uvicorn_level = args.log_level.lower()
    if uvicorn_level not in UVICORN_LOG_LEVELS:
        uvicorn_level = "info"

    logger.info(f"HTTP server listening on http://{args.host}:{args.port}")

    uvicorn.run(
        "qbit_port_sync.api:app",
        host=args.host,
        port=args.port,
        log_level=uvicorn_level,
    )


if __name__ == "__main__":
    main()
