#!/usr/bin/env python3
"""
Startup script for the gift card bot.

Usage:
    # Run with defaults (in-memory sessions, port 8000)
    python run_server.py

    # Run with custom port
    python run_server.py --port 8001

    # Persist sessions to a database
    python run_server.py --database-url sqlite:///./data/giftcards.db

    # Run with reload for development
    python run_server.py --reload
"""

import argparse
import os


def run_server(
    host: str = "0.0.0.0",
    port: int = 8000,
    reload: bool = False,
    database_url: str = None,
    log_level: str = None,
) -> None:
    """Run the API server."""
    # The app reads these at import time
    if database_url:
        os.environ["DATABASE_URL"] = database_url
    if log_level:
        os.environ["LOG_LEVEL"] = log_level

    print(f"\n{'=' * 50}")
    print("Starting: Gift Card Bot")
    print(f"Port:     {port}")
    print(f"Sessions: {database_url or os.environ.get('DATABASE_URL') or 'in-memory'}")
    print(f"{'=' * 50}\n")

    # Ensure data directory exists
    if database_url and database_url.startswith("sqlite:///./"):
        db_path = database_url.replace("sqlite:///./", "")
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    import uvicorn

    uvicorn.run(
        "giftcard_bot.main:app",
        host=host,
        port=port,
        reload=reload,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Run the gift card bot API server"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=int(os.environ.get("PORT", "8000")),
        help="Port to run on (default: $PORT or 8000)",
    )
    parser.add_argument(
        "--reload",
        "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy URL for session persistence (default: $DATABASE_URL)",
    )
    parser.add_argument(
        "--log-level",
        help="Log level: DEBUG, INFO, WARNING, ERROR (default: $LOG_LEVEL or INFO)",
    )

    args = parser.parse_args()

    run_server(
        host=args.host,
        port=args.port,
        reload=args.reload,
        database_url=args.database_url,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
