"""
Run the demo API with uvicorn.

Usage:
    python -m demo_api --host 127.0.0.1 --port 5000
"""

import argparse

import uvicorn
from loguru import logger

from testsuites.api_testing.framework.config_loader import ConfigLoader

from .app import create_app


def main() -> None:
    config = ConfigLoader()

    parser = argparse.ArgumentParser(description="Demo Posts API")
    parser.add_argument(
        "--host",
        default=config.get("demo.host", "127.0.0.1"),
        help="Bind address (default: demo.host)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.get("demo.port", 5000),
        help="Bind port (default: demo.port)"
    )
    args = parser.parse_args()

    logger.info(f"Starting Demo Posts API on {args.host}:{args.port}")
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level="warning")


if __name__ == "__main__":
    main()
