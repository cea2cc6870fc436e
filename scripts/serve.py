"""Serve the take-home pay API with uvicorn.

Usage:
    python scripts/serve.py
    python scripts/serve.py --host 0.0.0.0 --port 8080
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import uvicorn

from config.settings import settings
from takehome.api.app import create_app

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def main() -> None:
    """Parse arguments and run the server until interrupted."""
    parser = argparse.ArgumentParser(description="Run the take-home pay API")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    args = parser.parse_args()

    logger.info("Serving %s on %s:%d", settings.tax_year, args.host, args.port)
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
