#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from movie_finder.config import ConfigurationError, load_settings, parse_port
from movie_finder.utils.env import load_env

logger = logging.getLogger("movie_finder.server")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="run_server",
        description="Serve the Movie Finder web front-end.",
    )
    parser.add_argument("--host", default=None, help="Bind address (default: MOVIE_FINDER_HOST or 0.0.0.0).")
    parser.add_argument("--port", default=None, help="Listening port (default: MOVIE_FINDER_PORT or 8080).")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    load_env()
    try:
        settings = load_settings()
        host = args.host or settings.host
        port = parse_port(args.port) if args.port is not None else settings.port
    except ConfigurationError as exc:
        logger.error(str(exc))
        return 1

    logger.info(f"Server is running on http://{host}:{port}")
    uvicorn.run("api.main:app", host=host, port=port, log_level="debug" if args.verbose else "info")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
