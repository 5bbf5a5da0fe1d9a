"""Run the Ghostwire API server.

Usage:
    python -m ghostwire --port 8765 --executable /usr/local/bin/httpcli
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from ghostwire.config import GhostwireConfig, set_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ghostwire HTTP request workbench")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--executable", help="Path or name of the httpcli binary")
    parser.add_argument("--db-path", help="SQLite file for collections and history")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> GhostwireConfig:
    """Environment values, overridden by any flags given."""
    config = GhostwireConfig.from_env()
    overrides = {
        key: value
        for key, value in vars(args).items()
        if value is not None
    }
    return GhostwireConfig(**{**config.model_dump(), **overrides})


def main(argv: list[str] | None = None) -> None:
    config = build_config(parse_args(argv))
    set_config(config)

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from ghostwire.server import app

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
