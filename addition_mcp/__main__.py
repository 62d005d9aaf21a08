#!/usr/bin/env python3
"""
Entrypoint

Usage:
    # stdio MCP server (what MCP hosts launch)
    python -m addition_mcp

    # HTTP API for local inspection
    python -m addition_mcp --transport http --port 8000
"""

import argparse
import logging
from typing import List, Optional

from dotenv import load_dotenv

from .config import configure_logging, load_server_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="addition-mcp",
        description="Number Addition MCP server (addition + Highspot search)",
    )
    parser.add_argument("--transport", choices=["stdio", "http"], default=None,
                        help="Channel to serve on (default: $MCP_TRANSPORT or stdio)")
    parser.add_argument("--host", default=None, help="HTTP host (default: $MCP_HOST)")
    parser.add_argument("--port", type=int, default=None, help="HTTP port (default: $MCP_PORT)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    settings = load_server_settings()
    args = build_parser().parse_args(argv)

    configure_logging((args.log_level or settings.log_level).upper())
    transport = args.transport or settings.transport

    if transport == "http":
        from .http_api import main as run_http

        run_http(host=args.host or settings.host, port=args.port or settings.port)
    elif transport == "stdio":
        from .server import main as run_stdio

        run_stdio()
    else:
        raise SystemExit(f"Unknown transport: {transport}")


if __name__ == "__main__":
    main()
