#!/usr/bin/env python3
"""
Entry point for the CHUK Scales MCP Server.

Runs the scale catalog server over stdio (the default, for MCP clients)
or http. Project catalog files are read from ./catalog unless
``--catalog`` points somewhere else.
"""

import argparse
import asyncio
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CATALOG_DIR_ENV = "CHUK_SCALES_CATALOG_DIR"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CHUK Scales MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument("--port", type=int, default=8000, help="HTTP port (http transport only)")
    parser.add_argument(
        "--catalog",
        metavar="PATH",
        help="Project catalog directory or file (default: ./catalog)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main() -> None:
    """Parse arguments, load the catalog and serve."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    if args.catalog:
        os.environ[CATALOG_DIR_ENV] = args.catalog

    # The server module reads its paths on import
    from chuk_mcp_scales.async_server import catalog_loader, mcp

    # Surface catalog problems before a client connects
    catalog = catalog_loader.load()
    logger.info(f"Serving {len(catalog)} scales in {len(catalog.families())} families")

    if args.transport == "stdio":
        logger.info("Starting CHUK Scales MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Scales MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
