"""opslevel-sync: keep catalog entities and OpsLevel services in step."""

from __future__ import annotations

import argparse
import logging
import os
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

_LOCAL_VERSION_FALLBACK = "0.0.0+local"


def _resolve_version() -> str:
    try:
        return _distribution_version("opslevel-sync")
    except PackageNotFoundError:
        return _LOCAL_VERSION_FALLBACK


__version__ = _resolve_version()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="opslevel-sync",
        description="MCP server for OpsLevel maturity reports and catalog export.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="App-config YAML with backend.baseUrl and opslevel.frameworks.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for messages written to stderr.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point for `opslevel-sync` CLI. Serves MCP over stdio."""
    args = _parse_args(argv)
    # stdout carries the MCP stream, so logs go to stderr (basicConfig's default).
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if args.config:
        from opslevel_sync.settings import ENV_CONFIG_FILE

        os.environ[ENV_CONFIG_FILE] = args.config

    from opslevel_sync.server import mcp

    mcp.run(transport="stdio")
