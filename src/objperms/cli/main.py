"""CLI entrypoint for objperms."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from objperms import __version__
from objperms.cache import ContentCache
from objperms.config import ObjPermsConfig, load_config
from objperms.constants.branding import CLI_DESCRIPTION
from objperms.exceptions import ConfigError, ObjPermsError
from objperms.permissions.pipeline import export_object_permissions
from objperms.reporting import ensure_writable
from objperms.salesforce.client import SalesforceClient
from objperms.salesforce.connection import connect


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="objperms", description=CLI_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-e", "--environment", required=True, help="The credentials environment name")
    parser.add_argument(
        "-o",
        "--objectName",
        "--object-name",
        dest="object_name",
        required=True,
        help="The Salesforce object API name",
    )
    parser.add_argument("-f", "--file", type=Path, required=True, help="The CSV file to write")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing output file")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Explicit config file (JSON or YAML)")
    parser.add_argument("-n", "--no-cache", action="store_true", help="Disable cache reads/writes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    return parser


def build_client(config: ObjPermsConfig, environment: str, *, no_cache: bool = False) -> SalesforceClient:
    """Log in and wrap the connection with the configured cache."""
    connection = connect(environment, config.credentials_dir, api_version=config.api_version)
    cache = ContentCache(config.cache_dir, config.cache_expire_days, enabled=not no_cache)
    return SalesforceClient(
        connection,
        cache,
        bulk_poll_interval=config.bulk_poll_interval,
        bulk_poll_timeout=config.bulk_poll_timeout,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        config = load_config(args.config)
        ensure_writable(args.file, force=args.force)
        client = build_client(config, args.environment, no_cache=args.no_cache)
        result = export_object_permissions(
            client=client,
            object_name=args.object_name,
            output_path=args.file,
            force=args.force,
            max_workers=config.metadata_max_workers,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except ObjPermsError as exc:
        print(f"Export error: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {result.rows_written} users to {result.output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
