"""Command-line entrypoint for querying a CKAN site."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO

from ckan_client.adapters.http_client import Client, HttpConfig
from ckan_client.adapters.json_codec import to_jsonable
from ckan_client.domain.context import CallContext
from ckan_client.domain.models import ListOptions
from ckan_client.usecases.collect_table_metadata import CollectTableMetadata
from ckan_client.usecases.error_mapping import map_api_error
from ckan_client.utils.logging import configure_root

DEFAULT_BASE_URL = "http://demo.ckan.org/api/3/"
EXIT_FAILURE = 2

_log = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI args."""
    parser = argparse.ArgumentParser(
        prog="ckan-client", description="Query the action API of a CKAN site."
    )
    parser.add_argument(
        "--base-url",
        default=os.environ.get("CKAN_BASE_URL") or DEFAULT_BASE_URL,
        help="API root, e.g. http://demo.ckan.org/api/3/ (env: CKAN_BASE_URL)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="seconds per request")
    parser.add_argument(
        "--log-level",
        default=None,
        help="e.g. DEBUG; wins over CKAN_CLIENT_LOG_LEVEL and CKAN_CLIENT_DEBUG",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    packages = sub.add_parser("packages", help="list package names")
    _add_list_options(packages)

    metadata = sub.add_parser("table-metadata", help="list datastore table metadata")
    _add_list_options(metadata)
    metadata.add_argument("--all", action="store_true", help="page through every row")
    metadata.add_argument("--page-size", type=int, default=100)

    action = sub.add_parser("action", help="call an action path and print its result")
    action.add_argument("path", help="relative path, e.g. action/package_list?limit=10")

    return parser.parse_args(argv)


def _add_list_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--limit", type=int, default=None)
    parser.add_argument("--offset", type=int, default=None)


def _list_options(args: argparse.Namespace) -> Optional[ListOptions]:
    options = ListOptions(limit=args.limit, offset=args.offset)
    return None if options.is_empty else options


def _build_client(args: argparse.Namespace) -> Client:
    cfg = HttpConfig.from_env()
    if args.timeout is not None:
        cfg = replace(cfg, request_timeout_s=args.timeout)
    return Client(args.base_url, config=cfg)


def _run_packages(client: Client, ctx: CallContext, args: argparse.Namespace, out: TextIO) -> None:
    for name in client.packages.list_names(ctx, _list_options(args)):
        print(name, file=out)


def _run_table_metadata(
    client: Client, ctx: CallContext, args: argparse.Namespace, out: TextIO
) -> None:
    if args.all:
        rows = CollectTableMetadata(client.datastore, page_size=args.page_size)(ctx)
    else:
        rows = client.datastore.table_metadata(ctx, _list_options(args))
    for row in rows:
        print(json.dumps(to_jsonable(row), ensure_ascii=False), file=out)
    _log.info("%s table metadata rows", len(rows))


def _run_action(client: Client, ctx: CallContext, args: argparse.Namespace, out: TextIO) -> None:
    req = client.new_request("GET", args.path)
    result = client.do(ctx, req, Any).result
    print(json.dumps(result, ensure_ascii=False, indent=2), file=out)


_COMMANDS: Dict[str, Callable[[Client, CallContext, argparse.Namespace, TextIO], None]] = {
    "packages": _run_packages,
    "table-metadata": _run_table_metadata,
    "action": _run_action,
}


def main(
    argv: Optional[List[str]] = None,
    *,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """CLI entrypoint. Returns the process exit code."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    args = _parse_args(argv)
    configure_root(args.log_level)
    ctx = CallContext.background()
    try:
        client = _build_client(args)
        _COMMANDS[args.command](client, ctx, args, out)
    except Exception as exc:
        mapped = map_api_error(exc, default_code="COMMAND_FAILED")
        print(f"{mapped.code}: {mapped.message}", file=err)
        return EXIT_FAILURE
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
