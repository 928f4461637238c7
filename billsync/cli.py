"""Command line entry point: ``billsync generate`` and ``billsync sync``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .bootstrap import ServiceContainer
from .logging_config import configure_logging
from .modules.artifacts.exceptions import BillSyncError
from .modules.bill.collect import GraphFileCollector
from .settings import Settings, get_settings

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="billsync",
        description="Maintain a bill of materials and sync it into a target repository",
    )
    parser.add_argument("--log-level", help="Override BILLSYNC_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Create or update the bill for a project")
    generate.add_argument("--graph", required=True, help="Pre-resolved dependency graph document (JSON)")
    generate.add_argument("--bill", help="Bill file to create or update (default: BILLSYNC_BILL_PATH)")
    snapshots = generate.add_mutually_exclusive_group()
    snapshots.add_argument("--ignore-snapshots", dest="ignore_snapshots", action="store_true", default=None)
    snapshots.add_argument("--include-snapshots", dest="ignore_snapshots", action="store_false")
    generate.add_argument("--dry-run", action="store_true", help="Print the merged bill instead of writing it")

    sync = subparsers.add_parser("sync", help="Deploy bill artifacts missing from a target repository")
    sync.add_argument("--target", required=True, help="Configured repository id or an existing local folder")
    sync.add_argument("--bill", help="Bill file listing the required artifacts (default: BILLSYNC_BILL_PATH)")
    return parser


def _generate(container: ServiceContainer, args: argparse.Namespace) -> int:
    collector = GraphFileCollector.from_path(args.graph)
    result = container.bill_service.generate(
        collector.project_references(),
        collector,
        collector,
        manifest_path=args.bill,
        ignore_snapshots=args.ignore_snapshots,
        dry_run=args.dry_run,
    )
    if result.content is not None:
        sys.stdout.write(result.content)
        return result.exit_code
    print(f"{result.count} artifacts in {result.manifest_path} ({result.added} new)")
    return result.exit_code


def _sync(container: ServiceContainer, args: argparse.Namespace) -> int:
    result = container.treesync_service.sync(args.target, bill_path=args.bill)
    counts = result.report.counts()
    print(
        "already-present={already_present} deployed={deployed} "
        "unresolvable={unresolvable} deploy-failed={deploy_failed}".format(**counts)
    )
    for outcome in result.report.failed:
        print(f"  {outcome.status.value}: {outcome.coordinate} ({outcome.error})", file=sys.stderr)
    return result.exit_code


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings or get_settings()
    configure_logging(args.log_level or settings.log_level)
    container = ServiceContainer(settings)
    try:
        if args.command == "generate":
            return _generate(container, args)
        return _sync(container, args)
    except (BillSyncError, ValueError) as exc:
        log.error("%s failed: %s", args.command, exc)
        return 2
    finally:
        container.close()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
