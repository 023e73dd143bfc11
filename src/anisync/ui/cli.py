from __future__ import annotations

import argparse
import logging
import sys
import threading
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from anisync.adapters.listfile import build_report_payload, load_list_file, write_report
from anisync.app import build_strategy_chain, load_crosswalk_sources, resolve_lists
from anisync.config import ConfigurationError, configure_logging, get_strategy_toggles
from anisync.domain.model import SyncDirection
from anisync.domain.resolution import RunContext, SyncOptions, SyncReport

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Match AniList and MyAnimeList list entries")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser(
        "resolve",
        help="Resolve a source list export against a target list export (dry run)",
    )
    resolve.add_argument("--source", type=Path, required=True, help="Source list JSON export")
    resolve.add_argument("--target", type=Path, required=True, help="Target list JSON export")
    resolve.add_argument(
        "--direction",
        type=SyncDirection,
        choices=list(SyncDirection),
        default=SyncDirection.ANILIST_TO_MAL,
        help="Sync direction (default: %(default)s)",
    )
    resolve.add_argument(
        "--mappings",
        type=Path,
        help="Manual mappings file in TOML (YAML mapping files from other tools must be converted)",
    )
    resolve.add_argument(
        "--force-sync",
        action="store_true",
        help="Skip matching and trust the foreign IDs stored on source entries",
    )
    resolve.add_argument("--no-manual-mappings", action="store_true", help="Ignore manual mappings")
    resolve.add_argument("--no-offline-db", action="store_true", help="Skip the offline database")
    resolve.add_argument("--no-hato", action="store_true", help="Skip the Hato mapping service")
    resolve.add_argument("--no-arm", action="store_true", help="Skip the ARM mapping service")
    resolve.add_argument("--no-jikan", action="store_true", help="Skip Jikan manga lookups")
    resolve.add_argument("--report-json", type=Path, help="Write the resolution report here")

    return parser.parse_args(list(argv))


def _cancel_on_sigint(cancel_event: threading.Event) -> Callable[[int, FrameType | None], None]:
    def handler(_signal_received: int, _frame: FrameType | None) -> None:
        log.info("Interrupted; finishing with partial results (Ctrl+C)")
        cancel_event.set()

    return handler


def _run_resolve(args: argparse.Namespace, cancel_event: threading.Event) -> None:
    direction: SyncDirection = args.direction
    source_service, kind, sources = load_list_file(args.source)
    target_service, target_kind, targets = load_list_file(args.target)
    if source_service is not direction.origin or target_service is not direction.destination:
        raise ValueError(
            f"{direction} expects a {direction.origin} source and a {direction.destination} target, "
            f"got {source_service} and {target_service}"
        )
    if kind is not target_kind:
        raise ValueError(f"Source lists {kind} but target lists {target_kind}")

    defaults = get_strategy_toggles()
    toggles = replace(
        defaults,
        manual_mappings=defaults.manual_mappings and not args.no_manual_mappings,
        offline_database=defaults.offline_database and not args.no_offline_db,
        hato=defaults.hato and not args.no_hato,
        arm=defaults.arm and not args.no_arm,
        jikan=defaults.jikan and not args.no_jikan,
    )
    crosswalks = load_crosswalk_sources(toggles=toggles, mappings_path=args.mappings)
    chain = build_strategy_chain(crosswalks, toggles=toggles)

    report = SyncReport()
    context = RunContext(
        options=SyncOptions(direction=direction, force_sync=args.force_sync, dry_run=True),
        kind=kind,
        report=report,
        cancel_event=cancel_event,
    )
    try:
        result, statistics = resolve_lists(
            sources=sources,
            targets=targets,
            context=context,
            chain=chain,
            ignore=crosswalks.ignore,
        )
    finally:
        crosswalks.save_caches()

    for conflict in result.conflicts:
        log.warning(
            "Duplicate: %r already matched to %r by %r via %s (%s discarded)",
            conflict.loser.title,
            conflict.target.title,
            conflict.winner.title,
            conflict.winner_strategy,
            conflict.loser_strategy,
        )
    if args.report_json is not None:
        payload = build_report_payload(
            result,
            context=context,
            warnings=report.warnings,
            statistics=statistics,
        )
        write_report(args.report_json, payload)
        log.info("Wrote report to %s", args.report_json)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    cancel_event = threading.Event()
    previous_handler = signal(SIGINT, _cancel_on_sigint(cancel_event))
    try:
        if parsed_args.command == "resolve":
            _run_resolve(parsed_args, cancel_event)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ValueError, ConfigurationError):
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during resolution")
        sys.exit(1)
    finally:
        signal(SIGINT, previous_handler)


if __name__ == "__main__":
    main()
