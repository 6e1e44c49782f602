"""dtshim CLI entry point.

Usage:
    dtshim demo radiology > export.jsonl
    dtshim verify export.jsonl
"""
import argparse
import logging
import sys

from dtshim.scenarios import SCENARIOS


def _add_demo_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "demo",
        help="Replay a device scenario and print its chained entries.",
    )
    p.add_argument(
        "scenario", choices=sorted(SCENARIOS),
        help="Which device scenario to run.",
    )
    p.add_argument(
        "--device-id", default=None,
        help="Override the scenario's device identifier.",
    )


def _add_verify_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "verify",
        help="Verify a JSON-lines export of chained entries.",
    )
    p.add_argument(
        "file",
        help="Export file, one entry per line ('-' reads stdin).",
    )
    p.add_argument(
        "--linkage-only", action="store_true",
        help="Only check previous_hash links; do not recompute chain hashes.",
    )


def _run_demo(args: argparse.Namespace) -> int:
    chain, entries = SCENARIOS[args.scenario](args.device_id)
    for entry in entries:
        print(entry)
    print(f"Chain hash: {chain.chain_hash}", file=sys.stderr)
    print(f"Total entries: {chain.sequence_number}", file=sys.stderr)
    return 0


def _read_lines(path: str) -> list[str]:
    """One entry per newline-terminated line; blank lines are skipped.

    Only LF (with an optional CR before it) ends a line. str.splitlines() would
    also break on characters such as U+2028 that may sit inside a
    message written by another encoder.
    """
    if path == "-":
        text = sys.stdin.read()
    else:
        with open(path, encoding="utf-8", newline="") as fh:
            text = fh.read()
    lines = (line.rstrip("\r") for line in text.split("\n"))
    return [line for line in lines if line.strip()]


def _run_verify(args: argparse.Namespace) -> int:
    from dtshim.crypto.verifier import ChainVerifier

    try:
        lines = _read_lines(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"ERROR: cannot read {args.file}: {exc}", file=sys.stderr)
        return 2

    result = ChainVerifier(lines, recompute=not args.linkage_only).verify_full()
    if result.is_valid:
        print(f"OK: {result.entries_verified} entries verified")
        return 0
    print(f"FAILED: {result.error_message}")
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dtshim",
        description="Device Trust Shim -- tamper-evident audit chains, pure Python.",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level for diagnostics on stderr (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_demo_parser(subparsers)
    _add_verify_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0
    if args.command == "demo":
        return _run_demo(args)
    return _run_verify(args)


if __name__ == "__main__":
    sys.exit(main())
