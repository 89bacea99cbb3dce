"""Command-line entry point for the prompt duplicate scanner.

Loads environment variables, reads a prompt-library export, runs a
duplicate scan and prints the groups it finds.
"""
from dotenv import load_dotenv
import argparse
import json
import sys

# Load environment variables first, before any other imports
load_dotenv()

from promptscan.config import get_config
from promptscan.dedup import DuplicateScanner, NullYielder
from promptscan.errors import ScanError, SizeLimitExceeded
from promptscan.repository import JsonFileEntryRepository
from promptscan.scan_options import ScanOptions
from promptscan.utils.logger import configure_logging, log_error, log_scan_progress


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find near-duplicate prompts in a prompt-library export.")
    parser.add_argument('export', type=str, help='Path to the exported prompts JSON file.')
    parser.add_argument('--max-items', type=int, help='Largest collection scanned without --allow-large.')
    parser.add_argument('--allow-large', dest='allow_large_datasets', action='store_true', default=None,
                        help='Scan collections larger than --max-items (the timeout still applies).')
    parser.add_argument('--timeout-ms', type=int, help='Wall-clock budget for the scan in milliseconds.')
    parser.add_argument('--json', dest='as_json', action='store_true', help='Print groups as JSON.')
    parser.add_argument('--progress', action='store_true', help='Print progress to stderr.')
    return parser


def _print_progress(percent: int, current: int, total: int) -> None:
    print(f"\r{percent:3d}% ({current}/{total})", end="", file=sys.stderr, flush=True)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    configure_logging(config.log_level, config.log_format)
    config.log_configuration()
    for issue in config.validate_configuration():
        log_scan_progress("Configuration advisory", issue=issue)

    overrides = {}
    if args.max_items is not None:
        overrides['max_items'] = args.max_items
    if args.allow_large_datasets is not None:
        overrides['allow_large_datasets'] = True
    if args.timeout_ms is not None:
        overrides['timeout_ms'] = args.timeout_ms
    if args.progress:
        overrides['on_progress'] = _print_progress

    try:
        options = ScanOptions.from_config(config, **overrides)
        entries = JsonFileEntryRepository(args.export).get_all()
        log_scan_progress("Entries loaded", count=len(entries))
        # Nothing else shares this process, so there is no one to yield to.
        groups = DuplicateScanner(yielder=NullYielder()).scan(entries, options)
    except OSError as e:
        log_error("Could not read export", path=args.export, error=str(e))
        print(f"❌ Could not read {args.export}: {e}")
        return 1
    except SizeLimitExceeded as e:
        print(f"⚠️  {e.user_message()}")
        print(f"   Estimated comparisons: {e.estimated_comparisons}. Re-run with --allow-large to continue.")
        return 2
    except ScanError as e:
        print(f"❌ {e.user_message()}")
        return 2
    finally:
        if args.progress:
            print(file=sys.stderr)

    if args.as_json:
        print(json.dumps([g.to_dict() for g in groups], indent=2, ensure_ascii=False))
        return 0

    if not groups:
        print("✅ No duplicate prompts found.")
        return 0

    print(f"Found {len(groups)} duplicate group(s):")
    for group in groups:
        print(f"\n• {group.original.title or '<untitled>'} [{group.original.id}]")
        for dup in group.duplicates:
            print(f"    ↳ {dup.title or '<untitled>'} [{dup.id}]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
