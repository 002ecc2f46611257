"""
Command line entry point.

    ytrss url https://www.youtube.com/@veritasium
    ytrss file channels.txt        # writes channels_parsed.txt

Exit code is 0 on success and 1 when the URL could not be resolved, the
file could not be read or written, or every URL in the file failed.
"""
import argparse
import logging
import math
import sys
from functools import partial
from typing import List, Optional

from ytrss.batch import convert_file, count_resolved
from ytrss.config import APP_NAME, APP_VERSION, FETCH_TIMEOUT, LOG_FORMAT, MAX_WORKERS
from ytrss.errors import BatchError, ResolutionError
from ytrss.resolver import fetch_channel_id, resolve_feed_url


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Get RSS feed URLs from YouTube channel URLs",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    parser.add_argument(
        "--timeout", type=_positive_float, default=FETCH_TIMEOUT,
        help=f"Seconds to wait for a channel page (default {FETCH_TIMEOUT})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    url_parser = subparsers.add_parser("url", help="Print the feed URL for one channel URL")
    url_parser.add_argument("url", help="Channel URL (/channel/, /@handle, /c/, /user/ or youtu.be)")

    file_parser = subparsers.add_parser("file", help="Convert a file of channel URLs, one per line")
    file_parser.add_argument("path", help="Input file")
    file_parser.add_argument("-o", "--output", help="Output file (default <name>_parsed<ext>)")
    file_parser.add_argument(
        "-w", "--workers", type=_positive_int, default=MAX_WORKERS,
        help=f"Simultaneous lookups (default {MAX_WORKERS})",
    )
    return parser


def run_url(url: str, resolve) -> int:
    try:
        feed_url = resolve(url)
    except ResolutionError as e:
        print(f"Error ({e.kind}): {url}: {e}", file=sys.stderr)
        return 1
    print(feed_url)
    return 0


def run_file(path: str, output: Optional[str], workers: int, resolve) -> int:
    try:
        out_path, results = convert_file(path, output=output, max_workers=workers, resolve=resolve)
    except BatchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    resolved = count_resolved(results)
    print(f"Wrote {out_path}")
    print(f"{resolved}/{len(results)} resolved")
    return 0 if resolved else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    # urllib3 connection chatter drowns out the per-URL lines
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    resolve = partial(resolve_feed_url, fetch=partial(fetch_channel_id, timeout=args.timeout))

    if args.command == "url":
        return run_url(args.url, resolve)
    return run_file(args.path, args.output, args.workers, resolve)


if __name__ == "__main__":
    sys.exit(main())
