"""File mode: resolve many channel URLs in parallel, keeping input order."""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from ytrss.config import MAX_WORKERS, OUTPUT_SUFFIX
from ytrss.errors import BatchError, ResolutionError
from ytrss.resolver import resolve_feed_url

logger = logging.getLogger(__name__)

Outcome = Union[str, ResolutionError]
BatchResult = List[Tuple[str, Outcome]]


def read_urls(path) -> List[str]:
    """Read one URL per line, skipping blank lines."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            urls = [line.strip() for line in f if line.strip()]
    except (OSError, UnicodeDecodeError) as e:
        raise BatchError(f"Cannot read {path}: {e}") from e

    if not urls:
        raise BatchError(f"No URLs to process in {path}")
    return urls


def count_resolved(results: BatchResult) -> int:
    return sum(1 for _, outcome in results if not isinstance(outcome, ResolutionError))


def resolve_batch(
    urls: List[str],
    max_workers: int = MAX_WORKERS,
    resolve: Callable[[str], str] = resolve_feed_url,
) -> BatchResult:
    """Resolve every URL with at most `max_workers` lookups in flight.

    Returns [(url, feed_url or ResolutionError), ...] in input order. A
    failed URL never stops the others; only ResolutionError is recorded,
    anything else propagates.
    """
    if not urls:
        raise BatchError("No URLs to process")
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    def resolve_one(url: str) -> Outcome:
        try:
            return resolve(url)
        except ResolutionError as e:
            return e

    # One slot per input line, each written once
    results: List[Optional[Outcome]] = [None] * len(urls)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(resolve_one, url): index
            for index, url in enumerate(urls)
        }
        for future in as_completed(futures):
            index = futures[future]
            outcome = future.result()
            results[index] = outcome
            if isinstance(outcome, ResolutionError):
                logger.warning("[%d] %s: %s (%s)", index + 1, outcome.kind, urls[index], outcome)
            else:
                logger.debug("[%d] %s -> %s", index + 1, urls[index], outcome)

    batch = list(zip(urls, results))
    logger.info("%d/%d resolved", count_resolved(batch), len(urls))
    return batch


def output_path_for(path) -> Path:
    """channels.txt -> channels_parsed.txt, channels -> channels_parsed."""
    path = Path(path)
    return path.with_name(f"{path.stem}{OUTPUT_SUFFIX}{path.suffix}")


def format_outcome(url: str, outcome: Outcome) -> str:
    if isinstance(outcome, ResolutionError):
        return f"ERROR {outcome.kind}: {url} ({outcome})"
    return outcome


def write_results(results: BatchResult, path) -> Path:
    path = Path(path)
    lines = [format_outcome(url, outcome) for url, outcome in results]
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
    except OSError as e:
        raise BatchError(f"Cannot write {path}: {e}") from e
    return path


def convert_file(
    path,
    output=None,
    max_workers: int = MAX_WORKERS,
    resolve: Callable[[str], str] = resolve_feed_url,
) -> Tuple[Path, BatchResult]:
    """Read URLs from `path`, resolve them and write one line per URL.

    Output goes to `output` or to the derived `<stem>_parsed<ext>` path.
    """
    urls = read_urls(path)
    logger.info("Resolving %d URLs from %s with %d workers", len(urls), path, max_workers)
    results = resolve_batch(urls, max_workers=max_workers, resolve=resolve)
    out_path = write_results(results, output or output_path_for(path))
    return out_path, results
