# =============================================================================
# pilkiscraper/cli/scrape.py - Pilkipedia Transcript Scraper CLI
# =============================================================================
#
# Crawls the Wayback Machine snapshot of the Pilkipedia "Transcripts"
# category and writes one JSON document per episode.
#
# Subcommands:
#   crawl   - fetch the listing, then every linked transcript page, and
#             write transcript-{publication}-{series}-{date}-{hash}.json
#   parse   - assemble a single locally saved page (debugging selectors)
#   status  - count written transcripts and cached pages
#
# Every page fetched is cached (./cache by default), so an interrupted crawl
# can simply be re-run: cached pages cost no network requests.
#
# Exit codes:
#   0 - success (individual page failures are logged, not fatal)
#   1 - bad configuration, seed listing unreachable, or output directory
#       could not be created
# =============================================================================

"""CLI for crawling Pilkipedia transcripts into JSON documents.

Usage::

    # Full crawl with the defaults from config/config.yaml
    python -m pilkiscraper.cli crawl

    # Faster crawl into a different directory
    python -m pilkiscraper.cli crawl --workers 8 --delay 0.5 --output-dir out/

    # Inspect what the assembler makes of one saved page
    python -m pilkiscraper.cli parse page.html --source https://web.archive.org/...

    # Check progress at any time
    python -m pilkiscraper.cli status
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from pilkiscraper.config.loader import DEFAULT_CONFIG_PATH, load_settings
from pilkiscraper.config.settings import Settings
from pilkiscraper.interfaces.cache_provider import ICacheProvider
from pilkiscraper.providers.cache import DiskCacheProvider, MemoryCacheProvider
from pilkiscraper.providers.fetch import HttpxPageFetcher, make_http_client
from pilkiscraper.providers.storage import JsonFileEpisodeStore, serialize_episode
from pilkiscraper.services.crawl_service import CrawlService
from pilkiscraper.services.episode_assembler import EpisodeAssembler
from pilkiscraper.utils.errors import ConfigurationError, FetchError, WriteError
from pilkiscraper.utils.logging import configure_logging

logger = structlog.get_logger(logger_name=__name__)


# ---------------------------------------------------------------------------
# Wiring helpers
# ---------------------------------------------------------------------------


def _load(args: argparse.Namespace) -> Settings:
    """Load settings and apply command-line overrides on top."""
    settings = load_settings(args.config)

    overrides = {
        "seed_url": getattr(args, "seed_url", None),
        "output_dir": getattr(args, "output_dir", None),
        "max_workers": getattr(args, "workers", None),
        "request_delay": getattr(args, "delay", None),
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    if update:
        # model_copy skips validation, so re-validate through the constructor.
        settings = Settings(**{**settings.model_dump(), **update})
    return settings


def _build_cache(settings: Settings) -> ICacheProvider:
    if settings.cache_backend == "memory":
        return MemoryCacheProvider()
    return DiskCacheProvider(settings.cache_dir)


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _handle_crawl(args: argparse.Namespace, settings: Settings) -> int:
    """Run a full crawl from the seed listing page.

    Per-page failures are logged and counted in the summary; only a seed
    fetch failure or an uncreatable output directory stops the crawl.
    """
    store = JsonFileEpisodeStore(settings.output_dir)
    cache = _build_cache(settings)

    print(f"Crawling {settings.seed_url}")
    print(f"Output: {settings.output_dir}  Cache: {cache.get_provider_name()}")
    print(f"Workers: {settings.max_workers}  Delay: {settings.request_delay}s")
    print()

    async with make_http_client(
        timeout=settings.request_timeout, user_agent=settings.user_agent
    ) as client:
        fetcher = HttpxPageFetcher(
            http_client=client, cache=cache, request_delay=settings.request_delay
        )
        service = CrawlService(
            fetcher=fetcher,
            assembler=EpisodeAssembler(),
            store=store,
            max_workers=settings.max_workers,
            allowed_domains=settings.allowed_domains,
        )
        try:
            report = await service.crawl(settings.seed_url)
        except FetchError as exc:
            logger.error("seed_fetch_failed", url=exc.source_url, error=exc.message)
            print(f"Error: could not fetch listing page: {exc}", file=sys.stderr)
            return 1
        except WriteError as exc:
            logger.error("storage_prepare_failed", error=exc.message)
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    print()
    print(f"  Transcript links: {report.discovered:,}")
    print(f"  Written:          {len(report.written):,}")
    print(f"  Failed:           {len(report.failed):,}")
    for url in report.failed:
        print(f"    - {url}")
    return 0


def _handle_parse(args: argparse.Namespace, settings: Settings) -> int:
    """Assemble one saved HTML file and print or write its document."""
    html_path = Path(args.file)
    try:
        html = html_path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot read {html_path}: {exc}", file=sys.stderr)
        return 1

    source = args.source or html_path.resolve().as_uri()
    assembled = EpisodeAssembler().assemble(html, source)
    for issue in assembled.issues:
        logger.warning(
            "episode_parse_issue",
            url=issue.source,
            stage=issue.stage,
            error=issue.message,
            block=issue.snippet,
        )

    if args.output_dir is None:
        sys.stdout.write(serialize_episode(assembled.episode))
        return 0

    store = JsonFileEpisodeStore(settings.output_dir)
    try:
        store.prepare()
        path = store.write(assembled.episode)
    except WriteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {path}")
    return 0


def _handle_status(args: argparse.Namespace, settings: Settings) -> int:
    """Show how many transcripts are written and pages cached.

    Reads local files only, so no network requests and no event loop.
    """
    store = JsonFileEpisodeStore(settings.output_dir)
    written = store.list_written()

    print("Pilkipedia Scrape Status")
    print("=" * 60)
    print()
    print("Transcripts:")
    print(f"  Directory:  {settings.output_dir}")
    print(f"  Written:    {len(written):,}")
    print()
    print("Cache:")
    if settings.cache_backend == "disk":
        cache = DiskCacheProvider(settings.cache_dir)
        print(f"  Directory:  {settings.cache_dir}")
        print(f"  Pages:      {cache.entry_count():,}")
    else:
        print("  (in-memory cache; nothing persisted)")

    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the scraper CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"YAML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    common.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit structured JSON logs instead of console output",
    )

    parser = argparse.ArgumentParser(
        prog="python -m pilkiscraper.cli",
        description="Scrape archived Pilkipedia transcripts into JSON documents.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Scraper commands")

    # -- crawl --
    crawl_parser = subparsers.add_parser(
        "crawl", parents=[common], help="Crawl the transcript listing and every linked page"
    )
    crawl_parser.add_argument("--seed-url", dest="seed_url", default=None,
                              help="Listing page to start from")
    crawl_parser.add_argument("--output-dir", dest="output_dir", default=None,
                              help="Directory for transcript JSON files")
    crawl_parser.add_argument("--workers", type=int, default=None,
                              help="Detail pages processed at once")
    crawl_parser.add_argument("--delay", type=float, default=None,
                              help="Seconds between network requests")

    # -- parse --
    parse_parser = subparsers.add_parser(
        "parse", parents=[common], help="Assemble one locally saved transcript page"
    )
    parse_parser.add_argument("file", help="Path to the saved HTML page")
    parse_parser.add_argument("--source", default=None,
                              help="URL the page came from (default: file:// URI)")
    parse_parser.add_argument("--output-dir", dest="output_dir", default=None,
                              help="Write the JSON file here instead of printing it")

    # -- status --
    status_parser = subparsers.add_parser(
        "status", parents=[common], help="Show written transcripts and cached pages"
    )
    status_parser.add_argument("--output-dir", dest="output_dir", default=None,
                               help="Directory for transcript JSON files")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the transcript scraper.

    "crawl" is async because it makes HTTP requests; "parse" and "status"
    only touch local files.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        settings = _load(args)
    except (ConfigurationError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(log_level=settings.log_level, json_output=args.json_logs)

    if args.command == "crawl":
        exit_code = asyncio.run(_handle_crawl(args, settings))
    elif args.command == "parse":
        exit_code = _handle_parse(args, settings)
    elif args.command == "status":
        exit_code = _handle_status(args, settings)
    else:
        parser.print_help()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
