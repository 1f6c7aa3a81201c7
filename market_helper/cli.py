#!/usr/bin/env python3
"""
Command-line entry point: scroll a market page, parse its modules and save them.
"""
import argparse
import asyncio
import os
import sys

from .config import Config, config
from .core import run_market_helper, run_scrape
from .dom import StaticDocument
from .export import save_output_rows, save_payload
from .utils import init_logger, now_iso

logger = None


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Market Helper: scroll a market page until loaded and extract its modules")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--url", type=str, help="Open this market page in a new browser")
    src.add_argument("--cdp-url", type=str, help="Attach to a running Chrome (e.g. http://localhost:9222) and use its open tab")
    src.add_argument("--html", type=str, help="Parse a saved HTML snapshot instead of a live page")
    ap.add_argument("--out", type=str, default=config.OUTPUT_PATH, help="JSON file for the extracted modules")
    ap.add_argument("--export", type=str, default="", help="Also write a CSV/XLSX table of the modules")
    ap.add_argument("--interval-ms", type=int, default=config.POLL_INTERVAL_MS, help="Delay between scroll checks")
    ap.add_argument("--stable-ticks", type=int, default=config.REQUIRED_STABLE_TICKS,
                    help="Consecutive unchanged checks required before parsing")
    ap.add_argument("--max-ticks", type=int, default=config.MAX_TICKS,
                    help="Give up after this many checks (0 waits indefinitely)")
    ap.add_argument("--headless", action="store_true", help="Run without UI")
    ap.add_argument("--storage-state", type=str, default=config.STORAGE_STATE_PATH, help="Path to storage_state.json")
    ap.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    # Logging
    lvl_choices = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    ap.add_argument("--log-level", choices=lvl_choices, default=None,
                    help="Global log level for both console and file (overrides --log-console/--log-file).")
    ap.add_argument("--log-console", choices=lvl_choices, default=os.getenv("LOG_CONSOLE", config.LOG_LEVEL),
                    help="Console log level (default from env LOG_CONSOLE or INFO).")
    ap.add_argument("--log-file", choices=lvl_choices, default=os.getenv("LOG_FILE", "DEBUG"),
                    help="File log level (default from env LOG_FILE or DEBUG).")
    ap.add_argument("--log-file-path", default=os.getenv("LOG_FILE_PATH", "market_helper.log"),
                    help="Path to log file (default from env LOG_FILE_PATH or market_helper.log).")
    ap.add_argument("--no-file-log", action="store_true",
                    help="Disable file logging (only console output).")

    return ap.parse_args(argv)


def build_settings(args) -> Config:
    """Config instance with the command-line overrides applied."""
    settings = Config()
    settings.POLL_INTERVAL_MS = 0 if args.html else args.interval_ms
    settings.REQUIRED_STABLE_TICKS = args.stable_ticks
    settings.MAX_TICKS = args.max_ticks
    settings.validate()
    return settings


def confirm(prompt: str = "Scroll and parse the page? [y/N] ") -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


async def collect(args, settings: Config):
    if args.html:
        with open(args.html, encoding="utf-8") as f:
            html = f.read()
        return await run_market_helper(StaticDocument(html), settings)
    return await run_scrape(
        url=args.url,
        cdp_url=args.cdp_url,
        headless=args.headless,
        storage_state_path=args.storage_state,
        settings=settings,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    eff_console = args.log_level or args.log_console
    eff_file = args.log_level or args.log_file
    global logger
    logger = init_logger(
        console_level=eff_console,
        file_level=eff_file,
        log_file=None if args.no_file_log else args.log_file_path
    )
    logger.info(
            f"Logger initialized: console={eff_console}, "
            f"file={'DISABLED' if args.no_file_log else eff_file}, "
            f"path={'N/A' if args.no_file_log else args.log_file_path}"
        )

    try:
        settings = build_settings(args)
    except ValueError as e:
        logger.error(f"Invalid settings: {e}")
        return 1

    if not args.yes and not confirm():
        logger.info(">>> Cancelled")
        return 1

    logger.info(f">>> Run started at {now_iso()}")
    try:
        result = asyncio.run(collect(args, settings))
    except Exception:
        logger.exception("Failed to run Market Helper")
        return 1

    save_payload(result, args.out)
    if not result.ok:
        logger.error(f">>> Error parsing page: {result.error}")
        return 2

    if args.export:
        save_output_rows(result.modules, args.export)
    return 0


if __name__ == "__main__":
    sys.exit(main())
