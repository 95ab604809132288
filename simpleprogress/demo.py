#!/usr/bin/env python3
"""
simpleprogress demo - drives a progress bar and a spinner in a loop
"""

import argparse
import math
import sys
import time
from typing import Optional, Sequence

from rich.console import Console

from simpleprogress.config import load_config, config_manager
from simpleprogress.display import TerminalWriter
from simpleprogress.ui.progress import ProgressBar
from simpleprogress.ui.spinner import Spinner
from simpleprogress.utils.logging import bind, get_logger, setup_logging
from simpleprogress.utils.timing import log_phase

# Diagnostics go to stderr; stdout is reserved for the redrawn line
console = Console(stderr=True)


def run_bar(bar: ProgressBar, step: float, delay: float) -> None:
    with log_phase("demo.bar", total=bar.total, step=step) as outcome:
        redraws = 0
        while not bar.is_finished():
            bar.print()
            redraws += 1
            time.sleep(delay)
            bar.inc_by(step)
        bar.finish()
        outcome.update(current=bar.current, redraws=redraws)


def run_spinner(spinner: Spinner, ticks: int, delay: float) -> None:
    with log_phase("demo.spinner", message=spinner.message) as outcome:
        for _ in range(ticks):
            spinner.tick()
            spinner.print()
            time.sleep(delay)
        spinner.finish("Complete!")
        outcome.update(ticks=ticks, last_frame=spinner.current_frame)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="simpleprogress-demo",
        description="simpleprogress - terminal progress bar and spinner demo",
        epilog="Examples:\n"
        "  simpleprogress-demo                      # Bar, then spinner\n"
        "  simpleprogress-demo --no-arrow --no-count\n"
        "  simpleprogress-demo --rate --chars '#' '.' '#'\n"
        "  simpleprogress-demo --only spinner --ticks 30",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--total", type=float, default=100.0, help="Bar total (default 100)")
    ap.add_argument("--step", type=float, default=0.5, help="Increment per iteration")
    ap.add_argument("--delay", type=float, default=0.005, help="Seconds between bar redraws")
    ap.add_argument("--ticks", type=int, default=101, help="Spinner frames to draw (default 101)")
    ap.add_argument("--spinner-delay", type=float, default=0.1, help="Seconds between spinner frames")
    ap.add_argument("--width", type=int, help="Bar width in characters")
    ap.add_argument(
        "--chars", nargs=3, metavar=("FILL", "EMPTY", "ARROW"), help="Bar glyphs"
    )
    ap.add_argument("--no-arrow", action="store_true", help="Hide the arrow tip")
    ap.add_argument("--no-count", action="store_true", help="Hide the count")
    ap.add_argument("--no-percentage", action="store_true", help="Hide the percentage")
    ap.add_argument("--no-bar", action="store_true", help="Hide the bar itself")
    ap.add_argument("--rate", action="store_true", help="Show rate and ETA")
    ap.add_argument("--message", help="Spinner message (default 'Processing...')")
    ap.add_argument("--only", choices=["bar", "spinner"], help="Run a single demo")
    ap.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )
    return ap


def _fail(message: str) -> None:
    console.print(f"[red][ERR] {message}[/red]")
    sys.exit(2)


def _check_args(args: argparse.Namespace) -> None:
    if not math.isfinite(args.total):
        _fail("--total must be a finite number")
    if args.step <= 0:
        _fail("--step must be positive")
    if args.delay < 0 or args.spinner_delay < 0:
        _fail("Delays cannot be negative")
    if args.ticks < 0:
        _fail("--ticks cannot be negative")
    if args.width is not None and args.width < 0:
        _fail("--width cannot be negative")
    if args.chars and any(len(c) != 1 for c in args.chars):
        _fail("--chars expects three single characters")


def make_bar(args: argparse.Namespace, writer: Optional[TerminalWriter] = None) -> ProgressBar:
    """Build the demo bar from configured defaults plus command-line flags"""
    bar = ProgressBar(args.total, config=config_manager.bar_config(), writer=writer)
    if args.no_arrow:
        bar.no_arrow()
    if args.no_count:
        bar.no_count()
    if args.no_percentage:
        bar.no_percentage()
    if args.no_bar:
        bar.no_bar()
    if args.width is not None:
        bar.width(args.width)
    if args.chars:
        bar.chars(*args.chars)
    if args.rate:
        bar.with_rate()
    return bar


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    _check_args(args)

    config = load_config()
    logging_config = config_manager.logging_config()
    setup_logging(
        level=args.log_level or logging_config.level,
        file_enabled=logging_config.file_enabled,
        console_enabled=logging_config.console_enabled,
        json_file=logging_config.json_file,
        log_path=logging_config.path,
        rotate_max_bytes=logging_config.rotate_max_bytes,
        rotate_backups=logging_config.rotate_backups,
        rich_tracebacks=logging_config.rich_tracebacks,
        show_path=logging_config.show_path,
    )
    bind(app="simpleprogress", config_version=config["version"])
    log = get_logger(__name__)
    log.info("startup", only=args.only or "all")

    if args.only in (None, "bar"):
        run_bar(make_bar(args), args.step, args.delay)

    if args.only in (None, "spinner"):
        message = args.message
        if message is None:
            message = config["spinner"].get("message") or "Processing..."
        run_spinner(Spinner().with_message(message), args.ticks, args.spinner_delay)


if __name__ == "__main__":
    main()
