"""Progress bar with configurable glyphs, layout and rate/ETA display"""

import math
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

from ..display import TerminalWriter, terminal_writer
from ..utils.logging import get_logger

log = get_logger(__name__)

# Largest ETA shown; longer estimates saturate here
MAX_ETA_SECONDS = 2**64 - 1


def _whole_seconds(seconds: float) -> int:
    if math.isnan(seconds) or seconds <= 0:
        return 0
    if math.isinf(seconds):
        return MAX_ETA_SECONDS
    return min(int(seconds), MAX_ETA_SECONDS)


@dataclass
class BarConfig:
    """Which sections of a progress bar are drawn, and with which glyphs"""

    show_bar: bool = True
    show_percentage: bool = True
    show_count: bool = True
    show_arrow: bool = True
    show_rate: bool = False
    width: int = 50
    fill_char: str = "="
    empty_char: str = " "
    arrow_char: str = ">"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BarConfig":
        """Build a config from a mapping, ignoring unknown keys"""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


class ProgressBar:
    """A highly configurable single-line progress bar.

    The bar does not draw on its own: the caller mutates it with ``inc``,
    ``inc_by`` or ``set`` and calls ``print`` whenever the line should be
    redrawn, then ``finish`` once.

    Example:
        bar = ProgressBar(100).no_count().with_rate()
        while not bar.is_finished():
            bar.print()
            bar.inc_by(0.5)
        bar.finish()
    """

    def __init__(
        self,
        total: float,
        config: Optional[BarConfig] = None,
        writer: Optional[TerminalWriter] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._total = float(total)
        self.current = 0.0
        self.config = replace(config) if config is not None else BarConfig()
        self.writer = writer or terminal_writer
        self._clock = clock
        self.start_time: Optional[float] = None
        if self.config.show_rate:
            self.start_time = clock()

    @property
    def total(self) -> float:
        return self._total

    # ---- configuration ------------------------------------------------------

    def no_arrow(self) -> "ProgressBar":
        """Disable the arrow tip at the front of the filled section"""
        self.config.show_arrow = False
        return self

    def no_percentage(self) -> "ProgressBar":
        """Hide the percentage next to the bar"""
        self.config.show_percentage = False
        return self

    def no_count(self) -> "ProgressBar":
        """Hide the (current/total) counter"""
        self.config.show_count = False
        return self

    def no_bar(self) -> "ProgressBar":
        """Hide the bar itself, leaving only the text sections"""
        self.config.show_bar = False
        return self

    def with_rate(self) -> "ProgressBar":
        """Show rate and ETA, measured from now"""
        self.config.show_rate = True
        self.start_time = self._clock()
        log.debug("progress.rate_enabled", total=self._total)
        return self

    def width(self, width: int) -> "ProgressBar":
        """Set the width of the bar in characters"""
        self.config.width = width
        return self

    def chars(self, fill: str, empty: str, arrow: str) -> "ProgressBar":
        """Set the fill, empty and arrow glyphs"""
        self.config.fill_char = fill
        self.config.empty_char = empty
        self.config.arrow_char = arrow
        return self

    # ---- state --------------------------------------------------------------

    def inc(self) -> None:
        """Increment the progress by 1.0"""
        self.current += 1.0

    def inc_by(self, amount: float) -> None:
        """Increment the progress by amount (negative values move it back)"""
        self.current += amount

    def set(self, value: float) -> None:
        """Set the progress, clamped between 0 and total"""
        if math.isnan(value):
            value = 0.0
        self.current = min(max(value, 0.0), self._total)

    def is_finished(self) -> bool:
        return self.current >= self._total

    def fraction(self) -> float:
        """Completed fraction of total, 0.0 for a zero total"""
        if self._total == 0:
            return 0.0
        return self.current / self._total

    def elapsed(self) -> float:
        """Seconds since rate tracking started, 0.0 if it never did"""
        if self.start_time is None:
            return 0.0
        return self._clock() - self.start_time

    # ---- rendering ----------------------------------------------------------

    def _filled_cells(self) -> int:
        width = self.config.width
        scaled = self.fraction() * width
        if math.isnan(scaled):
            return 0
        if math.isinf(scaled):
            return width if scaled > 0 else 0
        return max(0, min(math.floor(scaled), width))

    def _render_bar(self) -> str:
        cfg = self.config
        filled = self._filled_cells()
        if not cfg.show_arrow:
            head = cfg.fill_char * filled
        elif filled > 0:
            head = cfg.fill_char * (filled - 1) + cfg.arrow_char
        else:
            head = ""
        return f"[{head}{cfg.empty_char * (cfg.width - filled)}]"

    def _render_rate(self) -> List[str]:
        elapsed = self.elapsed()
        rate = self.current / elapsed if elapsed > 0 else 0.0
        parts = [f"{rate:.2f}/sec"]
        if rate > 0 and self.current < self._total:
            eta = (self._total - self.current) / rate
            parts.append(f"ETA: {_whole_seconds(eta)}s")
        return parts

    def render(self) -> str:
        """Render the bar as a string without writing it anywhere"""
        cfg = self.config
        parts: List[str] = []

        if cfg.show_bar:
            parts.append(self._render_bar())

        if cfg.show_percentage:
            parts.append(f"{self.fraction() * 100:.2f}%")

        if cfg.show_count:
            parts.append(f"({self.current:.2f}/{self._total:.2f})")

        if cfg.show_rate:
            parts.extend(self._render_rate())

        return " ".join(parts)

    # ---- output -------------------------------------------------------------

    def print(self) -> None:
        """Redraw the bar on the current terminal line"""
        self.writer.rewrite(self.render())

    def finish(self) -> None:
        """Draw the final state of the bar and move to the next line"""
        self.writer.finalize(self.render())
        log.debug(
            "progress.finish",
            current=self.current,
            total=self._total,
            finished=self.is_finished(),
        )

    def __repr__(self) -> str:
        return f"ProgressBar(current={self.current!r}, total={self._total!r})"
