"""
simpleprogress - terminal progress bars and spinners with in-place redraw
"""

from .display import TerminalWriter
from .ui.progress import BarConfig, ProgressBar
from .ui.spinner import SPINNER_FRAMES, Spinner

__version__ = "1.0.0"

__all__ = [
    "BarConfig",
    "ProgressBar",
    "SPINNER_FRAMES",
    "Spinner",
    "TerminalWriter",
]
