"""Braille spinner for work with no known total"""

from typing import Optional, Tuple

from ..display import TerminalWriter, terminal_writer
from ..utils.logging import get_logger

log = get_logger(__name__)

SPINNER_FRAMES: Tuple[str, ...] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class Spinner:
    """An animated spinner that advances one frame per ``tick``.

    There is no timer: the caller decides how often to tick and print.
    """

    def __init__(self, message: str = "", writer: Optional[TerminalWriter] = None) -> None:
        self._frames = SPINNER_FRAMES
        self._current_frame = 0
        self.message = message
        self.writer = writer or terminal_writer

    @property
    def frames(self) -> Tuple[str, ...]:
        return self._frames

    @property
    def current_frame(self) -> int:
        return self._current_frame

    def with_message(self, message: str) -> "Spinner":
        """Set the initial message shown next to the spinner"""
        self.message = message
        return self

    def set_message(self, message: str) -> None:
        self.message = message

    def tick(self) -> None:
        """Advance to the next frame, wrapping after the last one"""
        self._current_frame = (self._current_frame + 1) % len(self._frames)

    def render(self) -> str:
        return f"{self._frames[self._current_frame]} {self.message}"

    def print(self) -> None:
        """Redraw the spinner on the current terminal line"""
        self.writer.rewrite(self.render())

    def finish(self, final_text: str) -> None:
        """Replace the spinner line with final_text and move to the next line"""
        self.writer.finalize(final_text)
        log.debug("spinner.finish", final_text=final_text)

    def __repr__(self) -> str:
        return f"Spinner(frame={self._current_frame}, message={self.message!r})"
