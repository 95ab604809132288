"""
Terminal line writer used by the progress bar and spinner
"""

from typing import Optional, TextIO

from rich.console import Console

# Global console instance
console = Console()

CARRIAGE_RETURN = "\r"
CLEAR_TO_EOL = "\x1b[K"


class TerminalWriter:
    """Redraws a single terminal line in place.

    ``rewrite`` returns the cursor to column 0, writes the text and clears
    whatever the previous draw left behind. ``finalize`` writes the last
    version of the line followed by a newline so later output starts below it.

    When no stream is given the writer follows the global console's file,
    which is looked up on every write so a redirected ``sys.stdout`` is used.
    """

    def __init__(self, file: Optional[TextIO] = None) -> None:
        self._file = file

    @property
    def file(self) -> TextIO:
        if self._file is not None:
            return self._file
        return console.file

    def rewrite(self, text: str) -> None:
        """Overwrite the current line with text"""
        out = self.file
        out.write(f"{CARRIAGE_RETURN}{text}{CLEAR_TO_EOL}")
        out.flush()

    def finalize(self, text: str) -> None:
        """Write the final line and move to the next one"""
        out = self.file
        out.write(f"{CARRIAGE_RETURN}{text}\n")
        out.flush()


# Shared writer for components created without one
terminal_writer = TerminalWriter()
