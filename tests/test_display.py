"""
Tests for the terminal line writer
"""

import io

import pytest

from simpleprogress.display import CLEAR_TO_EOL, TerminalWriter


class FlushCounter(io.StringIO):
    """StringIO that counts flush calls"""

    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


class BrokenStream(io.StringIO):
    def write(self, s):
        raise BrokenPipeError("pipe closed")


class TestTerminalWriter:
    """Test in-place rewrite and finalize"""

    def test_rewrite(self, writer, stream):
        writer.rewrite("hello")
        assert stream.getvalue() == "\rhello\x1b[K"
        assert CLEAR_TO_EOL == "\x1b[K"

    def test_finalize(self, writer, stream):
        writer.rewrite("working")
        writer.finalize("done")
        assert stream.getvalue() == "\rworking\x1b[K\rdone\n"

    def test_every_write_flushes(self):
        stream = FlushCounter()
        writer = TerminalWriter(stream)
        writer.rewrite("a")
        writer.rewrite("b")
        writer.finalize("c")
        assert stream.flushes == 3

    def test_unicode_payload(self, writer, stream):
        writer.rewrite("⠋ Ładowanie")
        assert "⠋ Ładowanie" in stream.getvalue()

    def test_default_targets_stdout(self, capsys):
        TerminalWriter().finalize("line")
        assert capsys.readouterr().out == "\rline\n"

    def test_write_errors_propagate(self):
        """Test a failed write is not swallowed"""
        writer = TerminalWriter(BrokenStream())
        with pytest.raises(BrokenPipeError):
            writer.rewrite("x")
