"""Terminal editing surface and prompter used by the ``grab-link`` command.

Insertion writes to stdout, so editors can splice the command's output
into a buffer (``:r !grab-link`` in vim, ``C-u M-!`` in Emacs).  Menus go
to stderr to keep stdout clean.
"""

from __future__ import annotations

import sys
from typing import TextIO

from grablink import clipboard
from grablink._base import EditingSurface, Prompter
from grablink.errors import SelectionError


class TerminalSurface(EditingSurface):
    """Stdout for insertion, the system pasteboard for copies.

    There is no stored-links registry, so ``org`` copies go to the
    clipboard like every other link type.
    """

    def __init__(self, *, context: str | None = None, out: TextIO | None = None) -> None:
        self._context = context
        self._out = out

    def insert_at_cursor(self, text: str) -> None:
        out = self._out or sys.stdout
        out.write(text + "\n")
        out.flush()

    def set_clipboard(self, text: str) -> None:
        clipboard.set_clipboard(text)

    def get_clipboard(self) -> str | None:
        return clipboard.get_clipboard()

    def current_context(self) -> str | None:
        return self._context


class TerminalPrompter(Prompter):
    """Reads one keypress (raw mode on a TTY, first character of a line otherwise)."""

    def __init__(self, *, stdin: TextIO | None = None, stderr: TextIO | None = None) -> None:
        self._stdin = stdin
        self._stderr = stderr

    def read_char(self, prompt: str) -> str:
        stdin = self._stdin or sys.stdin
        stderr = self._stderr or sys.stderr
        stderr.write(prompt + " ")
        stderr.flush()

        if stdin.isatty():
            char = _read_raw_char(stdin)
        else:
            line = stdin.readline()
            char = line[:1]
        stderr.write("\n")
        stderr.flush()

        if not char or char in ("\x03", "\x04"):
            raise SelectionError("Selection cancelled", char=char or None)
        return char


def _read_raw_char(stdin: TextIO) -> str:
    import termios
    import tty

    fd = stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
