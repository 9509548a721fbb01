"""Line cursor and file helpers shared by the deck and run codecs."""

from __future__ import annotations

import os
import re
import stat
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

from .errors import FormatError

_ID_PATTERN = re.compile(r"[0-9]+")


class LineCursor:
    """Forward-only cursor over text lines with one line of lookahead."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)
        self._pending: str | None = None
        self._has_pending = False
        self.line_number = 0

    def peek(self) -> str | None:
        """Return the next line without consuming it, or None at end of input."""
        if not self._has_pending:
            raw = next(self._lines, None)
            self._pending = None if raw is None else raw.rstrip("\r\n")
            self._has_pending = True
        return self._pending

    def advance(self) -> str | None:
        """Consume and return the next line, or None at end of input."""
        line = self.peek()
        self._has_pending = False
        self._pending = None
        if line is not None:
            self.line_number += 1
        return line

    def skip_blank(self) -> bool:
        """Consume blank lines; return whether a non-blank line follows."""
        while True:
            line = self.peek()
            if line is None:
                return False
            if line.strip():
                return True
            self.advance()

    def expect(self, what: str) -> str:
        """Consume the next line or fail with a format error describing ``what``."""
        line = self.advance()
        if line is None:
            raise FormatError(f"Unexpected end of file, expected {what}.", self.line_number + 1)
        return line


def parse_id(text: str) -> int | None:
    """Parse an unsigned decimal card id, or return None when ``text`` is not one."""
    stripped = text.strip()
    if not _ID_PATTERN.fullmatch(stripped):
        return None
    return int(stripped)


def read_lines(path: Path | str) -> list[str]:
    """Read a UTF-8 text file as a list of lines with newlines kept."""
    with Path(path).open(encoding="utf-8-sig") as handle:
        try:
            return handle.readlines()
        except UnicodeDecodeError as exc:
            raise FormatError(f"{path} is not UTF-8 text ({exc.reason} at byte {exc.start}).") from exc


def _new_file_mode() -> int:
    """Return the mode a plain ``open`` would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_text_atomic(path: Path | str, text: str) -> None:
    """Write ``text`` next to ``path`` and move it into place in one step.

    The replaced file keeps its permission bits; a new file gets the umask default.
    """
    target = Path(path)
    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        mode = _new_file_mode()
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
