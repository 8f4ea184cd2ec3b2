"""Line buffer used by the layout engine.

The writer knows nothing about SQL.  It tracks the current line, its
indentation depth and visual length, and whether the line ends in a line
comment (in which case the next write must start a fresh line).
"""

from __future__ import annotations


class LineWriter:
    """Accumulates formatted lines.

    Parameters
    ----------
    indent:
        One indentation unit.
    line_width:
        Width hint used by :meth:`fits`.
    """

    def __init__(self, indent: str, line_width: int) -> None:
        self._indent = indent
        self._width = line_width
        self._lines: list[str] = []
        self._pieces: list[str] = []
        self._depth = 0
        self._length = 0
        self._comment_open = False

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def at_line_start(self) -> bool:
        return not self._pieces

    @property
    def ends_in_line_comment(self) -> bool:
        return self._comment_open

    def newline(self, depth: int) -> None:
        """Start a new line at *depth*; an empty current line is reused."""
        if self._pieces:
            self._lines.append(self._render_current())
        self._pieces = []
        self._depth = depth
        self._length = len(self._indent) * depth
        self._comment_open = False

    def write(self, text: str, *, space: bool = True) -> None:
        """Append *text*, separated by one space unless *space* is false or the line is empty."""
        if self._comment_open:
            self.newline(self._depth)
        if space and self._pieces:
            self._pieces.append(" ")
            self._length += 1
        self._pieces.append(text)
        self._length += len(text)

    def write_line_comment(self, text: str, *, space: bool = True) -> None:
        """Append a line comment; the next write starts a new line at the same depth."""
        self.write(text, space=space)
        self._comment_open = True

    def fits(self, text: str, *, space: bool = True) -> bool:
        """True if writing *text* now keeps the line within the width hint."""
        if self._comment_open:
            return len(self._indent) * self._depth + len(text) <= self._width
        extra = 1 if space and self._pieces else 0
        return self._length + extra + len(text) <= self._width

    def getvalue(self) -> str:
        lines = list(self._lines)
        if self._pieces:
            lines.append(self._render_current())
        return "\n".join(lines)

    def _render_current(self) -> str:
        return (self._indent * self._depth + "".join(self._pieces)).rstrip()
