"""Forward-only scanner over a single protocol line.

Every operation works relative to the current offset. A failed match
returns ``None`` and leaves the offset where it was, which lets callers
chain alternatives (``take_delimited(...)``, else ``take_until(...)``,
else ``rest()``) without manual rewinding. ``rest`` and ``take_delimited``
are the exceptions: once they start consuming they may run to the end.

Note that a successful match can be the empty string, so alternatives must
be chained with explicit ``is None`` checks rather than ``or``.
"""

from __future__ import annotations


class Cursor:
    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        if not 0 <= pos <= len(text):
            raise ValueError(f"offset {pos} outside of [0, {len(text)}]")
        self.text = text
        self.pos = pos

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, remaining={self.text[self.pos:]!r})"

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def match_byte(self, b: str) -> str | None:
        """Consume ``b`` if it is the next character."""
        if self.at_end or self.text[self.pos] != b:
            return None
        self.pos += 1
        return b

    def peek_byte(self, b: str) -> str | None:
        """Like :meth:`match_byte` but never advances."""
        if self.at_end or self.text[self.pos] != b:
            return None
        return b

    def take_until(self, b: str) -> str | None:
        """Return the text up to ``b`` and advance past ``b``.

        Returns ``None`` without moving when ``b`` does not occur before the
        end of input, or when there is nothing left to scan.
        """
        if self.at_end:
            return None
        idx = self.text.find(b, self.pos)
        if idx == -1:
            return None
        start = self.pos
        self.pos = idx + 1
        return self.text[start:idx]

    def take_delimited(self, b: str) -> str | None:
        """Return the text enclosed by a pair of ``b`` characters.

        The cursor must sit on the opening ``b``. After the closing ``b`` the
        single separator character that follows it is skipped as well. An
        unterminated token is accepted: the remainder of the input is
        returned and the cursor moves to the end.
        """
        if self.at_end or self.text[self.pos] != b:
            return None
        start = self.pos + 1
        idx = self.text.find(b, start)
        if idx == -1:
            self.pos = len(self.text)
            return self.text[start:]
        self.pos = min(idx + 2, len(self.text))
        return self.text[start:idx]

    def split_by(self, separator: str, terminator: str) -> list[str]:
        """Collect ``separator``-delimited segments up to ``terminator``.

        Segments are taken like :meth:`take_until` until no separator is
        left before the terminator, then one final segment is taken up to
        the terminator. Separators after the terminator are never looked at.
        When the terminator is missing the final segment is dropped and the
        cursor stays after the last separator.
        """
        bound = self.text.find(terminator, self.pos)
        if bound == -1:
            bound = len(self.text)
        entries: list[str] = []
        while (idx := self.text.find(separator, self.pos, bound)) != -1:
            entries.append(self.text[self.pos:idx])
            self.pos = idx + 1
        last = self.take_until(terminator)
        if last is not None:
            entries.append(last)
        return entries

    def rest(self) -> str | None:
        """Return everything from the current offset and move to the end."""
        if self.at_end:
            return None
        start = self.pos
        self.pos = len(self.text)
        return self.text[start:]
