"""Character cursor over zone text."""
from __future__ import annotations

WHITESPACE = frozenset(" \t\r\n\x0b\x0c")
HORIZONTAL_SPACE = frozenset(" \t")


class StringStream:
    """Mutable position into an immutable string.

    Reading past the end yields ``""``, which is neither whitespace nor
    printable, so scanning loops stop there on their own.

    Args:
        text: Source text.

    Attributes:
        text: The source text.
        position: Offset of the current character.
    """

    def __init__(self, text: str) -> None:
        """Initialize the stream at the first character.

        Args:
            text: Source text.
        """
        self.text = text
        self.position = 0

    def current(self) -> str:
        """Return the character under the cursor, ``""`` at the end."""
        if self.position < len(self.text):
            return self.text[self.position]
        return ""

    def next(self) -> None:
        """Advance one character.

        Raises:
            IndexError: If the cursor is already at the end.
        """
        if self.position >= len(self.text):
            raise IndexError("cannot move past the end of the stream")
        self.position += 1

    def previous(self) -> None:
        """Step back one character.

        Raises:
            IndexError: If the cursor is already at the start.
        """
        if self.position <= 0:
            raise IndexError("cannot move before the start of the stream")
        self.position -= 1

    def is_eof(self) -> bool:
        """Return True when the cursor is past the last character."""
        return self.position >= len(self.text)

    def is_char(self, char: str) -> bool:
        """Return True if the current character equals `char`."""
        return self.current() == char

    def is_whitespace(self) -> bool:
        """Return True on a space, tab, line break, vertical tab or form feed."""
        return self.current() in WHITESPACE

    def is_horizontal_space(self) -> bool:
        """Return True on a space or tab."""
        return self.current() in HORIZONTAL_SPACE

    def is_printable(self) -> bool:
        """Return True on a printable character, space included."""
        char = self.current()
        return char != "" and char.isprintable()

    def ignore_horizontal_space(self) -> None:
        """Skip spaces and tabs.

        Returns:
            None
        """
        while self.is_horizontal_space():
            self.position += 1

    def ignore_whitespace(self) -> None:
        """Skip any whitespace, line breaks included.

        Returns:
            None
        """
        while self.is_whitespace():
            self.position += 1

    def mark(self) -> int:
        """Return the current position so it can be restored with `reset`."""
        return self.position

    def reset(self, mark: int) -> None:
        """Move the cursor back to a position returned by `mark`."""
        if not 0 <= mark <= len(self.text):
            raise IndexError(f"mark {mark} outside of the stream")
        self.position = mark

    def read_until_line_end(self) -> str:
        """Consume and return everything up to the next newline.

        The newline itself is left under the cursor.
        """
        end = self.text.find("\n", self.position)
        if end < 0:
            end = len(self.text)
        chunk = self.text[self.position:end]
        self.position = end
        return chunk

    @property
    def line(self) -> int:
        """1-based line of the cursor."""
        return self.text.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        """1-based column of the cursor."""
        return self.position - (self.text.rfind("\n", 0, self.position) + 1) + 1

    def context(self, width: int = 20) -> str:
        """Excerpt of the current line around the cursor, for diagnostics."""
        start = self.text.rfind("\n", 0, self.position) + 1
        end = self.text.find("\n", self.position)
        if end < 0:
            end = len(self.text)
        return self.text[max(start, self.position - width):min(end, self.position + width)]
