"""Position-tracking cursor over an immutable input text."""

from typing import Match, Optional, Pattern


class Cursor:
    """Anchored pattern matching over ``text[begin:end]`` from a moving offset.

    A successful :meth:`match` advances ``current`` past the whole match; a
    failed one leaves it untouched. Patterns must not rely on ``^``: they are
    anchored by being applied with :meth:`re.Pattern.match` at ``current``.
    """

    def __init__(self, text: str, begin: int = 0, end: Optional[int] = None) -> None:
        """Initialize cursor.

        Args:
            text: Complete input text
            begin: First offset the cursor may scan
            end: Offset one past the last character the cursor may scan
        """
        if end is None:
            end = len(text)
        if not (0 <= begin <= end <= len(text)):
            raise ValueError("Cursor bounds must satisfy 0 <= begin <= end <= len(text)")

        self.text = text
        self.begin = begin
        self.end = end
        self.current = begin

    def match(self, pattern: Pattern[str]) -> Optional[Match[str]]:
        """Match ``pattern`` at the current offset and advance past it.

        Args:
            pattern: Compiled pattern to apply

        Returns:
            The match object, or None if the pattern does not match here
        """
        m = pattern.match(self.text, self.current, self.end)
        if m is not None:
            self.current = m.end()
        return m

    @property
    def at_end(self) -> bool:
        """Whether the whole range has been consumed."""
        return self.current >= self.end

    @property
    def remaining(self) -> str:
        """Unscanned suffix of the range."""
        return self.text[self.current:self.end]

    def __repr__(self) -> str:
        return f"Cursor(begin={self.begin}, end={self.end}, current={self.current})"
