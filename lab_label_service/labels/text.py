"""Fixed-width text splitting for multi-line label fields."""

from typing import List


def chunk(text: str, max_width: int) -> List[str]:
    """
    Split text into consecutive pieces of at most max_width characters.

    An empty string still yields one (empty) line.

    >>> chunk("abcdefg", 3)
    ['abc', 'def', 'g']
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")
    if not text:
        return ['']
    return [text[i:i + max_width] for i in range(0, len(text), max_width)]
