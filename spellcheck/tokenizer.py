"""
Word Tokenizer
==============
Splits text into maximal runs of ASCII letters.

Offsets always refer to the original text. A run longer than the
capture limit keeps its true end offset; only the captured word is cut.
"""

import re
from typing import Iterator, Optional, Union

from .models import Token

DEFAULT_MAX_LENGTH = 255

# ASCII letters only; digits, punctuation, whitespace and non-ASCII separate words
WORD_PATTERN = re.compile(r'[A-Za-z]+')

TextLike = Union[str, bytes, bytearray]


def _as_text(text: TextLike) -> str:
    # latin-1 maps each byte to one character, so offsets stay byte offsets
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode('latin-1')
    return text


def tokenize(text: Optional[TextLike], max_length: int = DEFAULT_MAX_LENGTH) -> Iterator[Token]:
    """
    Lazily yield a Token for every alphabetic run in ``text``.

    Offsets into a ``str`` are character indices, which equal byte offsets
    only for ASCII text. Pass the encoded ``bytes`` to get byte offsets.

    Args:
        text: Text to scan (str, or bytes for byte offsets)
        max_length: Longest word text captured per token

    Yields:
        Token(word, start, end) in ascending offset order
    """
    if not text:
        return
    if max_length < 1:
        raise ValueError(f"max_length must be positive: {max_length}")

    for match in WORD_PATTERN.finditer(_as_text(text)):
        start, end = match.span()
        yield Token(match.group()[:max_length], start, end)


class Tokenizer:
    """
    One-shot iterator over the tokens of a single text.

    Iterating a second time yields nothing until reset() is called.
    """

    def __init__(self, text: Optional[TextLike], max_length: int = DEFAULT_MAX_LENGTH):
        self.text = text
        self.max_length = max_length
        self._tokens = tokenize(text, max_length)

    def __iter__(self) -> 'Tokenizer':
        return self

    def __next__(self) -> Token:
        return next(self._tokens)

    def reset(self):
        """Restart scanning from the beginning of the text."""
        self._tokens = tokenize(self.text, self.max_length)
