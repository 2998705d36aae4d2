"""
Spellcheck Models
=================
Data classes shared by the tokenizer, the engine and its hosts.
"""

from dataclasses import dataclass
from typing import Dict, Any, NamedTuple


class Token(NamedTuple):
    """
    One alphabetic run found by the tokenizer.

    Attributes:
        word: Captured text (truncated to the tokenizer's max length)
        start: Offset of the first character
        end: Offset one past the last character of the full run
    """
    word: str
    start: int
    end: int


@dataclass(frozen=True)
class MisspelledWord:
    """
    A word that failed the last check.

    Attributes:
        word: Word text as captured by the tokenizer
        start: Offset of the first character in the checked text
        end: Offset one past the end of the run (half-open)
    """
    word: str
    start: int
    end: int

    def __contains__(self, pos: int) -> bool:
        return self.start <= pos < self.end

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'word': self.word,
            'start': self.start,
            'end': self.end,
        }

    @classmethod
    def from_token(cls, token: Token) -> 'MisspelledWord':
        return cls(word=token.word, start=token.start, end=token.end)
