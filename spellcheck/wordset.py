"""
Sorted Word Sets
================
Case-insensitive, always-sorted word collections used for the main
dictionary, the user dictionary and the session ignore list.

Dictionary files hold one word per line. Trailing whitespace is trimmed
and blank lines are skipped; comment lines are skipped only when the
caller asks for it (main dictionary).
"""

import os
import tempfile
from bisect import bisect_left
from contextlib import suppress
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from config_logging import get_logger

logger = get_logger('spellcheck.wordset')

PathLike = Union[str, Path]

# ASCII-only case folding; bytes above 0x7f compare as-is
_ASCII_FOLD = str.maketrans(
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ',
    'abcdefghijklmnopqrstuvwxyz',
)


def fold(word: str) -> str:
    """Lowercase ASCII letters only."""
    return word.translate(_ASCII_FOLD)


class WordSet:
    """
    A growable word list kept in case-insensitive sorted order.

    Membership is a binary search over the folded keys. Storage accepts
    duplicates but insert() refuses a word that is already present in
    any case.
    """

    def __init__(self, name: str = "words", words=None, encoding: str = "utf-8"):
        self.name = name
        self.encoding = encoding
        self._words: List[str] = []
        self._keys: List[str] = []
        if words:
            self._words.extend(words)
            self._sort()

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._words))

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __repr__(self) -> str:
        return f"WordSet(name={self.name!r}, count={len(self)})"

    @property
    def words(self) -> Tuple[str, ...]:
        """Sorted snapshot of the entries."""
        return tuple(self._words)

    def _sort(self):
        self._words.sort(key=fold)
        self._keys = [fold(w) for w in self._words]

    def contains(self, word: str) -> bool:
        """Case-insensitive binary search."""
        if not self._keys:
            return False
        key = fold(word)
        i = bisect_left(self._keys, key)
        return i < len(self._keys) and self._keys[i] == key

    def insert(self, word: str) -> bool:
        """
        Add a word unless it is already present.

        Returns:
            True if the word was added, False if it was present or
            the set could not grow
        """
        if self.contains(word):
            return False

        key = fold(word)
        i = bisect_left(self._keys, key)
        try:
            self._words.insert(i, word)
        except MemoryError:
            logger.warning("Out of memory growing word set", wordset=self.name)
            return False
        try:
            self._keys.insert(i, key)
        except MemoryError:
            del self._words[i]
            logger.warning("Out of memory growing word set", wordset=self.name)
            return False
        return True

    def clear(self):
        """Remove every entry."""
        self._words.clear()
        self._keys.clear()

    def load(self, path: Optional[PathLike], skip_comments: bool = False,
             required: bool = True, comment_prefix: str = "#") -> bool:
        """
        Append the entries of a word-list file, then re-sort.

        Args:
            path: Word list, one word per line
            skip_comments: Skip lines starting with ``comment_prefix``
            required: A missing file is a failure; otherwise it loads nothing
            comment_prefix: Comment marker used when skip_comments is set

        Returns:
            True on success. A required load also fails if the set is
            still empty afterward. Entries appended before a failure stay.
        """
        if path is None:
            return False

        try:
            f = open(path, 'r', encoding=self.encoding, errors='surrogateescape',
                     newline='\n')
        except OSError as e:
            if required:
                logger.warning(f"Could not open word list: {e}", wordset=self.name,
                               path=str(path))
                return False
            logger.info("Optional word list not found, starting empty",
                        wordset=self.name, path=str(path))
            return True

        added = 0
        with f:
            try:
                for line in f:
                    word = line.rstrip()
                    if not word:
                        continue
                    if skip_comments and word.startswith(comment_prefix):
                        continue
                    self._words.append(word)
                    added += 1
            except MemoryError:
                self._sort()
                logger.warning("Out of memory loading word list", wordset=self.name,
                               path=str(path), added=added)
                return False
            except OSError as e:
                self._sort()
                logger.warning(f"Could not read word list: {e}", wordset=self.name,
                               path=str(path), added=added)
                return False

        self._sort()
        logger.info("Loaded word list", wordset=self.name, path=str(path),
                    added=added, total=len(self))

        if required:
            return len(self) > 0
        return True

    def save(self, path: PathLike):
        """
        Write the entries one per line in sorted order.

        The list is written to a temporary file beside ``path`` and moved
        into place, so a failed save leaves the previous file intact.
        A write failure is logged and otherwise ignored.
        """
        path = Path(path)
        self._sort()
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile('w', encoding=self.encoding, errors='surrogateescape',
                                             newline='\n', dir=path.parent,
                                             prefix=f".{path.name}.", suffix='.tmp',
                                             delete=False) as f:
                tmp_name = f.name
                for word in self._words:
                    f.write(f"{word}\n")
            os.replace(tmp_name, path)
        except (OSError, UnicodeError) as e:
            if tmp_name:
                with suppress(OSError):
                    os.unlink(tmp_name)
            logger.warning(f"Could not save word list: {e}", wordset=self.name,
                           path=str(path))
            return
        logger.debug("Saved word list", wordset=self.name, path=str(path),
                     total=len(self))
