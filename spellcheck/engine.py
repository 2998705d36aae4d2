"""
Spellcheck Engine
=================
Owns the main dictionary, the user dictionary and the session ignore
list, plus the misspellings found by the last check.

Features:
- Case-insensitive lookup in fixed precedence (ignore, main, user)
- Misspellings recorded with offsets into the checked text
- Edit-distance suggestions drawn from the main dictionary
- Persistent user dictionary, session-only ignore list

The engine is not thread-safe; hosts that share one instance must
serialize every call.
"""

from typing import Any, Dict, List, Optional, Tuple

from config_logging import get_logger, DictionaryError
from .config import SpellcheckConfig, SUGGESTION_CAP
from .distance import levenshtein
from .models import MisspelledWord
from .tokenizer import TextLike, tokenize
from .wordset import PathLike, WordSet

__version__ = "1.0.0"

logger = get_logger('spellcheck.engine')


class SpellcheckEngine:
    """
    Dictionary-backed spell checker for a single session.

    Usage:
        engine = SpellcheckEngine()
        engine.load_main_dictionary('words.txt')
        for ms in engine.check("Ths is a tst"):
            print(ms.word, ms.start, ms.end, engine.suggestions(ms.word))
    """

    def __init__(self, config: Optional[SpellcheckConfig] = None):
        self.config = config or SpellcheckConfig()
        encoding = self.config.encoding

        self.main_dictionary = WordSet('main', encoding=encoding)
        self.user_dictionary = WordSet('user', encoding=encoding)
        self.ignored_words = WordSet('ignore', encoding=encoding)
        self._misspelled: List[MisspelledWord] = []

        self.enabled = True
        self.suggestions_enabled = True

    @classmethod
    def from_config(cls, config: SpellcheckConfig) -> 'SpellcheckEngine':
        """
        Create an engine and load the dictionaries named in ``config``.

        Raises:
            DictionaryError: if the main dictionary is missing or unusable
        """
        engine = cls(config)
        if not engine.load_main_dictionary(config.main_dictionary):
            raise DictionaryError("Main dictionary could not be loaded",
                                  path=config.main_dictionary)
        if config.user_dictionary:
            engine.load_user_dictionary(config.user_dictionary)
        return engine

    def __enter__(self) -> 'SpellcheckEngine':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Release all word sets and the misspelled list."""
        self.main_dictionary.clear()
        self.user_dictionary.clear()
        self.ignored_words.clear()
        self._misspelled.clear()

    # ------------------------------------------------------------------
    # Dictionaries
    # ------------------------------------------------------------------

    def load_main_dictionary(self, path: Optional[PathLike]) -> bool:
        """Load the required main dictionary; '#' lines are comments."""
        with logger.log_operation('load_main_dictionary', path=str(path)):
            loaded = self.main_dictionary.load(
                path,
                skip_comments=True,
                required=True,
                comment_prefix=self.config.comment_prefix,
            )
        return loaded

    def load_user_dictionary(self, path: Optional[PathLike]) -> bool:
        """Load the optional user dictionary. A missing file is not an error."""
        with logger.log_operation('load_user_dictionary', path=str(path)):
            loaded = self.user_dictionary.load(path, skip_comments=False, required=False)
        return loaded

    def save_user_dictionary(self, path: PathLike):
        """Write the user dictionary. Failures are logged, not raised."""
        self.user_dictionary.save(path)

    def learn(self, word: str) -> bool:
        """Add a word to the user dictionary. Returns True if it was new."""
        if not word:
            return False
        return self.user_dictionary.insert(word)

    def ignore(self, word: str) -> bool:
        """Treat a word as correct for the rest of the session."""
        if not word:
            return False
        return self.ignored_words.insert(word)

    def reset_ignore_list(self):
        """Forget every ignored word."""
        self.ignored_words.clear()

    # ------------------------------------------------------------------
    # Checking
    # ------------------------------------------------------------------

    def is_word_correct(self, word: Optional[str]) -> bool:
        """Ignore list, then main dictionary, then user dictionary."""
        if not word:
            return True
        if self.ignored_words.contains(word):
            return True
        if self.main_dictionary.contains(word):
            return True
        if self.user_dictionary.contains(word):
            return True
        return False

    def check(self, text: Optional[TextLike]) -> Tuple[MisspelledWord, ...]:
        """
        Check ``text`` and replace the misspelled list with the result.

        Returns:
            The new misspelled list, in scan order
        """
        self._misspelled = []

        if not self.enabled or not text or not text.strip():
            return self.misspelled

        for token in tokenize(text, self.config.max_word_length):
            if not self.is_word_correct(token.word):
                self._misspelled.append(MisspelledWord.from_token(token))

        return self.misspelled

    @property
    def misspelled(self) -> Tuple[MisspelledWord, ...]:
        """Misspellings from the last check; valid until the next one."""
        return tuple(self._misspelled)

    def misspelled_at(self, pos: int) -> Optional[MisspelledWord]:
        """First misspelling whose [start, end) span contains ``pos``."""
        for entry in self._misspelled:
            if pos in entry:
                return entry
        return None

    def word_at_offset(self, pos: int) -> Optional[str]:
        """Text of the misspelling at ``pos``, if any."""
        entry = self.misspelled_at(pos)
        return entry.word if entry else None

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def suggestions(self, word: str, limit: int = SUGGESTION_CAP) -> List[str]:
        """
        Rank main-dictionary words close to ``word``.

        Entries within the configured edit distance (exact matches
        excluded) are collected in dictionary order until the candidate
        limit is reached, then ordered by distance. Ties keep dictionary
        order.

        Returns:
            At most min(limit, 5) words; empty if nothing is close
        """
        if not word or limit <= 0:
            return []

        max_distance = self.config.max_edit_distance
        candidate_limit = self.config.candidate_limit

        candidates: List[Tuple[int, str]] = []
        for entry in self.main_dictionary.words:
            if len(candidates) >= candidate_limit:
                break
            distance = levenshtein(word, entry)
            if 0 < distance <= max_distance:
                candidates.append((distance, entry))

        candidates.sort(key=lambda c: c[0])
        count = min(limit, self.config.max_suggestions, SUGGESTION_CAP)
        result = [entry for _, entry in candidates[:count]]

        logger.debug("Suggestions computed", word=word, candidates=len(candidates),
                     returned=len(result))
        return result

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_status(self) -> Dict[str, Any]:
        """Counts and flags for diagnostics."""
        return {
            'version': __version__,
            'enabled': self.enabled,
            'suggestions_enabled': self.suggestions_enabled,
            'main_dictionary_count': len(self.main_dictionary),
            'user_dictionary_count': len(self.user_dictionary),
            'ignored_count': len(self.ignored_words),
            'misspelled_count': len(self._misspelled),
        }
