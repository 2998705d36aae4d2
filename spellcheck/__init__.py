"""
Spellcheck Engine Package
=========================
Dictionary-backed spell checking with positional results.

Components:
- WordSet: sorted, case-insensitive word lists
- levenshtein: edit distance for suggestion ranking
- tokenize / Tokenizer: alphabetic runs with offsets
- SpellcheckEngine: checking, suggestions, user dictionary, ignore list

The Flask host lives in spellcheck.routes and is imported on demand.
"""

from .distance import levenshtein
from .engine import SpellcheckEngine
from .models import MisspelledWord, Token
from .tokenizer import Tokenizer, tokenize
from .wordset import WordSet

__version__ = "1.0.0"
__all__ = [
    'SpellcheckEngine',
    'WordSet',
    'MisspelledWord',
    'Token',
    'Tokenizer',
    'tokenize',
    'levenshtein',
]
