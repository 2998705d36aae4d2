"""Shared fixtures for the spellcheck tests."""

from pathlib import Path
from typing import Callable, Iterable

import pytest

from spellcheck import SpellcheckEngine


@pytest.fixture
def write_words(tmp_path: Path) -> Callable[..., Path]:
    """Write a word list file and return its path."""
    def _write(name: str, lines: Iterable[str]) -> Path:
        path = tmp_path / name
        path.write_text(''.join(f"{line}\n" for line in lines), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def main_dict(write_words) -> Path:
    """Small main dictionary with a comment and a blank line."""
    return write_words('main.txt', [
        '# sample dictionary',
        'this', 'is', 'a', 'test',
        '',
        'hello', 'world', 'help', 'held', 'hell',
    ])


@pytest.fixture
def engine(main_dict) -> SpellcheckEngine:
    """Engine with the sample main dictionary loaded."""
    eng = SpellcheckEngine()
    assert eng.load_main_dictionary(main_dict)
    return eng
