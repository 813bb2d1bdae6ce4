"""
Word list loading.

The dictionary is read from the first source that yields usable words:
the file named by WORDLE_WORDS_JSON, ~/.wordle/words_en_5.json, the bundled
data/words_en_5.json, and finally a short built-in list.
"""
import json
import os
import threading
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple

import config

# Used when no other source could be read
FALLBACK_WORDS = [
    "about", "other", "which", "their", "there", "first", "would", "these", "click", "price",
    "cigar", "rebut", "sissy", "humph", "awake", "blush", "focal", "evade", "naval", "serve",
    "heath", "dwarf", "karma", "stink", "grade", "quiet", "bench", "abate", "feign", "major",
]

WordSource = Callable[[], Optional[List[str]]]


def normalize_words(raw: Iterable[Optional[str]]) -> List[str]:
    """
    Clean up a raw word list.

    Drops nulls, trims and lowercases every entry, keeps only 5-letter
    alphabetic words, removes duplicates and sorts the result.
    """
    cleaned = set()
    for entry in raw:
        if entry is None:
            continue
        word = entry.strip().lower()
        if len(word) != config.WORD_LENGTH or not word.isalpha():
            continue
        cleaned.add(word)
    return sorted(cleaned)


def parse_word_json(data: bytes) -> List[str]:
    """
    Parse a JSON array of words.

    Numbers and booleans in the array are skipped; a document that is not
    an array, or that nests arrays or objects inside it, raises ValueError.
    """
    items = json.loads(data.decode("utf-8"))
    if not isinstance(items, list):
        raise ValueError("word list must be a JSON array")
    strings = []
    for item in items:
        if isinstance(item, (list, dict)):
            raise ValueError(f"word list entries must be strings, got {type(item).__name__}")
        if isinstance(item, str):
            strings.append(item)
    return normalize_words(strings)


def load_from_file(path: str) -> Optional[List[str]]:
    """Return the normalized words in `path`, or None if it can't be used."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "rb") as f:
            words = parse_word_json(f.read())
    except (OSError, ValueError, RecursionError) as e:
        print(f"Skipping word source {path}: {e}")
        return None
    if not words:
        print(f"Skipping word source {path}: no usable words")
        return None
    print(f"Loaded {len(words)} words from {path}")
    return words


def env_source() -> Optional[List[str]]:
    path = os.environ.get(config.WORDS_JSON_ENV, "").strip()
    if not path:
        return None
    return load_from_file(path)


def user_source() -> Optional[List[str]]:
    return load_from_file(os.path.join(os.path.expanduser("~"), config.USER_WORDS_FILE))


def bundled_source() -> Optional[List[str]]:
    return load_from_file(config.BUNDLED_WORDS_PATH)


def fallback_source() -> List[str]:
    words = normalize_words(FALLBACK_WORDS)
    assert words, "built-in fallback word list is empty"
    return words


DEFAULT_SOURCES = [env_source, user_source, bundled_source]


class WordRepository:
    """
    Lazily loads the word list once and hands out the same cached values.

    `sources` are tried in order; the built-in fallback always comes last.
    """

    def __init__(self, sources: Optional[List[WordSource]] = None):
        self._sources = list(DEFAULT_SOURCES if sources is None else sources)
        self._lock = threading.Lock()
        self._words: Optional[Tuple[str, ...]] = None
        self._word_set: Optional[FrozenSet[str]] = None

    def load_words(self) -> Tuple[str, ...]:
        if self._words is not None:
            return self._words
        with self._lock:
            if self._words is None:
                words = self._resolve()
                # Set is published first; readers check _words
                self._word_set = frozenset(words)
                self._words = tuple(words)
        return self._words

    def _resolve(self) -> List[str]:
        for source in self._sources:
            words = normalize_words(source() or [])
            if words:
                return words
        return fallback_source()

    def words(self) -> Tuple[str, ...]:
        return self.load_words()

    def word_set(self) -> FrozenSet[str]:
        self.load_words()
        return self._word_set


_default_repository = WordRepository()


def default_repository() -> WordRepository:
    return _default_repository


def words() -> Tuple[str, ...]:
    """Process-wide word list."""
    return _default_repository.words()


def word_set() -> FrozenSet[str]:
    """Process-wide word set, for membership checks."""
    return _default_repository.word_set()
