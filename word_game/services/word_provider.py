"""
Word Provider

Supplies target words from a common-word corpus and checks guesses against a
larger all-words dictionary.
"""

import json
import logging
import os
import random
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)


class WordProvider(ABC):
    """Source of target words and dictionary membership."""

    @abstractmethod
    def random_word(self, length: int) -> Optional[str]:
        """Random uppercase common word of *length*, or None if there is none."""

    @abstractmethod
    def is_valid_word(self, word: str) -> bool:
        """Case-insensitive membership test against the all-words dictionary."""

    @abstractmethod
    def analyze_word_frequency(self) -> Dict[str, Dict]:
        """Counts of common words by length and by first letter."""

    @abstractmethod
    def word_statistics(self) -> Dict: ...


class StaticWordProvider(WordProvider):
    """
    Word provider over in-memory word lists.

    Args:
        common_words: Words eligible as targets
        all_words: Words accepted as guesses; the common words are always
            accepted as well
        rng: Random source for target selection
    """

    def __init__(self, common_words: Optional[Iterable[str]], all_words: Optional[Iterable[str]] = None,
                 rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._common_words: Optional[List[str]] = None
        self._all_words: Optional[Set[str]] = None
        if common_words is not None:
            self._set_words(common_words, all_words or [])

    def _set_words(self, common_words: Iterable[str], all_words: Iterable[str]) -> None:
        seen: Set[str] = set()
        self._common_words = []
        for word in common_words:
            normalized = word.strip().lower()
            if normalized.isalpha() and normalized not in seen:
                seen.add(normalized)
                self._common_words.append(normalized)
        self._all_words = {w.strip().lower() for w in all_words if w.strip()} | seen

    def _ensure_loaded(self) -> None:
        """Hook for subclasses that load their lists lazily."""

    @property
    def common_words(self) -> List[str]:
        self._ensure_loaded()
        return list(self._common_words)

    @property
    def all_words(self) -> Set[str]:
        self._ensure_loaded()
        return set(self._all_words)

    def words_of_length(self, length: int) -> List[str]:
        self._ensure_loaded()
        return [w for w in self._common_words if len(w) == length]

    def random_word(self, length: int) -> Optional[str]:
        candidates = self.words_of_length(length)
        if not candidates:
            logger.warning("No common words of length %d", length)
            return None
        return self._rng.choice(candidates).upper()

    def is_valid_word(self, word: str) -> bool:
        self._ensure_loaded()
        return word.strip().lower() in self._all_words

    def available_word_lengths(self) -> List[int]:
        self._ensure_loaded()
        return sorted({len(w) for w in self._common_words})

    def analyze_word_frequency(self) -> Dict[str, Dict]:
        """Count common words by length and by first letter."""
        self._ensure_loaded()
        by_length: Dict[int, int] = {}
        by_first_letter: Dict[str, int] = {}
        for word in self._common_words:
            by_length[len(word)] = by_length.get(len(word), 0) + 1
            by_first_letter[word[0]] = by_first_letter.get(word[0], 0) + 1
        return {"by_length": by_length, "by_first_letter": by_first_letter}

    def word_statistics(self) -> Dict:
        self._ensure_loaded()
        lengths = self.available_word_lengths()
        return {
            "total_common_words": len(self._common_words),
            "total_all_words": len(self._all_words),
            "available_lengths": lengths,
            "length_range": [lengths[0], lengths[-1]] if lengths else None,
        }


def _load_json_words(path: str) -> List[str]:
    """
    Load a JSON array of words.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not hold a JSON array of strings
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Word list file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            word_list = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(word_list, list):
        raise ValueError(f"{path} must contain an array of words")
    if not all(isinstance(word, str) for word in word_list):
        raise ValueError(f"{path} contains non-string entries")
    return word_list


class JsonWordProvider(StaticWordProvider):
    """
    Word provider backed by JSON word-list files.

    The all-words dictionary may be a single JSON file or a directory of JSON
    files, which are merged. Lists are read on first use and cached.
    """

    def __init__(self, common_words_file: str, all_words_path: str,
                 rng: Optional[random.Random] = None):
        super().__init__(None, rng=rng)
        self.common_words_file = common_words_file
        self.all_words_path = all_words_path

    def _ensure_loaded(self) -> None:
        if self._common_words is not None:
            return

        common = _load_json_words(self.common_words_file)
        if not common:
            raise ValueError("Common word list cannot be empty")

        all_words: List[str] = []
        if os.path.isdir(self.all_words_path):
            for name in sorted(os.listdir(self.all_words_path)):
                if not name.endswith('.json'):
                    continue
                try:
                    all_words.extend(_load_json_words(os.path.join(self.all_words_path, name)))
                except (OSError, ValueError) as e:
                    # A broken shard only shrinks the dictionary
                    logger.warning("Failed to load %s: %s", name, e)
            if not all_words:
                raise ValueError(f"No word files were loaded from {self.all_words_path}")
        else:
            all_words = _load_json_words(self.all_words_path)

        self._set_words(common, all_words)
        logger.info(
            "Loaded %d common words and %d dictionary words",
            len(self._common_words), len(self._all_words)
        )

    def clear_cache(self) -> None:
        self._common_words = None
        self._all_words = None
