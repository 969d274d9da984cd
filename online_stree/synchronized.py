'''Thread-safe variant of `SuffixTreeIndex`.

The suffix tree itself must never be appended to while it is being searched.
`LockedSuffixTreeIndex` serializes every operation behind a single re-entrant
lock so that one instance can be shared between threads that both append and
search.
'''
import threading
from typing import Iterator, List

import numpy as np

from .suffix_tree_wrapper import SuffixTreeIndex


class LockedSuffixTreeIndex(SuffixTreeIndex):
    """A `SuffixTreeIndex` whose operations all run under one `threading.RLock`.

    `iter_occurrences` collects its results while holding the lock, so the
    returned iterator stays valid if other threads append afterwards.
    """
    def __init__(self, initial_text: str = "", empty_pattern: str = "all"):
        self._lock = threading.RLock()
        super().__init__(initial_text, guarded=False, empty_pattern=empty_pattern)

    @property
    def lock(self) -> threading.RLock:
        """threading.RLock: The lock guarding the index, for compound operations."""
        return self._lock

    def append(self, text: str) -> None:
        with self._lock:
            super().append(text)

    def add_char(self, ch: str) -> None:
        with self._lock:
            super().add_char(ch)

    def add_terminator(self, terminator_char: str = "$") -> None:
        with self._lock:
            super().add_terminator(terminator_char)

    def contains(self, pattern: str) -> bool:
        with self._lock:
            return super().contains(pattern)

    find = contains

    def find_all_occurrences(self, pattern: str) -> List[int]:
        with self._lock:
            return super().find_all_occurrences(pattern)

    def iter_occurrences(self, pattern: str) -> Iterator[int]:
        return iter(self.find_all_occurrences(pattern))

    def match_length(self, pattern: str) -> int:
        with self._lock:
            return super().match_length(pattern)

    def contains_batch(self, patterns: List[str]) -> np.ndarray:
        with self._lock:
            return super().contains_batch(patterns)

    def count_batch(self, patterns: List[str]) -> np.ndarray:
        with self._lock:
            return super().count_batch(patterns)

    def get_internal_text(self) -> str:
        with self._lock:
            return super().get_internal_text()
