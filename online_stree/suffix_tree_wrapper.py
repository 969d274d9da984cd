'''High-level interface to the online suffix tree.

This module provides the `SuffixTreeIndex` class, which wraps the pure Python
`OnlineSuffixTree` (from `python_backend.online_suffix`) behind the library
contract of the package:

- Creating an index, optionally over an initial text.
- Appending text incrementally, one character or one block at a time.
- Searching for patterns (`contains`, `find_all_occurrences`, ...).
- Batch queries over lists of patterns, returning numpy arrays.

The wrapper also handles:
- The empty-pattern policy (`empty_pattern="all"` or `"reject"`).
- An optional guarded mode that detects appends interleaved with searches.

Module-level functions `create_tree`, `append`, `contains` and
`find_all_occurrences` expose the same operations in functional form.
'''
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List

import numpy as np

from .errors import InvalidUsageError
from .python_backend.online_suffix import OnlineSuffixTree

logger = logging.getLogger(__name__)

EMPTY_PATTERN_POLICIES = ('all', 'reject')


class SuffixTreeIndex:
    '''A substring index over a text that can grow over time.

    Attributes:
        guarded (bool): If True, mixing appends and searches raises `InvalidUsageError`
                        instead of being undefined behavior.
        empty_pattern (str): What searches do with the empty pattern. `"all"` treats it
                             as occurring at every position ``0..len(text)``; `"reject"`
                             raises `InvalidUsageError`.
    '''
    def __init__(self, initial_text: str = "", guarded: bool = False, empty_pattern: str = "all"):
        """Initializes the SuffixTreeIndex.

        Args:
            initial_text: An optional string to initialize the index with.
            guarded: Enables detection of appends interleaved with searches.
            empty_pattern: Empty-pattern policy, `"all"` (default) or `"reject"`.

        Raises:
            ValueError: If `empty_pattern` is not a known policy.
        """
        if empty_pattern not in EMPTY_PATTERN_POLICIES:
            raise ValueError(
                f"Unknown empty_pattern policy: {empty_pattern!r}. Choose one of {EMPTY_PATTERN_POLICIES}."
            )
        self.guarded = guarded
        self.empty_pattern = empty_pattern
        self._tree = OnlineSuffixTree()

        # Guarded-mode bookkeeping: active readers and whether an append is running.
        self._state_lock = threading.Lock()
        self._readers = 0
        self._writing = False

        if initial_text:
            self.append(initial_text)

    # --- Guarded mode ---

    @contextmanager
    def _write_access(self):
        if not self.guarded:
            yield
            return
        with self._state_lock:
            if self._writing or self._readers:
                raise InvalidUsageError(
                    "Cannot append while a search or another append is in progress."
                )
            self._writing = True
        try:
            yield
        finally:
            with self._state_lock:
                self._writing = False

    @contextmanager
    def _read_access(self):
        if not self.guarded:
            yield
            return
        with self._state_lock:
            if self._writing:
                raise InvalidUsageError("Cannot search while an append is in progress.")
            self._readers += 1
        try:
            yield
        finally:
            with self._state_lock:
                self._readers -= 1

    def _check_pattern(self, pattern: str) -> None:
        if not isinstance(pattern, str):
            raise TypeError("Pattern must be a string.")
        if not pattern and self.empty_pattern == 'reject':
            raise InvalidUsageError("Empty pattern rejected by the index configuration.")

    # --- Construction ---

    def append(self, text: str) -> None:
        """Appends `text` to the indexed text.

        May be called any number of times to stream the text in. The result is the
        same as appending the concatenation of all blocks in one call.

        Raises:
            TypeError: If `text` is not a string.
            InvalidUsageError: In guarded mode, if a search is in progress.
        """
        with self._write_access():
            self._tree.append(text)

    def add_char(self, ch: str) -> None:
        """Appends a single character.

        Raises:
            ValueError: If `ch` is not a single character string.
            InvalidUsageError: In guarded mode, if a search is in progress.
        """
        with self._write_access():
            self._tree.add_char(ch)

    def add_terminator(self, terminator_char: str = "$") -> None:
        """Appends a terminator so that every suffix ends at its own leaf."""
        with self._write_access():
            self._tree.add_terminator(terminator_char)

    # --- Search ---

    def contains(self, pattern: str) -> bool:
        """Checks if `pattern` occurs in the text."""
        self._check_pattern(pattern)
        with self._read_access():
            return self._tree.find(pattern)

    find = contains

    def __contains__(self, pattern: str) -> bool:
        return self.contains(pattern)

    def find_all_occurrences(self, pattern: str) -> List[int]:
        """Returns the sorted start offsets of every occurrence of `pattern`.

        A pattern that does not occur gives an empty list.
        """
        self._check_pattern(pattern)
        with self._read_access():
            return self._tree.find_all_occurrences(pattern)

    def iter_occurrences(self, pattern: str) -> Iterator[int]:
        """Yields the start offsets of `pattern` in increasing order.

        In guarded mode the index counts as being searched until the generator is
        exhausted or closed, so appending in between raises `InvalidUsageError`.

        Raises:
            TypeError: If `pattern` is not a string.
            InvalidUsageError: For an empty pattern under ``empty_pattern="reject"``.
        """
        self._check_pattern(pattern)
        return self._iter_occurrences(pattern)

    def _iter_occurrences(self, pattern: str) -> Iterator[int]:
        with self._read_access():
            yield from self._tree.find_all_occurrences(pattern)

    def count_occurrences(self, pattern: str) -> int:
        """Returns the number of (possibly overlapping) occurrences of `pattern`."""
        return len(self.find_all_occurrences(pattern))

    def match_length(self, pattern: str) -> int:
        """Returns the length of the longest prefix of `pattern` occurring in the text."""
        if not isinstance(pattern, str):
            raise TypeError("Pattern must be a string.")
        with self._read_access():
            return self._tree.match_length(pattern)

    # --- Batch queries ---

    def contains_batch(self, patterns: List[str]) -> np.ndarray:
        '''Checks each pattern in a list.

        Args:
            patterns: The patterns to look up.

        Returns:
            A boolean numpy array, True where the pattern occurs in the text.
        '''
        if not patterns:
            return np.array([], dtype=bool)
        return np.array([self.contains(p) for p in patterns], dtype=bool)

    def count_batch(self, patterns: List[str]) -> np.ndarray:
        '''Counts the occurrences of each pattern in a list.

        Returns:
            An int64 numpy array of occurrence counts, one per pattern.
        '''
        if not patterns:
            return np.array([], dtype=np.int64)
        return np.array([self.count_occurrences(p) for p in patterns], dtype=np.int64)

    def occurrences_array(self, pattern: str) -> np.ndarray:
        """Returns the occurrences of `pattern` as a sorted int64 numpy array."""
        return np.asarray(self.find_all_occurrences(pattern), dtype=np.int64)

    # --- Introspection ---

    def get_internal_text(self) -> str:
        """Returns the full text currently indexed."""
        return self._tree.text

    @property
    def tree(self) -> OnlineSuffixTree:
        """OnlineSuffixTree: The underlying tree."""
        return self._tree

    @property
    def text_len(self) -> int:
        """int: The current length of the indexed text."""
        return len(self._tree)

    @property
    def global_end(self) -> int:
        """int: The index of the last character added. -1 if the index is empty."""
        return self._tree.global_end

    def __len__(self) -> int:
        return len(self._tree)

    def __repr__(self) -> str:
        return f"SuffixTreeIndex(text_len={self.text_len}, guarded={self.guarded})"


def create_tree(**options) -> SuffixTreeIndex:
    """Creates an empty index. Keyword options are passed to `SuffixTreeIndex`."""
    return SuffixTreeIndex(**options)


def append(tree: SuffixTreeIndex, text: str) -> None:
    """Appends `text` to the text indexed by `tree`."""
    tree.append(text)


def contains(tree: SuffixTreeIndex, pattern: str) -> bool:
    """Checks if `pattern` occurs in the text indexed by `tree`."""
    return tree.contains(pattern)


def find_all_occurrences(tree: SuffixTreeIndex, pattern: str) -> List[int]:
    """Returns the sorted start offsets of `pattern` in the text indexed by `tree`."""
    return tree.find_all_occurrences(pattern)


# Example usage:
if __name__ == '__main__':
    print("SuffixTreeIndex Example")
    index = create_tree(guarded=True)
    for block in ["b", "a", "nana"]:
        append(index, block)
    print(f"Text: '{index.get_internal_text()}' (len: {index.text_len}, global_end: {index.global_end})")

    patterns_to_find = ["ana", "na", "xyz", "banana", ""]
    for p in patterns_to_find:
        print(f"Pattern '{p}': contains={contains(index, p)}, occurrences={find_all_occurrences(index, p)}")
    print(f"Batch counts for {patterns_to_find}: {index.count_batch(patterns_to_find)}")

    try:
        print("\nAttempting to append while iterating occurrences...")
        occurrences = index.iter_occurrences("a")
        next(occurrences)
        index.append("x")
    except InvalidUsageError as e:
        print(f"Caught expected error: {e}")
