'''Exception types raised by the online suffix tree index.

A pattern that does not occur in the text is never an error: searches return
an empty list or `False`. The exceptions below signal either a defect inside
the tree (`OutOfRangeError`, `InvariantError`) or a broken caller contract
(`InvalidUsageError`).
'''


class SuffixTreeError(Exception):
    """Base class for all suffix tree errors."""


class OutOfRangeError(SuffixTreeError, IndexError):
    """An edge offset was computed outside the edge label or the text buffer.

    For valid input this is never raised; seeing it means the tree is corrupt.
    """


class InvalidUsageError(SuffixTreeError, RuntimeError):
    """The caller broke the usage contract of the index.

    Raised in guarded mode when the text is appended to while a search is
    running (or the other way round), and for an empty pattern when the index
    was configured with ``empty_pattern="reject"``.
    """


class InvariantError(SuffixTreeError, AssertionError):
    """A structural invariant of the suffix tree does not hold."""
