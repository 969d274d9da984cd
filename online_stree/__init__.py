'''Initialize the online_stree package, exposing the suffix tree index and its helpers.'''

from .errors import SuffixTreeError, OutOfRangeError, InvalidUsageError, InvariantError
from .python_backend.online_suffix import Edge, Node, OnlineSuffixTree
from .suffix_tree_wrapper import (
    SuffixTreeIndex,
    create_tree, append, contains, find_all_occurrences,
)
from .synchronized import LockedSuffixTreeIndex

__all__ = [
    'SuffixTreeError', 'OutOfRangeError', 'InvalidUsageError', 'InvariantError',
    'Edge', 'Node', 'OnlineSuffixTree',
    'SuffixTreeIndex', 'LockedSuffixTreeIndex',
    'create_tree', 'append', 'contains', 'find_all_occurrences',
]
