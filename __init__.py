from .online_stree import (
    SuffixTreeIndex, LockedSuffixTreeIndex,
    OnlineSuffixTree,
    create_tree, append, contains, find_all_occurrences
)

__all__ = [
    'SuffixTreeIndex', 'LockedSuffixTreeIndex',
    'OnlineSuffixTree',
    'create_tree', 'append', 'contains', 'find_all_occurrences'
]
