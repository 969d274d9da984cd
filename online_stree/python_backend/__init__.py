'''Pure Python backend: the Ukkonen suffix tree and the naive reference search.'''

from .online_suffix import Edge, Node, OnlineSuffixTree, OPEN_END
from .naive_search import naive_find_all, naive_contains, naive_match_length

__all__ = [
    'Edge', 'Node', 'OnlineSuffixTree', 'OPEN_END',
    'naive_find_all', 'naive_contains', 'naive_match_length',
]
