'''Tests for `LockedSuffixTreeIndex`, shared between appending and searching threads.'''
import os
import sys
import threading

_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from online_stree import LockedSuffixTreeIndex
from online_stree.python_backend.naive_search import naive_find_all


def test_behaves_like_index():
    index = LockedSuffixTreeIndex("banana")
    assert index.contains("nan")
    assert index.find_all_occurrences("ana") == [1, 3]
    assert list(index.iter_occurrences("na")) == [2, 4]
    assert index.match_length("bandana") == 3
    assert index.count_batch(["a", "z"]).tolist() == [3, 0]
    assert index.contains_batch(["a", "z"]).tolist() == [True, False]


def test_iterator_survives_later_appends():
    index = LockedSuffixTreeIndex("abab")
    occurrences = index.iter_occurrences("ab")
    index.append("ab")
    assert list(occurrences) == [0, 2]
    assert index.find_all_occurrences("ab") == [0, 2, 4]


def test_lock_is_reentrant_for_compound_operations():
    index = LockedSuffixTreeIndex()
    with index.lock:
        index.append("abc")
        index.add_terminator()
        assert index.get_internal_text() == "abc$"


def test_concurrent_appends_and_searches():
    index = LockedSuffixTreeIndex()
    blocks = [f"<{i:03d}>" for i in range(50)]
    errors = []

    def writer(chunk):
        for block in chunk:
            index.append(block)

    def reader():
        try:
            for _ in range(200):
                text = index.get_internal_text()
                # Text only grows, so whatever was indexed before is still found.
                if text:
                    assert index.contains(text[-5:])
                index.find_all_occurrences("<0")
        except AssertionError as e:
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(blocks[i::2],)) for i in range(2)]
    threads += [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    text = index.get_internal_text()
    assert len(text) == 5 * len(blocks)
    index.tree.check_invariants()
    for block in blocks:
        assert index.find_all_occurrences(block) == naive_find_all(text, block)
    assert index.find_all_occurrences("<0") == naive_find_all(text, "<0")
