'''Pure Python implementation of an Online Suffix Tree using Ukkonen's Algorithm.

This module provides the `OnlineSuffixTree` class, along with helper classes `Node`
and `Edge`, to construct a suffix tree for a text that arrives character by
character (or block by block). After `k` characters have been added the tree is
a valid compact suffix tree for the first `k` characters; suffixes that are
prefixes of other suffixes may still be implicit (ending mid-edge) until a
unique terminator is appended.

Features:
- Online construction: Characters can be added one at a time, in O(1) amortized
  work per character for a fixed alphabet.
- Pattern searching: `find`/`contains`, `find_all_occurrences`, `match_length`.
- Visualization: A text-based display and hooks for Graphviz
  (if the `graphviz` library is installed).

Classes:
    Edge: Represents an edge in the suffix tree.
    Node: Represents a node (internal or leaf) in the suffix tree.
    OnlineSuffixTree: The main class implementing Ukkonen's algorithm.
'''
import logging

from ..errors import InvariantError, OutOfRangeError

logger = logging.getLogger(__name__)

# End marker shared by every leaf edge. A leaf label always runs to the current
# end of the text, so leaves grow without being touched when text is appended.
OPEN_END = float('inf')

# Most subtrees whose leaf offsets are kept between searches on an unchanged tree.
REFERENCES_CACHE_SIZE = 64


class Edge:
    """Represents an edge in the suffix tree.

    An edge connects two nodes and is labeled by a substring of the main text.
    The label is the half-open range ``[start, end)`` of the text buffer; it is
    never copied. Leaf edges use `OPEN_END` for `end`, which stands for the
    current length of the text.

    Attributes:
        start (int): The starting index (inclusive) of the edge label in the text.
        end (float | int): The ending index (exclusive) of the edge label in the text.
                           `OPEN_END` for leaf edges.
        dest (Node): The destination node of this edge. Not owned by the edge.
    """
    __slots__ = ('start', 'end', 'dest')

    def __init__(self, start: int, end: float, dest: 'Node'):
        self.start = start
        self.end = end
        self.dest = dest

    @property
    def is_open(self) -> bool:
        """bool: True for leaf edges whose label tracks the end of the text."""
        return self.end == OPEN_END

    def length(self, text_len: int) -> int:
        """Calculates the length of the edge label.

        Args:
            text_len: The current length of the text in the suffix tree.

        Returns:
            The number of characters on the edge label.
        """
        return min(self.end, text_len) - self.start

    def char_at(self, text, offset: int, text_len: int) -> str:
        """Returns the character at `offset` along the edge label.

        Args:
            text: The character buffer the label indexes into.
            offset: Position along the label, counted from `start`.
            text_len: The current length of the text.

        Raises:
            OutOfRangeError: If `offset` falls outside the label.
        """
        if offset < 0 or offset >= self.length(text_len):
            raise OutOfRangeError(
                f"Offset {offset} outside edge [{self.start}, {min(self.end, text_len)})."
            )
        return text[self.start + offset]

    def label(self, text, text_len: int) -> str:
        """Returns the label substring (for display and debugging)."""
        return ''.join(text[self.start:min(self.end, text_len)])

    def __repr__(self) -> str:
        end = 'end' if self.is_open else self.end
        return f"Edge(start={self.start}, end={end}, dest_id={id(self.dest)})"


class Node:
    """Represents a node in the suffix tree.

    Nodes store outgoing edges in a dictionary, where keys are the first characters
    of the edge labels. Each node can also have a suffix link to another node,
    which is a crucial part of Ukkonen's algorithm.

    Attributes:
        children (dict[str, Edge]): Maps the first character of an outgoing edge
                                    label to the `Edge` object itself.
        suffix_link (Node | None): The suffix link for this node, or None. A plain
                                   back-reference used only during construction.
        suffix_start (int | None): For leaves, the text offset of the suffix that
                                   ends here. None for the root and internal nodes.
    """
    __slots__ = ('children', 'suffix_link', 'suffix_start')

    def __init__(self, suffix_start: int | None = None):
        self.children: dict[str, Edge] = {}
        self.suffix_link: 'Node | None' = None
        self.suffix_start = suffix_start

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_edge(self, first_char: str, edge: Edge) -> None:
        """Inserts or replaces the outgoing edge keyed by `first_char`."""
        self.children[first_char] = edge

    def get_edge(self, first_char: str) -> Edge | None:
        """Returns the outgoing edge keyed by `first_char`, or None if there is none."""
        return self.children.get(first_char)

    def __repr__(self) -> str:
        link_id = id(self.suffix_link) if self.suffix_link else None
        return f"Node(id={id(self)}, children={list(self.children.keys())}, suffix_link_id={link_id})"


class OnlineSuffixTree:
    """An implicit suffix tree built online using Ukkonen's algorithm.

    This class allows for character-by-character construction of a suffix tree.
    It maintains the necessary state for Ukkonen's algorithm, including the
    active point (node, edge, length) and the number of remaining suffixes to add.

    Concurrent appends and searches on one instance are not supported; see
    `online_stree.suffix_tree_wrapper.SuffixTreeIndex` for a guarded mode and
    `online_stree.synchronized.LockedSuffixTreeIndex` for a lock-serialized one.

    Attributes:
        root (Node): The root node of the suffix tree.
        active_node (Node): (Ukkonen) The node from which the next extension starts.
        active_edge (int): (Ukkonen) Index in the text of the first character of the
                           active edge label. Only meaningful while `active_length > 0`.
        active_length (int): (Ukkonen) Number of characters matched along the active
                             edge. 0 means the active point is `active_node` itself.
        remainder (int): (Ukkonen) Number of suffixes not yet explicitly inserted.
                         They are the `remainder` shortest suffixes of the text.
        global_end (int): Index of the last character in the text (-1 when empty).
        version (int): Incremented on every appended character.
    """
    def __init__(self, initial_text: str = ""):
        """Initializes the OnlineSuffixTree.

        Args:
            initial_text (str, optional): Text to build the tree for initially.
                                          Defaults to "".
        """
        self._chars: list[str] = []
        self.root: Node = Node()
        self.active_node: Node = self.root
        self.active_edge: int = 0
        self.active_length: int = 0
        self.remainder: int = 0
        self.global_end: int = -1
        self.version: int = 0
        # id(node) -> offsets of the leaves below it. Emptied whenever the text grows.
        self._references_cache: dict[int, frozenset[int]] = {}

        if initial_text:
            self.append(initial_text)

    @property
    def text(self) -> str:
        """str: The accumulated text the tree is built for."""
        return ''.join(self._chars)

    def __len__(self) -> int:
        return self.global_end + 1

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_char(self, ch: str) -> None:
        """Adds a single character to the tree, extending all suffixes.

        This implements one phase of Ukkonen's algorithm. `remainder` is incremented,
        then each pending suffix, longest first, is either found to be present
        already (Rule 3, which ends the phase) or gets a new leaf (Rule 2, splitting
        the active edge when the active point lies inside it). Leaf edges end at
        `OPEN_END`, so extending them (Rule 1) needs no work at all.

        Args:
            ch (str): The character to add. Must be a single character.

        Raises:
            ValueError: If `ch` is not a single character string.
        """
        if not isinstance(ch, str) or len(ch) != 1:
            raise ValueError("Input must be a single character.")

        chars = self._chars
        chars.append(ch)
        self.global_end += 1
        self.version += 1
        if self._references_cache:
            self._references_cache.clear()
        self.remainder += 1
        pos = self.global_end
        text_len = pos + 1
        last_new_internal_node: Node | None = None  # Waiting for its suffix link.

        while self.remainder > 0:
            if self.active_length == 0:
                self.active_edge = pos

            first_char = chars[self.active_edge]
            edge = self.active_node.get_edge(first_char)

            if edge is None:
                # Rule 2 at a node: hang a new leaf off active_node.
                leaf = Node(suffix_start=pos - self.remainder + 1)
                self.active_node.add_edge(first_char, Edge(pos, OPEN_END, leaf))
                if last_new_internal_node is not None:
                    last_new_internal_node.suffix_link = self.active_node
                    last_new_internal_node = None
            else:
                edge_len = edge.length(text_len)
                if self.active_length >= edge_len:
                    # Canonicalize: the active point lies past this edge, walk down.
                    self.active_node = edge.dest
                    self.active_length -= edge_len
                    self.active_edge += edge_len
                    continue

                if chars[edge.start + self.active_length] == ch:
                    # Rule 3: the suffix is already in the tree; the phase ends here.
                    self.active_length += 1
                    if last_new_internal_node is not None:
                        last_new_internal_node.suffix_link = self.active_node
                        last_new_internal_node = None
                    break

                # Rule 2 inside an edge: split it at the active point.
                split_at = edge.start + self.active_length
                internal_node = Node()
                self.active_node.add_edge(first_char, Edge(edge.start, split_at, internal_node))
                leaf = Node(suffix_start=pos - self.remainder + 1)
                internal_node.add_edge(ch, Edge(pos, OPEN_END, leaf))
                edge.start = split_at
                internal_node.add_edge(chars[split_at], edge)

                if last_new_internal_node is not None:
                    last_new_internal_node.suffix_link = internal_node
                last_new_internal_node = internal_node

            self.remainder -= 1

            if self.active_node is self.root and self.active_length > 0:
                self.active_length -= 1
                self.active_edge = pos - self.remainder + 1
            elif self.active_node is not self.root:
                self.active_node = self.active_node.suffix_link or self.root

    def append(self, text: str) -> None:
        """Adds every character of `text` to the tree, in order.

        Appending a block is equivalent to adding its characters one by one.

        Args:
            text (str): The text to add. May be empty.

        Raises:
            TypeError: If `text` is not a string.
        """
        if not isinstance(text, str):
            raise TypeError("Text must be a string.")
        for char_val in text:
            self.add_char(char_val)
        logger.debug(
            "Appended %d characters (text length %d, remainder %d)",
            len(text), len(self), self.remainder,
        )

    def add_terminator(self, terminator_char: str = "$") -> None:
        """Adds a unique terminator character to the text and tree.

        After a unique terminator every suffix ends at its own leaf. The terminator
        should not otherwise occur in the text; if it does, the tree is still valid
        but some suffixes may stay implicit.

        Args:
            terminator_char (str, optional): The terminator character. Defaults to "$".
        """
        if not isinstance(terminator_char, str) or len(terminator_char) != 1:
            raise ValueError("Terminator must be a single character string.")
        if terminator_char in self._chars:
            logger.warning(
                "Terminator %r already occurs in the text; some suffixes may remain implicit.",
                terminator_char,
            )
        self.add_char(terminator_char)
        logger.debug("Added terminator %r, %d suffixes still implicit", terminator_char, self.remainder)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _walk(self, pattern: str) -> tuple[int, Node]:
        """Matches `pattern` from the root as far as possible.

        Returns:
            A tuple ``(matched, node)``: the number of pattern characters matched,
            and the node at or just below the point where matching stopped.
        """
        chars = self._chars
        text_len = len(chars)
        pattern_len = len(pattern)
        node = self.root
        matched = 0

        while matched < pattern_len:
            edge = node.get_edge(pattern[matched])
            if edge is None:
                return matched, node
            span = min(edge.length(text_len), pattern_len - matched)
            # The first label character equals the dictionary key.
            for offset in range(1, span):
                if edge.char_at(chars, offset, text_len) != pattern[matched + offset]:
                    return matched + offset, edge.dest
            matched += span
            node = edge.dest

        return matched, node

    def find(self, pattern: str) -> bool:
        """Checks if a given pattern string exists as a substring in the tree.

        The empty pattern is always found.

        Args:
            pattern: The string to search for.

        Returns:
            True if the pattern is found, False otherwise.
        """
        if not isinstance(pattern, str):
            raise TypeError("Pattern must be a string.")
        matched, _ = self._walk(pattern)
        return matched == len(pattern)

    contains = find

    def match_length(self, pattern: str) -> int:
        """Returns the length of the longest prefix of `pattern` occurring in the text."""
        if not isinstance(pattern, str):
            raise TypeError("Pattern must be a string.")
        matched, _ = self._walk(pattern)
        return matched

    def _references(self, node: Node) -> frozenset[int]:
        """Returns the suffix offsets of all leaves below `node`.

        Results are kept for at most `REFERENCES_CACHE_SIZE` nodes, oldest evicted
        first, and only until the next character is appended.
        """
        cached = self._references_cache.get(id(node))
        if cached is not None:
            return cached

        offsets = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.suffix_start is not None:
                offsets.append(current.suffix_start)
            stack.extend(edge.dest for edge in current.children.values())

        references = frozenset(offsets)
        if len(self._references_cache) >= REFERENCES_CACHE_SIZE:
            del self._references_cache[next(iter(self._references_cache))]
        self._references_cache[id(node)] = references
        return references

    def cached_reference_count(self) -> int:
        """Returns how many leaf offsets the search cache currently holds."""
        return sum(len(offsets) for offsets in self._references_cache.values())

    def find_all_occurrences(self, pattern: str) -> list[int]:
        """Finds the start offset of every occurrence of `pattern` in the text.

        Leaves below the match point give the occurrences among explicit suffixes.
        The `remainder` shortest suffixes have no leaf yet, so they are checked
        directly against the text.

        The empty pattern occurs at every position ``0..len(text)`` inclusive.

        Args:
            pattern: The string to search for.

        Returns:
            A sorted list of start offsets; empty if the pattern does not occur.
        """
        if not isinstance(pattern, str):
            raise TypeError("Pattern must be a string.")
        text_len = len(self._chars)
        pattern_len = len(pattern)
        if pattern_len == 0:
            return list(range(text_len + 1))

        matched, node = self._walk(pattern)
        if matched < pattern_len:
            return []

        offsets = set(self._references(node))
        pattern_chars = list(pattern)
        for start in range(text_len - self.remainder, text_len - pattern_len + 1):
            if self._chars[start:start + pattern_len] == pattern_chars:
                offsets.add(start)
        return sorted(offsets)

    def iter_occurrences(self, pattern: str):
        """Yields the start offsets of `pattern` in increasing order.

        Each call returns a fresh generator, so the sequence can be restarted.
        """
        yield from self.find_all_occurrences(pattern)

    def count_occurrences(self, pattern: str) -> int:
        """Returns the number of (possibly overlapping) occurrences of `pattern`."""
        return len(self.find_all_occurrences(pattern))

    # ------------------------------------------------------------------
    # Structure inspection
    # ------------------------------------------------------------------

    def _iter_nodes(self):
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(edge.dest for edge in node.children.values())

    def node_count(self) -> int:
        """Returns the number of nodes, root included."""
        return sum(1 for _ in self._iter_nodes())

    def leaf_count(self) -> int:
        """Returns the number of leaves, i.e. of explicitly inserted suffixes."""
        return sum(1 for node in self._iter_nodes() if node.suffix_start is not None)

    def check_invariants(self) -> None:
        """Verifies the structural invariants of the tree.

        Checks that every edge label is non-empty and keyed by its first character,
        that internal nodes other than the root branch at least twice, that every
        leaf spells exactly the suffix it records, and that leaves and pending
        suffixes together account for every suffix of the text.

        Raises:
            InvariantError: On the first violation found.
        """
        chars = self._chars
        text_len = len(chars)
        leaves = 0
        stack = [(self.root, 0)]  # (node, depth of its path label)

        while stack:
            node, depth = stack.pop()
            if node is not self.root and not node.is_leaf and len(node.children) < 2:
                raise InvariantError(f"Internal node at depth {depth} has a single child.")
            if node.is_leaf and node is not self.root:
                if node.suffix_start is None:
                    raise InvariantError(f"Leaf at depth {depth} has no suffix offset.")
                if depth != text_len - node.suffix_start:
                    raise InvariantError(
                        f"Leaf for suffix {node.suffix_start} has depth {depth}, "
                        f"expected {text_len - node.suffix_start}."
                    )
                leaves += 1
            for first_char, edge in node.children.items():
                edge_len = edge.length(text_len)
                if edge_len < 1:
                    raise InvariantError(f"Empty edge label at text offset {edge.start}.")
                if chars[edge.start] != first_char:
                    raise InvariantError(
                        f"Edge keyed {first_char!r} starts with {chars[edge.start]!r}."
                    )
                stack.append((edge.dest, depth + edge_len))

        if leaves + self.remainder != text_len:
            raise InvariantError(
                f"{leaves} leaves and {self.remainder} pending suffixes for text of length {text_len}."
            )

    # ------------------------------------------------------------------
    # Visualization
    # ------------------------------------------------------------------

    def display(self, node: Node | None = None, prefix: str = "") -> None:
        """Prints a text representation of the suffix tree structure for debugging.

        Args:
            node (Node, optional): The node to start displaying from. Defaults to root.
            prefix (str, optional): Prefix string for child branches.
        """
        if node is None:
            node = self.root
            print("Suffix Tree (Root):")

        text_len = len(self._chars)
        children_items = sorted(node.children.items())
        for i, (_, edge) in enumerate(children_items):
            is_last_child = (i == len(children_items) - 1)
            connector = "└── " if is_last_child else "├── "

            label = edge.label(self._chars, text_len)
            if edge.dest.suffix_start is not None:
                info = f" [suffix {edge.dest.suffix_start}]"
            elif edge.dest.suffix_link:
                info = f" (SL->id:{id(edge.dest.suffix_link)})"
            else:
                info = ""
            print(f"{prefix}{connector}'{label}'{info}")

            new_prefix = prefix + ("    " if is_last_child else "│   ")
            self.display(edge.dest, new_prefix)

    def display_graphviz(self, highlight_pattern: str | None = None, view_now: bool = False):
        """Generates a Graphviz Digraph object for visualizing the suffix tree.

        Requires the optional `graphviz` Python library.

        Args:
            highlight_pattern (str, optional): Edges along the path spelled by this
                                               pattern are drawn highlighted.
            view_now (bool): If True, attempts to render and view the graph immediately.

        Returns:
            graphviz.Digraph object, or None if graphviz is not installed.
        """
        try:
            import graphviz  # type: ignore
        except ImportError:
            logger.warning("Graphviz library not found; install it to use display_graphviz: pip install graphviz")
            return None

        chars = self._chars
        text_len = len(chars)

        # Edges on the highlighted path, as (id(source node), first char).
        highlighted = set()
        if highlight_pattern:
            node, matched = self.root, 0
            while matched < len(highlight_pattern):
                edge = node.get_edge(highlight_pattern[matched])
                if edge is None:
                    break
                highlighted.add((id(node), highlight_pattern[matched]))
                matched += edge.length(text_len)
                node = edge.dest

        dot = graphviz.Digraph(comment='Suffix Tree')
        dot.attr(rankdir='TB')
        dot.node(str(id(self.root)), "R")

        for node in self._iter_nodes():
            if node.suffix_link is not None and node.suffix_link is not node:
                dot.edge(str(id(node)), str(id(node.suffix_link)),
                         style='dashed', arrowhead='empty', color='grey')
            for first_char, edge in sorted(node.children.items()):
                dest = edge.dest
                dot.node(str(id(dest)), str(dest.suffix_start) if dest.suffix_start is not None else "")
                is_highlighted = (id(node), first_char) in highlighted
                dot.edge(str(id(node)), str(id(dest)), label=edge.label(chars, text_len),
                         color='red' if is_highlighted else 'black',
                         penwidth='2.0' if is_highlighted else '1.0')
        if view_now:
            dot.view()
        return dot


# Example usage:
if __name__ == '__main__':
    print("OnlineSuffixTree Example")
    tree = OnlineSuffixTree("banana")
    print(f"Text: '{tree.text}' (len: {len(tree)}, remainder: {tree.remainder})")
    tree.display()

    for p in ["ana", "na", "xyz", "banana", ""]:
        print(f"Pattern '{p}': found={tree.find(p)}, occurrences={tree.find_all_occurrences(p)}")

    tree.add_terminator('$')
    print(f"\nAfter terminator: '{tree.text}' (remainder: {tree.remainder}, leaves: {tree.leaf_count()})")
    tree.display()
