from typing import List, NamedTuple, Optional, Union


class Same(NamedTuple):
    """Both elements already live in the set rooted at `root`."""
    root: int


class DisjointRoots(NamedTuple):
    root_a: int
    root_b: int


Roots = Union[Same, DisjointRoots]


class DisjointSet:
    """
    Union-find over the integers [0, n).

    Each slot holds the index of its parent, or None for a slot that has
    never been attached under another one. There is no rank or size
    balancing; `find` compresses paths instead.

    `union` must only be called with roots (see `find_roots`). That keeps
    the number of unparented slots equal to the number of live sets, which
    is what `distinct_sets` reports.
    """

    __slots__ = ('nodes', '_unparented')

    def __init__(self, size: int):
        self.nodes: List[Optional[int]] = [None] * size
        self._unparented = size

    def __len__(self) -> int:
        return len(self.nodes)

    def union(self, root_a: int, root_b: int):
        """Attach root_b's set under root_a."""
        if self.nodes[root_b] is None:
            self._unparented -= 1
        self.nodes[root_b] = root_a

    def find(self, c: int) -> int:
        """
        Returns the root of c's set and relinks every node on the way
        directly to that root.
        """
        root = c
        while self.nodes[root] is not None:
            root = self.nodes[root]

        # Second pass: point the whole chain at the root
        while c != root:
            parent = self.nodes[c]
            self.nodes[c] = root
            c = parent
        return root

    def lookup(self, c: int) -> int:
        """Same answer as find() without touching the structure."""
        while self.nodes[c] is not None:
            c = self.nodes[c]
        return c

    def find_roots(self, a: int, b: int) -> Roots:
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return Same(ra)
        return DisjointRoots(ra, rb)

    def distinct_sets(self) -> int:
        """Count of slots with no parent assigned."""
        return self._unparented
