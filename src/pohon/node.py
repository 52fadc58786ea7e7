import logging
import typing
from bisect import bisect_left
from dataclasses import dataclass, field

from .exceptions import KeyNotFound

T = typing.TypeVar("T")

logger = logging.getLogger("pohon")


@dataclass
class Node(typing.Generic[T]):
    """One page of a B-tree of minimum degree ``t``.

    A leaf has no children. An internal node always holds exactly one more
    child than it has keys. The ``children`` list is the only reference to a
    child, so dropping a child from it releases that subtree.
    """

    t: int
    leaf: bool = True
    keys: typing.List[T] = field(default_factory=list)
    children: typing.List["Node[T]"] = field(default_factory=list)

    def __len__(self):
        return len(self.keys)

    @property
    def is_full(self) -> bool:
        return len(self.keys) == 2 * self.t - 1

    def find_key(self, k: T) -> int:
        """Return the first index whose key is not less than ``k``."""
        return bisect_left(self.keys, k)

    def search(self, k: T) -> typing.Optional["Node[T]"]:
        idx = self.find_key(k)
        if idx < len(self.keys) and self.keys[idx] == k:
            return self
        if self.leaf:
            return None
        return self.children[idx].search(k)

    def traverse(self) -> typing.Iterator[T]:
        for i, key in enumerate(self.keys):
            if not self.leaf:
                yield from self.children[i].traverse()
            yield key

        if not self.leaf:
            yield from self.children[len(self.keys)].traverse()

    def copy(self) -> "Node[T]":
        return Node(
            t=self.t,
            leaf=self.leaf,
            keys=self.keys[:],
            children=[c.copy() for c in self.children],
        )

    # insertion

    def insert_non_full(self, k: T):
        """Insert ``k`` into the subtree rooted here.

        The caller guarantees this node is not full. Full children are split
        on the way down so the recursion never lands on a full node either.
        """
        i = self.find_key(k)
        if self.leaf:
            self.keys.insert(i, k)
            return

        if self.children[i].is_full:
            self.split_child(i, self.children[i])
            # the median now sits at keys[i]
            if self.keys[i] < k:
                i += 1
        self.children[i].insert_non_full(k)

    def split_child(self, i: int, y: "Node[T]") -> "Node[T]":
        """Split the full child ``y`` stored at ``children[i]``.

        ``y`` keeps its lower ``t - 1`` keys, a new right sibling takes the
        upper ``t - 1`` keys and the median moves up into ``keys[i]``.
        """
        t = self.t
        z = Node(t, leaf=y.leaf, keys=y.keys[t:])
        if not y.leaf:
            z.children = y.children[t:]
            del y.children[t:]

        median = y.keys[t - 1]
        del y.keys[t - 1 :]

        self.keys.insert(i, median)
        self.children.insert(i + 1, z)
        logger.debug("split child %d around %r", i, median)
        return z

    # deletion

    def delete(self, k: T):
        idx = self.find_key(k)

        if idx < len(self.keys) and self.keys[idx] == k:
            if self.leaf:
                self.remove_from_leaf(idx)
            else:
                self.remove_from_internal(idx)
            return

        if self.leaf:
            raise KeyNotFound(k)

        # descending into the last child; it can be merged into its left
        # sibling by fill, which shrinks this node by one key
        flag = idx == len(self.keys)

        if len(self.children[idx].keys) < self.t:
            self.fill(idx)

        if flag and idx > len(self.keys):
            self.children[idx - 1].delete(k)
        else:
            self.children[idx].delete(k)

    def remove_from_leaf(self, idx: int):
        del self.keys[idx]

    def remove_from_internal(self, idx: int):
        k = self.keys[idx]

        if len(self.children[idx].keys) >= self.t:
            pred = self.predecessor(idx)
            self.keys[idx] = pred
            self.children[idx].delete(pred)
        elif len(self.children[idx + 1].keys) >= self.t:
            succ = self.successor(idx)
            self.keys[idx] = succ
            self.children[idx + 1].delete(succ)
        else:
            self.merge(idx)
            self.children[idx].delete(k)

    def predecessor(self, idx: int) -> T:
        cur = self.children[idx]
        while not cur.leaf:
            cur = cur.children[len(cur.keys)]
        return cur.keys[-1]

    def successor(self, idx: int) -> T:
        cur = self.children[idx + 1]
        while not cur.leaf:
            cur = cur.children[0]
        return cur.keys[0]

    def fill(self, idx: int):
        """Make sure ``children[idx]`` has at least ``t`` keys."""
        if idx != 0 and len(self.children[idx - 1].keys) >= self.t:
            self.borrow_from_prev(idx)
        elif idx != len(self.keys) and len(self.children[idx + 1].keys) >= self.t:
            self.borrow_from_next(idx)
        elif idx != len(self.keys):
            self.merge(idx)
        else:
            self.merge(idx - 1)

    def borrow_from_prev(self, idx: int):
        child = self.children[idx]
        sibling = self.children[idx - 1]

        # rotate right: sibling's last key goes up, separator comes down
        child.keys.insert(0, self.keys[idx - 1])
        if not child.leaf:
            child.children.insert(0, sibling.children.pop())
        self.keys[idx - 1] = sibling.keys.pop()
        logger.debug("child %d borrowed %r from its left sibling", idx, child.keys[0])

    def borrow_from_next(self, idx: int):
        child = self.children[idx]
        sibling = self.children[idx + 1]

        child.keys.append(self.keys[idx])
        if not child.leaf:
            child.children.append(sibling.children.pop(0))
        self.keys[idx] = sibling.keys.pop(0)
        logger.debug("child %d borrowed %r from its right sibling", idx, child.keys[-1])

    def merge(self, idx: int):
        """Fold ``keys[idx]`` and ``children[idx + 1]`` into ``children[idx]``.

        This node loses one key and one child.
        """
        child = self.children[idx]
        sibling = self.children.pop(idx + 1)

        child.keys.append(self.keys.pop(idx))
        child.keys.extend(sibling.keys)
        if not child.leaf:
            child.children.extend(sibling.children)
        logger.debug(
            "merged children %d and %d into %d keys", idx, idx + 1, len(child.keys)
        )
