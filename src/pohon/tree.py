import logging
import typing
from collections import deque

from .conf import Conf, default_conf
from .exceptions import (
    DuplicateKey,
    EmptyTree,
    InconsistencyError,
    InvalidConfiguration,
    KeyNotFound,
)
from .node import Node
from .utils.iterators import dictfilter, pairwise

T = typing.TypeVar("T")

logger = logging.getLogger("pohon")

DUPLICATE_POLICIES = ("raise", "ignore")


class BTree(typing.Generic[T]):
    """A B-tree of minimum degree ``degree``.

    Every node except the root holds between ``degree - 1`` and
    ``2 * degree - 1`` keys. Keys must be mutually comparable and are kept
    unique.
    """

    def __init__(self, degree: int, on_duplicate: str = "raise"):
        if isinstance(degree, bool) or not isinstance(degree, int) or degree < 2:
            raise InvalidConfiguration(
                f"minimum degree must be an integer >= 2, got {degree!r}"
            )
        if on_duplicate not in DUPLICATE_POLICIES:
            raise InvalidConfiguration(
                f"on_duplicate must be one of {DUPLICATE_POLICIES}, "
                f"got {on_duplicate!r}"
            )
        self.t = degree
        self.on_duplicate = on_duplicate
        self.root: typing.Optional[Node[T]] = None
        self.count = 0

    @classmethod
    def from_conf(cls, conf: typing.Optional[typing.Mapping] = None, **overrides):
        conf = Conf(default_conf, **dictfilter(conf or {}, **overrides))
        return cls(conf.min_degree, on_duplicate=conf.on_duplicate)

    def __len__(self):
        return self.count

    def __iter__(self):
        return self.enumerate()

    def __contains__(self, key):
        return self.search(key)

    def __repr__(self):
        return f"{type(self).__name__}(degree={self.t}, count={self.count})"

    @property
    def height(self) -> int:
        """Number of levels, ``0`` for the empty tree."""
        height = 0
        node = self.root
        while node is not None:
            height += 1
            node = None if node.leaf else node.children[0]
        return height

    def search(self, key: T) -> bool:
        if self.root is None:
            return False
        return self.root.search(key) is not None

    def enumerate(self) -> typing.Iterator[T]:
        """Yield every key in ascending order."""
        if self.root is not None:
            yield from self.root.traverse()

    def min(self) -> T:
        node = self._require_root()
        while not node.leaf:
            node = node.children[0]
        return node.keys[0]

    def max(self) -> T:
        node = self._require_root()
        while not node.leaf:
            node = node.children[-1]
        return node.keys[-1]

    def insert(self, key: T):
        if self.root is None:
            self.root = Node(self.t, leaf=True, keys=[key])
            self.count = 1
            return

        if self.root.search(key) is not None:
            if self.on_duplicate == "ignore":
                logger.debug("ignoring duplicate key %r", key)
                return
            raise DuplicateKey(key)

        if self.root.is_full:
            root = Node(self.t, leaf=False, children=[self.root])
            root.split_child(0, self.root)
            i = 1 if root.keys[0] < key else 0
            root.children[i].insert_non_full(key)
            self.root = root
            logger.debug("root split, height is now %d", self.height)
        else:
            self.root.insert_non_full(key)
        self.count += 1

    def delete(self, key: T):
        if self.root is None:
            raise EmptyTree("the tree is empty")

        # checked up front: the descent rebalances nodes before it can tell
        # the key is missing
        if self.root.search(key) is None:
            raise KeyNotFound(key)

        self.root.delete(key)
        self.count -= 1

        if not self.root.keys:
            if self.root.leaf:
                self.root = None
            else:
                self.root = self.root.children[0]
            logger.debug("root collapsed, height is now %d", self.height)

    def levels(self) -> typing.List[typing.List[typing.List[T]]]:
        """Return the keys of every node, grouped level by level."""
        if self.root is None:
            return []

        levels = []
        queue = deque([(self.root, 0)])
        while queue:
            node, depth = queue.popleft()
            if depth == len(levels):
                levels.append([])
            levels[depth].append(node.keys[:])
            queue.extend((c, depth + 1) for c in node.children)
        return levels

    def check(self):
        """Verify every B-tree invariant, raise :exc:`InconsistencyError` on
        the first violation found.
        """
        if self.root is None:
            if self.count:
                raise InconsistencyError(f"empty tree reports {self.count} keys")
            return

        leaf_depths = set()
        total = self._check_node(self.root, 0, None, None, leaf_depths)
        if len(leaf_depths) != 1:
            raise InconsistencyError(f"leaves found at depths {sorted(leaf_depths)}")
        if total != self.count:
            raise InconsistencyError(f"tree holds {total} keys, count is {self.count}")

    def _check_node(self, node: Node[T], depth: int, low, high, leaf_depths) -> int:
        t = self.t
        n = len(node.keys)
        if n > 2 * t - 1:
            raise InconsistencyError(
                f"node {node.keys!r} has more than {2 * t - 1} keys"
            )
        if node is not self.root and n < t - 1:
            raise InconsistencyError(f"node {node.keys!r} has fewer than {t - 1} keys")
        if node is self.root and n == 0:
            raise InconsistencyError("root has no keys")
        for a, b in pairwise(node.keys):
            if not a < b:
                raise InconsistencyError(
                    f"keys {node.keys!r} are not strictly ascending"
                )
        if low is not None and not low < node.keys[0]:
            raise InconsistencyError(
                f"key {node.keys[0]!r} is not greater than {low!r}"
            )
        if high is not None and not node.keys[-1] < high:
            raise InconsistencyError(f"key {node.keys[-1]!r} is not less than {high!r}")

        if node.leaf:
            if node.children:
                raise InconsistencyError(f"leaf {node.keys!r} has children")
            leaf_depths.add(depth)
            return n

        if len(node.children) != n + 1:
            raise InconsistencyError(
                f"node {node.keys!r} has {len(node.children)} children, "
                f"expected {n + 1}"
            )
        total = n
        bounds = [low] + node.keys + [high]
        for i, child in enumerate(node.children):
            total += self._check_node(
                child, depth + 1, bounds[i], bounds[i + 1], leaf_depths
            )
        return total

    def copy(self) -> "BTree[T]":
        tree = type(self)(self.t, on_duplicate=self.on_duplicate)
        tree.root = self.root.copy() if self.root is not None else None
        tree.count = self.count
        return tree

    def _require_root(self) -> Node[T]:
        if self.root is None:
            raise EmptyTree("the tree is empty")
        return self.root
