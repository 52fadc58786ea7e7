class PohonError(Exception):
    "Base error for Pohon"


class EmptyTree(PohonError):
    """The operation needs at least one key but the tree has no root."""


class KeyNotFound(PohonError, KeyError):
    """Trying to delete a key that is not stored in the tree."""

    #: The key that was looked up.
    key = None

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"key {self.key!r} does not exist in the tree"


class DuplicateKey(PohonError):
    """Trying to insert a key that is already stored in the tree."""

    #: The key that was inserted twice.
    key = None

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"key {self.key!r} already exists in the tree"


class InvalidConfiguration(PohonError, ValueError):
    """Raised when a tree is built with a degree below 2 or an unknown
    duplicate policy.
    """


class InconsistencyError(PohonError):
    """The tree has been found to break one of the B-tree invariants.

    Never raised by insert or delete, only by an explicit check.
    """
