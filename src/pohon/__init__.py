from .tree import BTree
from .node import Node
from .conf import Conf
from .exceptions import (
    PohonError,
    EmptyTree,
    KeyNotFound,
    DuplicateKey,
    InvalidConfiguration,
    InconsistencyError,
)


__all__ = [
    "BTree",
    "Node",
    "Conf",
    "PohonError",
    "EmptyTree",
    "KeyNotFound",
    "DuplicateKey",
    "InvalidConfiguration",
    "InconsistencyError",
]
