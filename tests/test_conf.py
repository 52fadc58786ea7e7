import pytest

from pohon import BTree, Conf, DuplicateKey, InconsistencyError, InvalidConfiguration
from pohon.node import Node


@pytest.mark.parametrize("degree", [1, 0, -3, 2.5, "3", True])
def test_invalid_degree(degree):
    with pytest.raises(InvalidConfiguration):
        BTree(degree)


def test_invalid_duplicate_policy():
    with pytest.raises(InvalidConfiguration):
        BTree(2, on_duplicate="keep")


def test_invalid_configuration_is_value_error():
    with pytest.raises(ValueError):
        BTree(1)


def test_conf_attribute_access():
    conf = Conf(min_degree=4)
    assert conf.min_degree == 4
    conf.on_duplicate = "ignore"
    assert conf["on_duplicate"] == "ignore"
    with pytest.raises(AttributeError):
        conf.missing


def test_from_conf_defaults():
    tree = BTree.from_conf()
    assert tree.t == 2
    assert tree.on_duplicate == "raise"


def test_from_conf_overrides():
    tree = BTree.from_conf({"min_degree": 5}, on_duplicate="ignore")
    assert tree.t == 5
    assert tree.on_duplicate == "ignore"

    tree = BTree.from_conf(Conf(min_degree=3), on_duplicate=None)
    assert tree.t == 3
    assert tree.on_duplicate == "raise"


def test_duplicate_rejected_without_mutation():
    tree = BTree(2)
    for key in range(10):
        tree.insert(key)
    levels = tree.levels()

    with pytest.raises(DuplicateKey) as excinfo:
        tree.insert(4)

    assert excinfo.value.key == 4
    assert tree.levels() == levels
    assert len(tree) == 10


def test_duplicate_ignored():
    tree = BTree(2, on_duplicate="ignore")
    for key in [3, 1, 3, 2, 1]:
        tree.insert(key)

    assert list(tree) == [1, 2, 3]
    assert len(tree) == 3


def test_check_detects_underflow():
    tree = BTree(3)
    tree.root = Node(
        3, leaf=False, keys=[5], children=[Node(3, keys=[1]), Node(3, keys=[6, 7])]
    )
    tree.count = 4

    with pytest.raises(InconsistencyError):
        tree.check()


def test_check_detects_bad_separation():
    tree = BTree(2)
    tree.root = Node(
        2, leaf=False, keys=[5], children=[Node(2, keys=[6]), Node(2, keys=[7])]
    )
    tree.count = 3

    with pytest.raises(InconsistencyError):
        tree.check()


def test_check_detects_uneven_leaves():
    deep = Node(
        2, leaf=False, keys=[8], children=[Node(2, keys=[7]), Node(2, keys=[9])]
    )
    tree = BTree(2)
    tree.root = Node(2, leaf=False, keys=[5], children=[Node(2, keys=[1]), deep])
    tree.count = 5

    with pytest.raises(InconsistencyError):
        tree.check()
