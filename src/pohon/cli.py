import argparse
import logging
import sys

from .exceptions import PohonError
from .tree import BTree
from .utils.format import format_levels

logger = logging.getLogger("pohon")

DEMO_INSERTS = [
    2, 7, 8, 9, 4, 6, 1, 5, 3, 10, 11, 14, 16, 17, 19, 20, 21, 22, 23, 24, 25, 30
]
DEMO_DELETES = [18]


def setup_logging(verbose: bool):
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)
    if not root.handlers:
        root.addHandler(handler)


def build_parser():
    parser = argparse.ArgumentParser("pohon", description="in-memory B-tree playground")
    parser.add_argument(
        "--degree", type=int, default=2, help="minimum degree of the tree"
    )
    parser.add_argument("--on-duplicate", choices=["raise", "ignore"], default="raise")
    parser.add_argument("--insert", type=int, nargs="*", default=[], metavar="KEY")
    parser.add_argument("--delete", type=int, nargs="*", default=[], metavar="KEY")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run(degree: int, inserts, deletes, on_duplicate: str = "raise", out=None) -> BTree:
    out = out or sys.stdout
    tree = BTree(degree, on_duplicate=on_duplicate)

    for key in inserts:
        try:
            tree.insert(key)
        except PohonError as e:
            logger.warning("insert %d failed: %s", key, e)
    for key in deletes:
        try:
            tree.delete(key)
        except PohonError as e:
            logger.warning("delete %d failed: %s", key, e)

    print(" ".join(str(k) for k in tree), file=out)
    print(format_levels(tree.levels()), file=out)
    return tree


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    inserts, deletes = args.insert, args.delete
    if not inserts and not deletes:
        inserts, deletes = DEMO_INSERTS, DEMO_DELETES

    try:
        run(args.degree, inserts, deletes, on_duplicate=args.on_duplicate)
    except PohonError as e:
        logger.error("%s", e)
        return 1
    return 0
