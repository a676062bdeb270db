# demo for the bintree package
import logging
import os

from bintree.tree import BinTree

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(level=os.environ.get("BINTREE_LOG_LEVEL", "WARNING").upper())

    key = 42
    t = BinTree.new()
    t.insert(key, 56)

    value = t.get(key)
    if value is None:
        raise LookupError(f"key {key} missing right after insert")
    print(f"Under {key} lives {value}")
    logger.debug("demo finished with %r", t)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
