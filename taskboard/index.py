"""
TASKBOARD - Ordered Index
=========================
A sorted permutation of task ids maintained by positional insertion.

Each insertion binary-searches a caller-supplied window of existing
positions, then shifts the tail one slot right. Entries whose key equals
the new key stay to its left, so equal keys keep arrival order.
"""

from bisect import bisect_right
from typing import Any, Callable, Iterator, List, Optional, Tuple
import logging

from .errors import PreconditionViolated

logger = logging.getLogger("taskboard.index")


class OrderedIndex:
    """Ids kept sorted by ``key(id)``.

    ``key`` is the accessor from task id to sort key; it is read on every
    comparison, so keys must not change once an id is indexed.
    """

    def __init__(self, key: Callable[[int], Any], name: str = "index"):
        self._key = key
        self._ids: List[int] = []
        self.name = name

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def insert_sorted(
        self,
        new_id: int,
        search_lo: int = 0,
        search_hi: Optional[int] = None
    ) -> int:
        """Insert ``new_id`` after every entry in ``[search_lo, search_hi]``
        whose key is not greater than its own. Returns the position used.

        ``search_hi`` is inclusive and defaults to the last position. An empty
        window (``search_lo > search_hi``) inserts at ``search_lo``.
        """
        if search_hi is None:
            search_hi = len(self._ids) - 1
        if search_lo < 0 or search_lo > len(self._ids) or search_hi >= len(self._ids):
            raise PreconditionViolated(
                f"{self.name}: window [{search_lo}, {search_hi}] outside 0..{len(self._ids)}"
            )

        pos = bisect_right(
            self._ids,
            self._key(new_id),
            search_lo,
            max(search_hi + 1, search_lo),
            key=self._key,
        )
        self._ids.insert(pos, new_id)
        logger.debug(f"{self.name}: id {new_id} at position {pos}/{len(self._ids)}")
        return pos

    def snapshot(self) -> Tuple[int, ...]:
        """Current ordered ids (a copy; later inserts do not affect it)"""
        return tuple(self._ids)

