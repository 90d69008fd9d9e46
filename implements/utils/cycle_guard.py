"""Per-path cycle guards for walking self-referential graphs.

Both guards are immutable: push() returns a new guard and leaves the receiver
untouched, so sibling branches never see each other's visitation history.
Nodes are compared by identity, since interface and candidate graphs are made
of unhashable mappings and lists.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)


class VisitedPath:
    """Nodes visited on the current root-to-node path."""

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Tuple[Any, ...] = ()):
        self._nodes = nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: Any) -> bool:
        return any(visited is node for visited in self._nodes)

    def push(self, node: Any) -> Optional[VisitedPath]:
        """Return a new path with node appended, or None if node is already on it."""
        if node in self:
            logger.debug(f"Cycle cut at depth {len(self._nodes)}: {type(node).__name__} already visited")
            return None
        return VisitedPath(self._nodes + (node,))


class VisitedPairs:
    """(interface node, candidate node) pairs visited together on the current path."""

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Tuple[Tuple[Any, Any], ...] = ()):
        self._pairs = pairs

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, pair: Tuple[Any, Any]) -> bool:
        intf, candidate = pair
        return any(i is intf and c is candidate for i, c in self._pairs)

    def push(self, intf: Any, candidate: Any) -> Optional[VisitedPairs]:
        """Return new pairs with (intf, candidate) appended, or None if already visited."""
        if (intf, candidate) in self:
            logger.debug(f"Cycle cut at depth {len(self._pairs)}: interface/candidate pair already visited")
            return None
        return VisitedPairs(self._pairs + ((intf, candidate),))
