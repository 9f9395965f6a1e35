"""
Clue Set - the player's collected clues, kept in alphabetical order.

A binary search tree keyed by clue text. Nodes live in a flat list (the
arena) and point at their children by index, so dropping the list drops the
whole tree. Nodes are only ever appended; nothing is removed or moved.

Ordering is plain str comparison, which orders by code point and therefore
agrees with byte-wise comparison of the UTF-8 encoding.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional


logger = logging.getLogger(__name__)


@dataclass
class ClueNode:
    """A collected clue and the arena indexes of its children."""
    text: str
    left: Optional[int] = None
    right: Optional[int] = None


class ClueSet:
    """Ordered, duplicate-free set of collected clue texts."""

    def __init__(self):
        self._nodes: list[ClueNode] = []

    @property
    def root(self) -> Optional[int]:
        """Arena index of the root node (always 0 once anything is inserted)."""
        return 0 if self._nodes else None

    def insert(self, text: Optional[str]) -> bool:
        """
        Add a clue to the set.

        Empty text and clues already in the set are ignored.

        Args:
            text: The clue text

        Returns:
            True if a new node was added
        """
        if not text:
            return False
        if not self._nodes:
            self._nodes.append(ClueNode(text))
            logger.debug(f"Clue set started with '{text}'")
            return True

        index = 0
        while True:
            node = self._nodes[index]
            if text == node.text:
                return False
            if text < node.text:
                if node.left is None:
                    node.left = self._append(text)
                    return True
                index = node.left
            else:
                if node.right is None:
                    node.right = self._append(text)
                    return True
                index = node.right

    def _append(self, text: str) -> int:
        self._nodes.append(ClueNode(text))
        logger.debug(f"Clue '{text}' added to set ({len(self._nodes)} total)")
        return len(self._nodes) - 1

    def in_order(self) -> Iterator[str]:
        """
        Yield every clue in ascending order.

        Each call returns a fresh generator, so the walk can be repeated.
        """
        stack: list[int] = []
        index = self.root
        while stack or index is not None:
            while index is not None:
                stack.append(index)
                index = self._nodes[index].left
            node = self._nodes[stack.pop()]
            yield node.text
            index = node.right

    def clear(self) -> None:
        """Drop every collected clue."""
        self._nodes = []

    def __iter__(self) -> Iterator[str]:
        return self.in_order()

    def __contains__(self, text: object) -> bool:
        if not isinstance(text, str):
            return False
        index = self.root
        while index is not None:
            node = self._nodes[index]
            if text == node.text:
                return True
            index = node.left if text < node.text else node.right
        return False

    def __len__(self) -> int:
        return len(self._nodes)
