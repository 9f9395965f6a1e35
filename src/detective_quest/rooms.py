"""
Room Map for Detective Quest

The mansion is a binary tree of rooms: from any room the player may go left
or right, when a room exists on that side. Rooms are stored in a flat list
and refer to their children by index. The tree is built once from case-file
data and never reshaped afterwards; the only mutation is a room giving up
its clue when the player collects it.

Shape rules enforced while linking:
- A room has at most one parent
- Each side (left/right) of a room is filled at most once
- The root is never a child
- No room may end up below itself
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


logger = logging.getLogger(__name__)


class MapConfigError(ValueError):
    """Raised when a room map or case file describes an invalid mansion."""


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Room:
    """A room in the mansion. An empty clue means nothing to collect here."""
    name: str
    clue: str = ""
    index: int = 0
    left: Optional[int] = None
    right: Optional[int] = None

    def has_clue(self) -> bool:
        return bool(self.clue)


class RoomMap:
    """
    Binary tree of rooms. The first room created is the root (the entrance).
    """

    def __init__(self):
        self._rooms: list[Room] = []
        self._parents: dict[int, int] = {}

    # ========================================================================
    # CONSTRUCTION
    # ========================================================================

    def create_room(self, name: str, clue: Optional[str] = "") -> Room:
        """
        Create an unlinked room.

        Args:
            name: Display name of the room (required)
            clue: Clue hidden in the room; None or "" for no clue

        Returns:
            The new room
        """
        if not name or not name.strip():
            raise MapConfigError("Every room needs a name")
        room = Room(name=name, clue=clue or "", index=len(self._rooms))
        self._rooms.append(room)
        return room

    def link(self, parent: Room, left: Optional[Room] = None,
             right: Optional[Room] = None) -> None:
        """
        Attach rooms below a parent room.

        Raises:
            MapConfigError: If the link would break the tree shape
        """
        self._check_owned(parent)
        if left is not None:
            self._attach(parent, left, Side.LEFT)
        if right is not None:
            self._attach(parent, right, Side.RIGHT)

    def _attach(self, parent: Room, child: Room, side: Side) -> None:
        self._check_owned(child)
        if child.index == 0:
            raise MapConfigError(f"The entrance '{child.name}' cannot be placed below another room")
        if child.index in self._parents:
            owner = self._rooms[self._parents[child.index]]
            raise MapConfigError(f"'{child.name}' is already linked below '{owner.name}'")
        if self.child(parent, side) is not None:
            raise MapConfigError(f"'{parent.name}' already has a room on the {side.value}")

        # The child must not be the parent or one of its ancestors. A room
        # with no children can only be its own ancestor.
        if child.left is None and child.right is None:
            if child.index == parent.index:
                raise MapConfigError(f"Linking '{child.name}' below '{parent.name}' would create a loop")
            ancestor: Optional[int] = None
        else:
            ancestor = parent.index
        while ancestor is not None:
            if ancestor == child.index:
                raise MapConfigError(f"Linking '{child.name}' below '{parent.name}' would create a loop")
            ancestor = self._parents.get(ancestor)

        if side == Side.LEFT:
            parent.left = child.index
        else:
            parent.right = child.index
        self._parents[child.index] = parent.index

    def _check_owned(self, room: Room) -> None:
        if room.index >= len(self._rooms) or self._rooms[room.index] is not room:
            raise MapConfigError(f"Room '{room.name}' does not belong to this map")

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def root(self) -> Optional[Room]:
        """The entrance room, or None for an empty map."""
        return self._rooms[0] if self._rooms else None

    def child(self, room: Room, side: Side) -> Optional[Room]:
        """Get the room on the given side, if there is one."""
        index = room.left if side == Side.LEFT else room.right
        return self._rooms[index] if index is not None else None

    def find(self, name: str) -> Optional[Room]:
        """Find a room by exact name."""
        for room in self._rooms:
            if room.name == name:
                return room
        return None

    def take_clue(self, room: Room) -> Optional[str]:
        """
        Collect the clue in a room, leaving the room empty.

        Returns:
            The clue text, or None if there was nothing left to collect
        """
        if not room.clue:
            return None
        clue, room.clue = room.clue, ""
        logger.debug(f"Clue taken from {room.name}: '{clue}'")
        return clue

    def remaining_clues(self) -> list[str]:
        """Get the clues still waiting to be found, in pre-order."""
        return [room.clue for room in self if room.clue]

    def clear(self) -> None:
        """Drop every room."""
        self._rooms = []
        self._parents = {}

    def __iter__(self) -> Iterator[Room]:
        """Walk the rooms reachable from the entrance in pre-order."""
        stack = [self.root] if self.root else []
        while stack:
            room = stack.pop()
            yield room
            for side in (Side.RIGHT, Side.LEFT):
                next_room = self.child(room, side)
                if next_room is not None:
                    stack.append(next_room)

    def __len__(self) -> int:
        return len(self._rooms)
