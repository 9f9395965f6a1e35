"""
Case Files for Detective Quest

A case file describes one mystery: the room tree to explore and which
suspect each clue points to. The built-in case is the Enigma Mansion; other
cases can be loaded from YAML files shaped like this:

    title: The Enigma Mansion
    rooms:
      name: Entrance Hall
      clue: Shoeprint on the doorway
      left:
        name: Living Room
        ...
    suspects:
      Shoeprint on the doorway: Carlos
      ...

`suspects` may also be a list of {clue, suspect} mappings.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from detective_quest.config import GAME_CONFIG
from detective_quest.rooms import MapConfigError, Room, RoomMap, Side
from detective_quest.suspects import SuspectIndex


logger = logging.getLogger(__name__)


# ============================================================================
# THE ENIGMA MANSION
#
#                    Entrance Hall
#                   /             \
#           Living Room          Kitchen
#           /         \                 \
#       Library      Garden           Basement
# ============================================================================

MANSION_TITLE = "The Enigma Mansion"

MANSION_ROOMS = {
    "name": "Entrance Hall",
    "clue": "Shoeprint on the doorway",
    "left": {
        "name": "Living Room",
        "clue": "Broken glass near the sofa",
        "left": {"name": "Library", "clue": "Open book with suspicious notes"},
        "right": {"name": "Garden", "clue": "Freshly dug soil near the statue"},
    },
    "right": {
        "name": "Kitchen",
        "clue": "Knives out of place",
        "right": {"name": "Basement", "clue": "Locked box with engraved initials"},
    },
}

MANSION_SUSPECTS = {
    "Shoeprint on the doorway": "Carlos",
    "Broken glass near the sofa": "Mariana",
    "Knives out of place": "Ricardo",
    "Open book with suspicious notes": "Mariana",
    "Freshly dug soil near the statue": "Carlos",
    "Locked box with engraved initials": "Henrique",
}


@dataclass
class CaseFile:
    """Static description of a mystery, before any structures are built."""
    title: str
    rooms: dict
    suspects: Union[dict, list] = field(default_factory=dict)

    def build_room_map(self) -> RoomMap:
        return build_room_map(self.rooms)

    def build_suspect_index(self, size: int = GAME_CONFIG.hash_table_size) -> SuspectIndex:
        return build_suspect_index(self.suspects, size)


def default_case() -> CaseFile:
    """Get the built-in Enigma Mansion case."""
    return CaseFile(title=MANSION_TITLE, rooms=MANSION_ROOMS, suspects=MANSION_SUSPECTS)


# ============================================================================
# BUILDERS
# ============================================================================

def build_room_map(description: dict) -> RoomMap:
    """
    Build a room map from a nested room description.

    Args:
        description: {name, clue?, left?, right?} where left/right are
            descriptions of the same shape

    Returns:
        A RoomMap whose root is the outermost room

    Raises:
        MapConfigError: If a room is malformed or appears twice
    """
    room_map = RoomMap()
    seen: set[int] = set()
    # (description, parent room, side below the parent, location for errors)
    stack: list[tuple[Any, Optional[Room], Optional[Side], str]] = [(description, None, None, "root")]

    while stack:
        desc, parent, side, where = stack.pop()
        if not isinstance(desc, dict):
            raise MapConfigError(f"Room at {where} must be a mapping, got {type(desc).__name__}")
        if id(desc) in seen:
            raise MapConfigError(f"Room at {where} appears more than once in the map")
        seen.add(id(desc))

        name = desc.get("name")
        clue = desc.get("clue")
        if not isinstance(name, str):
            raise MapConfigError(f"Room at {where} needs a text 'name'")
        if clue is not None and not isinstance(clue, str):
            raise MapConfigError(f"Clue in '{name}' must be text")

        room = room_map.create_room(name, clue)
        if side == Side.LEFT:
            room_map.link(parent, left=room)
        elif side == Side.RIGHT:
            room_map.link(parent, right=room)

        for child_side in (Side.RIGHT, Side.LEFT):
            child_desc = desc.get(child_side.value)
            if child_desc is not None:
                stack.append((child_desc, room, child_side, f"{where}.{child_side.value}"))

    logger.debug(f"Built room map with {len(room_map)} rooms")
    return room_map


def build_suspect_index(associations: Union[dict, list, None],
                        size: int = GAME_CONFIG.hash_table_size) -> SuspectIndex:
    """
    Build a suspect index from clue -> suspect associations.

    Args:
        associations: A {clue: suspect} mapping, or a list of
            {clue, suspect} mappings / (clue, suspect) pairs
        size: Number of hash buckets

    Raises:
        MapConfigError: If an association is not in a recognised shape, or
            a clue or suspect is present but not text
    """
    index = SuspectIndex(size)
    if not associations:
        return index

    if isinstance(associations, dict):
        pairs = list(associations.items())
    elif isinstance(associations, list):
        pairs = []
        for item in associations:
            if isinstance(item, dict):
                pairs.append((item.get("clue"), item.get("suspect")))
            elif isinstance(item, (list, tuple)) and len(item) == 2:
                pairs.append((item[0], item[1]))
            else:
                raise MapConfigError(f"Unrecognised suspect association: {item!r}")
    else:
        raise MapConfigError(f"Suspects must be a mapping or a list, got {type(associations).__name__}")

    for clue, suspect in pairs:
        # YAML turns bare numbers and yes/no into int/bool
        if clue is not None and not isinstance(clue, str):
            raise MapConfigError(f"Clue {clue!r} must be text, got {type(clue).__name__}")
        if suspect is not None and not isinstance(suspect, str):
            raise MapConfigError(f"Suspect for clue {clue!r} must be text, got {type(suspect).__name__}")
        index.put(clue, suspect)
    logger.debug(f"Built suspect index with {len(index)} clues")
    return index


# ============================================================================
# YAML LOADING
# ============================================================================

def load_case_file(path: Union[str, Path]) -> CaseFile:
    """
    Load a case file from YAML.

    Raises:
        OSError: If the file cannot be read
        MapConfigError: If the YAML is invalid or missing the rooms
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise MapConfigError(f"Could not parse case file {path}: {e}") from e

    if not isinstance(data, dict):
        raise MapConfigError(f"Case file {path} must contain a mapping")
    rooms = data.get("rooms")
    if not isinstance(rooms, dict):
        raise MapConfigError(f"Case file {path} has no 'rooms' mapping")

    logger.debug(f"Loaded case file {path}")
    return CaseFile(
        title=str(data.get("title") or path.stem),
        rooms=rooms,
        suspects=data.get("suspects") or {},
    )


def resolve_case(path: Optional[Union[str, Path]] = None) -> CaseFile:
    """Load the case at `path`, or the built-in mansion when no path is given."""
    if path:
        return load_case_file(path)
    return default_case()
