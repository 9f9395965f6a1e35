"""
Exploration Engine - walks the player through the mansion.

The engine is a small state machine with two states: standing in a room, or
having left the mansion. Each step:

1. Arriving in a room collects its clue into the clue set (once per room;
   the room is emptied so later visits find nothing)
2. The available moves are offered: left/right when a room exists on that
   side, exit always
3. A command moves to the chosen child room, ends the exploration, or is
   rejected without changing anything

There are no parent links, so the player can never walk back up the tree.
Commands come from an input port: any zero-argument callable returning the
next line of input, which lets tests script a whole walk.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union

from detective_quest.clues import ClueSet
from detective_quest.rooms import MapConfigError, Room, RoomMap, Side


logger = logging.getLogger(__name__)


class Command(Enum):
    LEFT = "left"
    RIGHT = "right"
    EXIT = "exit"


COMMAND_ALIASES = {
    "left": Command.LEFT,
    "l": Command.LEFT,
    "right": Command.RIGHT,
    "r": Command.RIGHT,
    "exit": Command.EXIT,
    "x": Command.EXIT,
    "q": Command.EXIT,
    "quit": Command.EXIT,
}

COMMAND_SIDES = {
    Command.LEFT: Side.LEFT,
    Command.RIGHT: Side.RIGHT,
}


class InvalidCommandError(ValueError):
    """Raised for an unknown command or a direction with no room behind it."""


class ExplorationState(Enum):
    AT_ROOM = "at_room"
    EXITED = "exited"


@dataclass
class Visit:
    """What the player sees on arriving in (or staying in) a room."""
    room: Room
    collected: Optional[str] = None
    moves: list[Command] = field(default_factory=list)
    left_room: Optional[Room] = None
    right_room: Optional[Room] = None


def parse_command(text: str) -> Command:
    """
    Turn a line of player input into a command.

    Raises:
        InvalidCommandError: If the input is not a recognised command
    """
    command = COMMAND_ALIASES.get((text or "").strip().lower())
    if command is None:
        raise InvalidCommandError(f"Unknown command: '{text}'")
    return command


class ExplorationEngine:
    """Drives one walk through a room map, filling a clue set."""

    def __init__(self, room_map: RoomMap, clue_set: ClueSet):
        if room_map.root is None:
            raise MapConfigError("Cannot explore a map with no rooms")
        self.room_map = room_map
        self.clue_set = clue_set
        self.state = ExplorationState.AT_ROOM
        self.current: Optional[Room] = room_map.root
        self.path: list[str] = [room_map.root.name]
        self.clues_collected = 0

    @property
    def exited(self) -> bool:
        return self.state == ExplorationState.EXITED

    def available_moves(self) -> list[Command]:
        """Get the commands that are valid in the current room."""
        if self.exited:
            return []
        moves = [
            command for command, side in COMMAND_SIDES.items()
            if self.room_map.child(self.current, side) is not None
        ]
        moves.append(Command.EXIT)
        return moves

    def visit(self) -> Visit:
        """
        Collect the clue in the current room (if still there) and describe it.

        Raises:
            InvalidCommandError: If the exploration is already over
        """
        if self.exited:
            raise InvalidCommandError("The exploration is over")

        room = self.current
        collected = self.room_map.take_clue(room)
        if collected is not None:
            if self.clue_set.insert(collected):
                self.clues_collected += 1
            logger.debug(f"Collected '{collected}' in {room.name}")

        return Visit(
            room=room,
            collected=collected,
            moves=self.available_moves(),
            left_room=self.room_map.child(room, Side.LEFT),
            right_room=self.room_map.child(room, Side.RIGHT),
        )

    def apply(self, command: Union[Command, str]) -> ExplorationState:
        """
        Carry out a command.

        Args:
            command: A Command or a raw line of input

        Returns:
            The state after the command

        Raises:
            InvalidCommandError: If the command is unknown or not available
                here; the engine is left unchanged
        """
        if self.exited:
            raise InvalidCommandError("The exploration is over")
        if not isinstance(command, Command):
            command = parse_command(command)

        if command == Command.EXIT:
            logger.debug(f"Left the mansion from {self.current.name}")
            self.state = ExplorationState.EXITED
            self.current = None
            return self.state

        next_room = self.room_map.child(self.current, COMMAND_SIDES[command])
        if next_room is None:
            raise InvalidCommandError(f"There is no room to the {command.value} of {self.current.name}")

        self.current = next_room
        self.path.append(next_room.name)
        return self.state

    def run(
        self,
        read_command: Callable[[], str],
        on_visit: Optional[Callable[[Visit], None]] = None,
        on_invalid: Optional[Callable[[InvalidCommandError], None]] = None,
    ) -> ExplorationState:
        """
        Explore until the player exits.

        Args:
            read_command: Input port returning the next command line
            on_visit: Called with each Visit before a command is read
            on_invalid: Called when a command is rejected

        Returns:
            The final state (always EXITED)
        """
        while not self.exited:
            visit = self.visit()
            if on_visit:
                on_visit(visit)
            try:
                self.apply(read_command())
            except InvalidCommandError as e:
                logger.debug(f"Rejected command in {visit.room.name}: {e}")
                if on_invalid:
                    on_invalid(e)
        return self.state
