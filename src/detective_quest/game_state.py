"""
Game State Management for Detective Quest

One game session owns everything a single investigation needs:
- The room map built from the case file (rooms lose their clues as they are explored)
- The clue set the player fills while exploring
- The suspect index used to judge the final accusation
- The exploration engine tracking where the player is

Game flow:
- Explore the mansion, collecting clues, until the player exits
- Review the collected clues (alphabetical order)
- Make exactly one accusation, which ends the game
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from detective_quest.accusation import AccusationResult, evaluate
from detective_quest.clues import ClueSet
from detective_quest.exploration import (
    Command,
    ExplorationEngine,
    ExplorationState,
    InvalidCommandError,
    Visit,
)
from detective_quest.mansion import CaseFile, default_case
from detective_quest.rooms import RoomMap
from detective_quest.suspects import SuspectIndex


logger = logging.getLogger(__name__)


@dataclass
class GameState:
    """Main game state manager."""
    case: CaseFile = field(default_factory=default_case)
    accusation: Optional[AccusationResult] = None
    game_over: bool = False

    def __post_init__(self):
        self.room_map: RoomMap = self.case.build_room_map()
        self.suspects: SuspectIndex = self.case.build_suspect_index()
        self.clues = ClueSet()
        self.engine = ExplorationEngine(self.room_map, self.clues)
        logger.debug(f"New game: {self.case.title} ({len(self.room_map)} rooms, {len(self.suspects)} indexed clues)")

    @property
    def exploring(self) -> bool:
        return not self.engine.exited

    def visit(self) -> Visit:
        """Collect and describe the player's current room."""
        return self.engine.visit()

    def move(self, command: Union[Command, str]) -> ExplorationState:
        """Apply one exploration command."""
        return self.engine.apply(command)

    def explore(
        self,
        read_command: Callable[[], str],
        on_visit: Optional[Callable[[Visit], None]] = None,
        on_invalid: Optional[Callable[[InvalidCommandError], None]] = None,
    ) -> ExplorationState:
        """Run the exploration loop until the player leaves the mansion."""
        return self.engine.run(read_command, on_visit=on_visit, on_invalid=on_invalid)

    def collected_clues(self) -> list[str]:
        """Get the collected clues in alphabetical order."""
        return list(self.clues.in_order())

    def make_accusation(self, accused: str) -> AccusationResult:
        """
        Accuse a suspect. This ends the game.

        Raises:
            ValueError: If the player is still exploring or has already accused
            InvalidAccusationError: If the name is empty
        """
        if self.exploring:
            raise ValueError("You must leave the mansion before making an accusation")
        if self.accusation is not None:
            raise ValueError("You can only make one accusation per game")

        result = evaluate(self.clues, self.suspects, accused)
        self.accusation = result
        self.game_over = True
        return result

    def get_game_summary(self) -> str:
        """Get a summary of the current game state."""
        summary = f"=== {self.case.title} ===\n"
        if self.exploring:
            summary += f"Location: {self.engine.current.name}\n"
        else:
            summary += "Location: outside the mansion\n"
        summary += f"Path: {' -> '.join(self.engine.path)}\n"
        summary += f"Clues collected: {len(self.clues)}\n"
        summary += f"Clues still hidden: {len(self.room_map.remaining_clues())}\n"

        if self.accusation:
            summary += (
                f"\nAccused: {self.accusation.accused} "
                f"({self.accusation.count} matching clue(s), {self.accusation.verdict.value})\n"
            )
        return summary

    def close(self) -> None:
        """Tear down the session's structures."""
        self.room_map.clear()
        self.clues.clear()
        self.suspects.clear()
        self.game_over = True


# Global game state instance
_game_state: Optional[GameState] = None


def get_game_state() -> GameState:
    """Get or create the global game state."""
    global _game_state
    if _game_state is None:
        _game_state = GameState()
    return _game_state


def reset_game_state(case: Optional[CaseFile] = None) -> GameState:
    """Reset the global game state, optionally with a different case."""
    global _game_state
    if _game_state is not None:
        _game_state.close()
    _game_state = GameState(case=case or default_case())
    return _game_state
