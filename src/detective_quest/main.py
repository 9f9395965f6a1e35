#!/usr/bin/env python
"""
Detective Quest
Main entry point for exploring the mansion and accusing a suspect.
"""

import logging
import sys
from typing import Callable, Optional

from dotenv import load_dotenv

from detective_quest.accusation import AccusationResult, InvalidAccusationError, Verdict
from detective_quest.config import get_case_file_path, is_debug_enabled
from detective_quest.exploration import Command, InvalidCommandError, Visit
from detective_quest.game_state import GameState, reset_game_state
from detective_quest.mansion import CaseFile, resolve_case
from detective_quest.rooms import MapConfigError


# Load environment variables
load_dotenv()

# DETECTIVE_DEBUG=1 shows what the core is doing (collections, lookups, verdicts)
logging.basicConfig(
    level=logging.DEBUG if is_debug_enabled() else logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


MOVE_LABELS = {
    Command.LEFT: "(l) Left",
    Command.RIGHT: "(r) Right",
    Command.EXIT: "(x) Exit the mansion",
}

VERDICT_MESSAGES = {
    Verdict.GUILTY: "{name} is the culprit!",
    Verdict.INSUFFICIENT_EVIDENCE: "Not enough evidence against {name}.",
    Verdict.NO_EVIDENCE: "No clue points to {name}.",
}

DEMO_COMMANDS = ["left", "up", "left", "left", "exit"]
DEMO_ACCUSED = "Mariana"


def make_input_port(
    prompt: str = "> ",
    reader: Optional[Callable[[str], str]] = None,
    on_eof: str = Command.EXIT.value,
) -> Callable[[], str]:
    """
    Wrap a line reader as an input port.

    End of input returns `on_eof` (an exit command by default) so the
    exploration loop always finishes.
    """
    def read_line() -> str:
        try:
            return (reader or input)(prompt)
        except EOFError:
            logger.debug(f"Input closed at prompt {prompt!r}")
            return on_eof
    return read_line


def scripted_port(commands: list[str]) -> Callable[[], str]:
    """Input port that replays a fixed list of commands, then exits."""
    remaining = list(commands)

    def read_command() -> str:
        command = remaining.pop(0) if remaining else Command.EXIT.value
        print(f"> {command}")
        return command
    return read_command


def print_visit(visit: Visit) -> None:
    """Show the player where they are and where they can go."""
    print(f"\n📍 You are in: {visit.room.name}")
    if visit.collected:
        print(f"🔍 Clue found: \"{visit.collected}\"")
    else:
        print("No clue in this room.")

    print("\nChoose a path:")
    for move in visit.moves:
        label = MOVE_LABELS[move]
        if move == Command.LEFT and visit.left_room:
            label += f" -> {visit.left_room.name}"
        elif move == Command.RIGHT and visit.right_room:
            label += f" -> {visit.right_room.name}"
        print(f"  {label}")


def print_invalid(error: InvalidCommandError) -> None:
    print(f"❌ Invalid choice. {error}")


def print_clues(clues: list[str]) -> None:
    """List the collected clues."""
    print("\n" + "=" * 40)
    print("📝 COLLECTED CLUES")
    print("=" * 40)
    if not clues:
        print("No clues collected.")
    for clue in clues:
        print(f"  - {clue}")


def print_verdict(result: AccusationResult) -> None:
    """Show the outcome of an accusation."""
    print(f"\nYou accused: {result.accused}")
    print(f"Related clues: {result.count}")
    for clue in result.evidence:
        print(f"  - {clue}")
    print(f"\n⚖️ VERDICT: {VERDICT_MESSAGES[result.verdict].format(name=result.accused)}")


def run_game(
    case: Optional[CaseFile] = None,
    read_command: Optional[Callable[[], str]] = None,
    read_accusation: Optional[Callable[[], str]] = None,
) -> GameState:
    """
    Play one investigation: explore, review the clues, accuse.

    Args:
        case: Case to play (defaults to the built-in mansion)
        read_command: Input port for exploration commands
        read_accusation: Returns the accused name

    Returns:
        The finished game state
    """
    game = reset_game_state(case)

    print("\n" + "=" * 60)
    print(f"🔍 DETECTIVE QUEST: {game.case.title.upper()} 🔍")
    print("=" * 60)

    game.explore(
        read_command or make_input_port(),
        on_visit=print_visit,
        on_invalid=print_invalid,
    )

    print_clues(game.collected_clues())

    accused = (read_accusation or make_input_port("\nName the suspect you accuse: ", on_eof=""))()
    try:
        result = game.make_accusation(accused)
    except InvalidAccusationError:
        print("❌ Invalid name. No accusation was made.")
    else:
        print_verdict(result)

    print("\nThanks for playing Detective Quest!")
    return game


def run_demo() -> GameState:
    """
    Run a scripted walk of the built-in mansion and a scripted accusation.
    """
    print("\n" + "=" * 60)
    print("🧪 SCRIPTED DEMO")
    print("=" * 60)

    def accuse() -> str:
        print(f"\nName the suspect you accuse: {DEMO_ACCUSED}")
        return DEMO_ACCUSED

    return run_game(read_command=scripted_port(DEMO_COMMANDS), read_accusation=accuse)


def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    if args and args[0] == "demo":
        run_demo()
        return
    if args and args[0] != "play":
        print("Usage: python -m detective_quest.main [play [case.yaml] | demo]")
        print("  play: explore the mansion interactively (default)")
        print("  demo: run a scripted investigation")
        return

    path = args[1] if len(args) > 1 else get_case_file_path()
    try:
        case = resolve_case(path)
        # Fail before the game starts if the case cannot be built
        case.build_room_map()
        case.build_suspect_index()
    except (MapConfigError, OSError) as e:
        print(f"❌ Error: could not load the case: {e}")
        sys.exit(1)

    run_game(case)


if __name__ == "__main__":
    main()
