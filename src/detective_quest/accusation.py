"""
Accusation Evaluator - judges the player's final accusation.

The verdict depends only on how many collected clues point at the accused:
walk the clue set in order, look each clue up in the suspect index, and
count the ones whose suspect matches the accused name (ignoring case).

    count >= 2  -> GUILTY
    count == 1  -> INSUFFICIENT_EVIDENCE
    count == 0  -> NO_EVIDENCE
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from detective_quest.clues import ClueSet
from detective_quest.config import GAME_CONFIG
from detective_quest.suspects import SuspectIndex


logger = logging.getLogger(__name__)


class InvalidAccusationError(ValueError):
    """Raised when the accused name is empty after trimming."""


class Verdict(Enum):
    GUILTY = "guilty"
    INSUFFICIENT_EVIDENCE = "insufficient_evidence"
    NO_EVIDENCE = "no_evidence"


@dataclass
class AccusationResult:
    """Outcome of an accusation."""
    accused: str
    count: int
    verdict: Verdict
    evidence: list[str] = field(default_factory=list)


def normalize_name(name: str) -> str:
    """
    Trim surrounding whitespace from an accused name.

    Raises:
        InvalidAccusationError: If nothing is left
    """
    normalized = (name or "").strip()
    if not normalized:
        raise InvalidAccusationError("The accused name cannot be empty")
    return normalized


def matching_clues(clue_set: ClueSet, index: SuspectIndex, accused: str) -> list[str]:
    """Get the collected clues (ascending) whose suspect is the accused."""
    target = normalize_name(accused).casefold()
    evidence = []
    for clue in clue_set.in_order():
        suspect = index.get(clue)
        if suspect is not None and suspect.casefold() == target:
            evidence.append(clue)
    return evidence


def score(clue_set: ClueSet, index: SuspectIndex, accused: str) -> int:
    """Count the collected clues pointing at the accused."""
    return len(matching_clues(clue_set, index, accused))


def classify(count: int, guilty_threshold: int = GAME_CONFIG.guilty_threshold) -> Verdict:
    """Map a clue count to a verdict."""
    if count >= guilty_threshold:
        return Verdict.GUILTY
    if count >= 1:
        return Verdict.INSUFFICIENT_EVIDENCE
    return Verdict.NO_EVIDENCE


def evaluate(clue_set: ClueSet, index: SuspectIndex, accused: str) -> AccusationResult:
    """
    Score an accusation and return the verdict.

    Args:
        clue_set: Clues collected during exploration
        index: Clue to suspect associations
        accused: Name typed by the player

    Returns:
        AccusationResult with the trimmed name, count, verdict and evidence

    Raises:
        InvalidAccusationError: If the name is empty or whitespace only
    """
    name = normalize_name(accused)
    evidence = matching_clues(clue_set, index, name)
    verdict = classify(len(evidence))
    logger.debug(f"Accused {name}: {len(evidence)} matching clue(s) -> {verdict.value}")
    return AccusationResult(accused=name, count=len(evidence), verdict=verdict, evidence=evidence)
