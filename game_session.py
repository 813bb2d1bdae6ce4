"""
Single-player game state.
"""
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, List, Optional, Tuple

from config import MAX_GUESSES, WORD_LENGTH
from game_logic import Verdict, evaluate_guess, is_well_formed, normalize_guess

WELCOME_MESSAGE = "New word every hour (UTC). Good luck!"


class GameState(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class OutcomeKind(str, Enum):
    """Result of submitting a guess."""
    CONTINUED = "continued"
    WON = "won"
    LOST = "lost"
    INVALID_FORMAT = "invalid_format"
    NOT_IN_WORD_LIST = "not_in_word_list"
    LOCKED = "locked"


@dataclass(frozen=True)
class GuessRecord:
    word: str
    verdicts: Tuple[Verdict, ...]


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    verdicts: Optional[Tuple[Verdict, ...]] = None
    target: Optional[str] = None

    @property
    def accepted(self) -> bool:
        """True if the guess was recorded on the board."""
        return self.kind in (OutcomeKind.CONTINUED, OutcomeKind.WON, OutcomeKind.LOST)


def status_message(outcome: Outcome) -> str:
    """Text shown to the player after a guess."""
    if outcome.kind == OutcomeKind.WON:
        return f"You got it! The word was '{outcome.target.upper()}'."
    if outcome.kind == OutcomeKind.LOST:
        return f"Out of tries. The word was '{outcome.target.upper()}'."
    if outcome.kind == OutcomeKind.INVALID_FORMAT:
        return f"Please enter a valid {WORD_LENGTH}-letter word."
    if outcome.kind == OutcomeKind.NOT_IN_WORD_LIST:
        return "Word not in list."
    if outcome.kind == OutcomeKind.LOCKED:
        return "This round is over. A new word arrives at the top of the hour."
    return ""


class GameSession:
    """
    One board: a target word, up to MAX_GUESSES guesses and a terminal state.

    The session never reads the clock or the word repository; the caller
    supplies the word set and calls reset() when the target changes.
    Calls must not overlap.
    """

    def __init__(self, target: str, word_set: AbstractSet[str]):
        self._word_set = word_set
        self._target = target
        self._history: List[GuessRecord] = []
        self._state = GameState.IN_PROGRESS

    @property
    def target(self) -> str:
        return self._target

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def cursor(self) -> int:
        """Index of the next row to fill."""
        return len(self._history)

    @property
    def guesses(self) -> Tuple[GuessRecord, ...]:
        return tuple(self._history)

    @property
    def remaining(self) -> int:
        if self.is_over:
            return 0
        return MAX_GUESSES - self.cursor

    @property
    def is_over(self) -> bool:
        return self._state != GameState.IN_PROGRESS

    def submit_guess(self, raw: Optional[str]) -> Outcome:
        if self.is_over:
            return Outcome(OutcomeKind.LOCKED)

        guess = normalize_guess(raw)
        if not is_well_formed(guess):
            return Outcome(OutcomeKind.INVALID_FORMAT)
        if guess not in self._word_set:
            return Outcome(OutcomeKind.NOT_IN_WORD_LIST)

        verdicts = evaluate_guess(guess, self._target)
        self._history.append(GuessRecord(guess, verdicts))

        if guess == self._target:
            self._state = GameState.WON
            return Outcome(OutcomeKind.WON, verdicts, self._target)
        if self.cursor >= MAX_GUESSES:
            self._state = GameState.LOST
            return Outcome(OutcomeKind.LOST, verdicts, self._target)
        return Outcome(OutcomeKind.CONTINUED, verdicts)

    def reset(self, new_target: str) -> None:
        """Start a fresh board for a new target word."""
        self._target = new_target
        self._history = []
        self._state = GameState.IN_PROGRESS
