from enum import Enum
from typing import Optional, Tuple

from config import WORD_LENGTH


class Verdict(str, Enum):
    """Color of a single tile."""
    GREEN = "green"
    YELLOW = "yellow"
    GRAY = "gray"


# Normalize raw user input for comparison against the word list.
def normalize_guess(raw: Optional[str]) -> str:
    if not isinstance(raw, str):
        return ""
    return raw.strip().lower()


# Check a normalized guess has the shape of a playable word.
def is_well_formed(word: str) -> bool:
    return len(word) == WORD_LENGTH and word.isalpha()


# Evaluate a guess against the target word.
def evaluate_guess(guess: str, target: str) -> Tuple[Verdict, ...]:
    result = [Verdict.GRAY] * len(target)

# First pass: mark correct positions and count remaining letters
    target_counts = {}
    for i, (t, g) in enumerate(zip(target, guess)):
        if g == t:
            result[i] = Verdict.GREEN
        else:
            target_counts[t] = target_counts.get(t, 0) + 1

# Second pass: left to right, mark letters that are present but in wrong position
    for i, g in enumerate(guess):
        if result[i] == Verdict.GREEN:
            continue
        if target_counts.get(g, 0) > 0:
            result[i] = Verdict.YELLOW
            target_counts[g] -= 1

    return tuple(result)
