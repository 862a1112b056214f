"""Difficulty policy: one table decides depth, pacing and randomness per level."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty: {value!r} (expected one of {choices})") from None


@dataclass(frozen=True)
class DifficultyProfile:
    depth: int
    # Pacing only: how long the opponent pretends to think before answering
    think_delay_s: float
    book_probability: float
    random_move_probability: float
    draw_adjustment: float


DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        depth=2,
        think_delay_s=0.5,
        book_probability=1.0,
        random_move_probability=0.3,
        draw_adjustment=0.2,
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        depth=3,
        think_delay_s=1.0,
        book_probability=0.8,
        random_move_probability=0.0,
        draw_adjustment=0.0,
    ),
    Difficulty.HARD: DifficultyProfile(
        depth=4,
        think_delay_s=2.0,
        book_probability=0.8,
        random_move_probability=0.0,
        draw_adjustment=-0.2,
    ),
}


def profile_for(difficulty: Union[str, Difficulty]) -> DifficultyProfile:
    return DIFFICULTY_PROFILES[Difficulty.parse(difficulty)]
