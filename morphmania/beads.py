"""Collectable beads: collision tests, the remaining count and the timer text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from morphmania.geometry import Vec3, dot, sub

STANDARD_THRESHOLD = 2.0
ANIMATED_THRESHOLD = 6.5
DEFAULT_EPS = 0.1


def bead_hit(character_pos: Sequence[float], bead_pos: Sequence[float],
             animated: bool = False, eps: float = DEFAULT_EPS) -> bool:
    """Whether a character at ``character_pos`` touches a bead at ``bead_pos``.

    The squared distance is compared with a threshold that is larger for
    animated characters, whose origin sits further from the bead.
    """
    diff = sub(character_pos, bead_pos)
    threshold = (ANIMATED_THRESHOLD if animated else STANDARD_THRESHOLD) + eps
    return abs(dot(diff, diff)) <= threshold


def format_time(game_time: float) -> str:
    """Game time with two decimal places, truncated rather than rounded."""
    text = f"{game_time:f}"
    point = text.find(".")
    if point < 0:
        return text
    return text[:point + 3]


@dataclass
class BeadField:
    """The beads of a level and which of them are still to be collected."""

    positions: List[Vec3]
    included: List[bool] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.positions = [tuple(float(c) for c in p) for p in self.positions]
        if not self.included:
            self.included = [True] * len(self.positions)
        elif len(self.included) != len(self.positions):
            raise ValueError("one inclusion flag is needed for every bead")

    @property
    def num_beads(self) -> int:
        """Number of beads not yet collected."""
        return sum(self.included)

    @property
    def won(self) -> bool:
        """True once every bead has been collected."""
        return self.num_beads == 0

    def collide(self, character_pos: Sequence[float], animated: bool = False,
                eps: float = DEFAULT_EPS) -> Optional[int]:
        """Collect the first remaining bead the character touches.

        Returns the index of the collected bead, or None if none was touched.
        At most one bead is collected per call.
        """
        for index, (position, included) in enumerate(zip(self.positions, self.included)):
            if not included:
                continue
            if bead_hit(character_pos, position, animated, eps):
                self.included[index] = False
                return index
        return None