"""The cat morph's bouncing jump sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

CAT_SPEED = 4.0
RISE_DAMPING = 0.98
FALL_BOOST = 1.05
JUMPS_PER_CYCLE = 3


@dataclass
class CatJump:
    """Vertical state of the cat as it bounces through a cycle of jumps.

    Each cycle has three jumps of heights ``jump_dist[0..2]``. The cat slows
    while rising and speeds up while falling; when the world is flipped the
    jumps go downwards from ``floor_z`` instead of upwards.
    """

    jump_dist: Tuple[float, ...] = (2.0, 4.0, 8.0, 16.0)
    jump_num: int = 0
    jump_dir: float = 1.0
    floor_z: float = 0.0
    accel: float = 1.0
    curr_z: float = 0.0
    move_z: float = 0.0

    @property
    def height(self) -> float:
        """Height of the jump currently in progress."""
        return self.jump_dist[self.jump_num]

    @property
    def speed(self) -> float:
        """Current cat speed, used for both jumping and walking."""
        return CAT_SPEED * self.accel

    def reset(self) -> None:
        """Start a fresh jump cycle from the floor."""
        self.curr_z = self.floor_z
        self.accel = 1.0
        self.jump_num = 0
        self.jump_dir = 1.0

    def advance(self) -> None:
        """Move on to the next jump; a new cycle restores the initial speed."""
        self.jump_num = (self.jump_num + 1) % JUMPS_PER_CYCLE
        if self.jump_num == 0:
            self.accel = 1.0

    def step(self, elapsed: float, is_flipped: bool = False) -> float:
        """Advance the jump by ``elapsed`` seconds and return the new height."""
        speed = self.speed
        if self.jump_dir == 1.0:
            self.accel *= RISE_DAMPING
        else:
            self.accel *= FALL_BOOST
        self.move_z = self.jump_dir * speed * elapsed

        if is_flipped:
            self.curr_z -= self.move_z
            lowest = -self.height + self.floor_z
            if self.curr_z < lowest:
                extra = abs(self.curr_z - lowest)
                self.curr_z = lowest + extra
                self.jump_dir = -1.0
            if self.curr_z > self.floor_z:
                extra = abs(self.floor_z - self.curr_z)
                self.curr_z = self.floor_z - extra
                self.jump_dir = 1.0
                self.advance()
        else:
            self.curr_z += self.move_z
            highest = self.height + self.floor_z
            if self.curr_z > highest:
                extra = self.curr_z - highest
                self.curr_z = highest - extra
                self.jump_dir = -1.0
            if self.curr_z < self.floor_z:
                extra = self.floor_z - self.curr_z
                self.curr_z = self.floor_z + extra
                self.jump_dir = 1.0
                self.advance()
        return self.curr_z