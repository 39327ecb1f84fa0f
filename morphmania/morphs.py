"""The playable morphs and how keyboard controls turn into a local move."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from morphmania.geometry import Vec3, normalize


class Morph(enum.IntEnum):
    """The shapes the player can take."""

    WORM = 0
    CAT = 1
    RECTANGLE = 2
    BLOB = 3


@dataclass
class Controls:
    """Which movement keys are currently held."""

    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False


def _planar_direction(controls: Controls, direction: float) -> Vec3:
    x = 0.0
    y = 0.0
    if controls.left and not controls.right:
        x = -1.0 * direction
    if not controls.left and controls.right:
        x = 1.0 * direction
    if controls.backward and not controls.forward:
        y = -1.0
    if not controls.backward and controls.forward:
        y = 1.0
    return (x, y, 0.0)


def _scaled_unit(move: Vec3, speed: float) -> Vec3:
    if move == (0.0, 0.0, 0.0):
        return move
    u = normalize(move)
    return (u[0] * speed, u[1] * speed, u[2] * speed)


def compute_move(morph, controls: Controls, elapsed: float, is_flipped: bool = False,
                 worm_phase: float = 0.0, accel: float = 1.0) -> Vec3:
    """Player-local move for one frame.

    ``worm_phase`` is the worm crawl animation position (sideways moves are
    only allowed near the start or end of the cycle); ``accel`` scales the
    cat's speed. Raises ValueError for an unknown morph.
    """
    morph = Morph(morph)
    direction = -1.0 if is_flipped else 1.0

    if morph is Morph.WORM:
        step = 0.0
        sideways = 0.0
        if controls.forward:
            step += 1.0
        if controls.backward:
            step -= 1.0
        if worm_phase <= 0.2 or worm_phase >= 0.8:
            if controls.left:
                sideways -= 1.0 * direction
            if controls.right:
                sideways += 1.0 * direction
        if step != 0.0:
            step = step * 2.5 * elapsed
            sideways = 0.0
        if sideways != 0.0:
            sideways = sideways * 12.0 * elapsed
            step = 0.0
        return (sideways, step, 0.0)

    move = _planar_direction(controls, direction)
    if morph is Morph.CAT:
        return _scaled_unit(move, 4.0 * accel * elapsed)
    if morph is Morph.RECTANGLE:
        return _scaled_unit(move, 2.0 * 10.0 * elapsed)
    return _scaled_unit(move, 6.0 * elapsed)