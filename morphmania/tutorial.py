"""The tutorial's staged walk-through: key handling, timing and prompts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from morphmania.morphs import Controls, Morph
from morphmania.splash import Color, lerp

GAME = "game"

INTRO_TEXT = (
    "Welcome to Morphology Mania. Inspired by the East Asian folklore of shapeshifting, "
    "our character is lost in a foreign village and must embark on a quest to collect "
    "the magical beads that have the power to bring him home. To do so, he must morph "
    "into various shapes and sizes to avoid obstacles and unleash hidden abilities to "
    "make his way back to his village."
)

MAIN_TEXT_COLOR: Color = (1.0, 1.0, 1.0)
DARK_TEXT_COLOR: Color = (0.0, 0.0, 0.0)

# key, stage at which it works, seconds that must have passed, morph it selects
_MORPH_KEYS = {
    "1": (1, 16.0, Morph.WORM),
    "2": (2, 14.0, Morph.CAT),
    "3": (3, 16.0, Morph.RECTANGLE),
    "4": (4, 10.0, Morph.BLOB),
}

# (stage, shown after, shown before or None, text, fade offset)
_STAGE_PROMPTS = (
    (1, 2, 7, "Pan the world by clicking and moving around", 3),
    (1, 9, 13, "Press escape to stop panning", 10),
    (1, 15, None, "Press the 1 key to morph into a worm", 16),
    (2, 2, 9, "Use the WASD keys to move", 3),
    (2, 13, None, "Press the 2 key to morph back into a cat", 14),
    (3, 2, 7, "Each morph has unique movements and abilities", 3),
    (3, 9, 13, "The cat has a calculated jump sequence", 10),
    (3, 15, None, "Press the 3 key to morph into a cube", 16),
    (4, 2, 7, "The cube can scale surfaces", 3),
    (4, 9, None, "Press the 4 key to morph into the last character", 10),
    (5, 2, None, "Press the spacebar to send the blob through the floor", 3),
    (6, 2, 7, "You have now entered the inverted world", 3),
    (6, 9, 13, "Explore the village to find the 9 beads to bring you home!", 10),
)


def _fade(t: float) -> Color:
    return lerp(DARK_TEXT_COLOR, MAIN_TEXT_COLOR, t)


@dataclass
class TutorialFlow:
    """Progress through the tutorial stages.

    Stage 0 shows the introduction, stages 1 to 6 teach panning and each
    morph in turn, and stage 7 is the closing screen. ``next_mode`` becomes
    ``GAME`` when the player asks to start the game.
    """

    stage: int = 0
    time_elapsed: float = 0.0
    morph: Morph = Morph.CAT
    old_morph: Morph = Morph.CAT
    controls: Controls = field(default_factory=Controls)
    mouse_captured: bool = False
    just_flipped: bool = False
    is_flipped: bool = False
    next_mode: Optional[str] = None

    @property
    def movement_enabled(self) -> bool:
        """Whether WASD movement has been unlocked."""
        return self.stage > 2 or (self.stage == 2 and self.time_elapsed > 3)

    def _select_morph(self, key: str) -> None:
        stage, wait, target = _MORPH_KEYS[key]
        if self.stage == stage and self.time_elapsed > wait:
            if self.morph != target:
                self.old_morph = self.morph
            self.morph = target
            self.stage += 1
            self.time_elapsed = 0.0

    def _movement(self, key: str, pressed: bool) -> bool:
        if key in ("w", "s"):
            attr = "forward" if key == "w" else "backward"
            setattr(self.controls, attr, pressed)
            if pressed and self.morph == Morph.WORM:
                self.controls.left = False
                self.controls.right = False
            return True
        if key in ("a", "d"):
            setattr(self.controls, "left" if key == "a" else "right", pressed)
            return True
        return False

    def handle_key(self, key: str, pressed: bool) -> bool:
        """React to ``key`` going down (``pressed``) or up; returns True if used."""
        if not pressed and key in _MORPH_KEYS:
            self._select_morph(key)
            return True

        if self.movement_enabled and self._movement(key, pressed):
            return True

        if not pressed:
            return False

        if key == "space":
            if self.stage == 5 and self.time_elapsed > 3:
                if self.morph == Morph.BLOB:
                    self.just_flipped = True
                    self.is_flipped = not self.is_flipped
                self.stage += 1
                self.time_elapsed = 8.0
            return True

        if key == "return":
            if self.stage == 0 and self.time_elapsed > 5:
                self.stage += 1
                self.time_elapsed = 0.0
            elif self.stage == 7 or (self.stage == 6 and self.time_elapsed > 16):
                self.next_mode = GAME
            else:
                self.stage = 7
                self.time_elapsed = 15.0
            return True

        if key == "escape":
            if self.stage == 1 and self.time_elapsed > 10:
                self.mouse_captured = False
            return True

        return False

    def update(self, elapsed: float) -> Optional[str]:
        """Advance the tutorial clock; returns the mode to switch to, if any."""
        self.time_elapsed += elapsed
        return self.next_mode

    def prompts(self) -> List[Tuple[str, Color]]:
        """The instructions to show now, each with its faded-in colour."""
        t = self.time_elapsed
        if self.stage == 0:
            return [
                (INTRO_TEXT, _fade(t)),
                ("Press ENTER to continue", _fade(t - 5)),
            ]
        if self.stage == 7 or (self.stage == 6 and t > 15):
            return [("Press ENTER to start the game", _fade(t - 9))]

        shown = [("Press ENTER to skip to end of tutorial", _fade(t))]
        for stage, after, before, text, offset in _STAGE_PROMPTS:
            if self.stage != stage or not t > after:
                continue
            if before is not None and not t < before:
                continue
            shown.append((text, _fade(t - offset)))
        return shown