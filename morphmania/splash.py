"""Title screen: choose between the tutorial and the game."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

Color = Tuple[float, float, float]

TITLE = "Morphology Mania"
TUTORIAL_LABEL = "1: Tutorial"
GAME_LABEL = "2: Game"

TUTORIAL = "tutorial"
GAME = "game"


def lerp(x: Sequence[float], y: Sequence[float], t: float) -> Color:
    """Linear blend ``x * (1 - t) + y * t`` of two colours."""
    return (
        x[0] * (1.0 - t) + y[0] * t,
        x[1] * (1.0 - t) + y[1] * t,
        x[2] * (1.0 - t) + y[2] * t,
    )


_GREY: Color = (0.5, 0.5, 0.5)
_WHITE: Color = (1.0, 1.0, 1.0)


@dataclass
class SplashScreen:
    """State of the title screen.

    ``level`` is -1 until a choice is made, then 0 for the tutorial or 1 for
    the game; one second after the choice the next mode is requested.
    """

    main_text_size: float = 0.5
    main_text_color: Color = _GREY
    highlight_text_color: Color = _WHITE
    tutorial_text_color: Color = _GREY
    game_text_color: Color = _GREY
    time_elapsed: float = 0.0
    level: int = -1
    press_elapsed: float = 0.0

    def handle_key(self, key: str) -> bool:
        """React to a released key; returns True if it was used."""
        if key == "1":
            self.tutorial_text_color = self.highlight_text_color
            self.level = 0
            return True
        if key == "2":
            self.game_text_color = self.highlight_text_color
            self.level = 1
            return True
        return False

    def update(self, elapsed: float) -> Optional[str]:
        """Advance time; returns TUTORIAL or GAME once the chosen mode should start."""
        if self.time_elapsed > 1:
            self.time_elapsed = 1.0
        else:
            self.time_elapsed += elapsed

        if self.level >= 0:
            self.press_elapsed += elapsed
            if self.press_elapsed > 1:
                if self.level == 0:
                    return TUTORIAL
                if self.level == 1:
                    return GAME
        return None

    def text_colors(self) -> Tuple[Tuple[str, Color], ...]:
        """Each line of menu text with the colour to draw it in."""
        return (
            (TITLE, self.highlight_text_color),
            (TUTORIAL_LABEL, lerp(self.main_text_color, self.tutorial_text_color,
                                  self.press_elapsed)),
            (GAME_LABEL, lerp(self.main_text_color, self.game_text_color,
                              self.press_elapsed)),
        )