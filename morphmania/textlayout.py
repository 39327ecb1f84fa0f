"""Line splitting, spacing and word wrapping for on-screen text."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

Advance = Callable[[str], float]
Placement = Tuple[str, float, float]


def split_lines(text: str) -> List[str]:
    """Split ``text`` at newlines; a trailing newline adds no empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


class TextLayout:
    """Places and wraps lines of text for a font of a given pixel size.

    ``advance`` gives the horizontal advance of one character in 1/64 pixel
    units at scale 1.0.
    """

    def __init__(self, font_size: int, advance: Advance,
                 drawable_size: Sequence[float] = (0, 0),
                 margin_percent: float = 0.04,
                 space_between_lines: float = 5.0):
        self.font_size = font_size
        self.advance = advance
        self.drawable_size = (drawable_size[0], drawable_size[1])
        self.margin_percent = margin_percent
        self.space_between_lines = space_between_lines

    @property
    def x_start(self) -> float:
        return self.drawable_size[0] * self.margin_percent

    @property
    def x_end(self) -> float:
        return self.drawable_size[0] * (1.0 - self.margin_percent)

    def get_screen_pos(self, rel_pos: Sequence[float]) -> Tuple[float, float]:
        """Convert a position relative to the drawable into pixels."""
        return (rel_pos[0] * self.drawable_size[0], rel_pos[1] * self.drawable_size[1])

    def line_spacing(self, scale: float) -> float:
        """Vertical distance between consecutive baselines."""
        return self.font_size * scale + self.space_between_lines

    def line_origins(self, lines: Sequence[str], x: float, y: float,
                     scale: float) -> List[Placement]:
        """Baseline origins of ``lines``, the last line sitting at ``y``."""
        spacing = self.line_spacing(scale)
        count = len(lines)
        return [(line, x, y + (count - 1 - i) * spacing) for i, line in enumerate(lines)]

    def _break_at(self, text: str, scale: float) -> Optional[int]:
        """Index of the space to break at, or None if ``text`` fits."""
        current = self.x_start
        last_space = 0
        limit = self.x_end
        for i, ch in enumerate(text):
            current += self.advance(ch) / 64.0 * scale
            if current > limit:
                return last_space
            if ch == " ":
                last_space = i
        return None

    def wrap_line(self, text: str, scale: float) -> str:
        """Insert newlines into ``text`` so each piece fits between the margins."""
        pieces: List[str] = []
        rest = text
        while rest:
            cut = self._break_at(rest, scale)
            if cut is None:
                pieces.append(rest)
                return "\n".join(pieces)
            pieces.append(rest[:cut])
            rest = rest[cut + 1:]
        pieces.append("")
        return "\n".join(pieces)

    def wrap_line_vector(self, lines: Sequence[str], scale: float) -> List[str]:
        """Wrap the last of ``lines``, returning a new list with its pieces."""
        result = list(lines)
        if not result:
            return result
        while True:
            line = result[-1]
            cut = self._break_at(line, scale)
            if cut is None:
                return result
            result[-1] = line[:cut]
            result.append(line[cut + 1:])

    def wrap_text(self, text: str, scale: float) -> List[str]:
        """Split ``text`` at newlines and wrap every line."""
        wrapped: List[str] = []
        for line in split_lines(text):
            wrapped.extend(self.wrap_line_vector([line], scale))
        return wrapped

    def wrapped_layout(self, text: str, y: float, scale: float,
                       top_origin: bool = False) -> List[Placement]:
        """Wrap ``text`` and place it at the left margin.

        With ``top_origin`` the ``y`` offset is measured down from the top of
        the drawable and the result is kept within the drawable.
        """
        lines = self.wrap_text(text, scale)
        if top_origin:
            height = self.drawable_size[1]
            y = height - y - len(lines) * self.line_spacing(scale)
            if y < 0:
                y = 0.0
            if y > height:
                y = float(height)
        return self.line_origins(lines, self.x_start, y, scale)