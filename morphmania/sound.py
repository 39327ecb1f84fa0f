"""Software audio mixer with ramped volume, stereo panning and 3D positioning.

Audio runs at 48kHz; each call to :meth:`Mixer.mix` produces one block of
stereo frames. The mixer only produces samples; sending them to a device is
left to the caller.
"""

from __future__ import annotations

import math
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from morphmania.geometry import Vec3, add, cross, dot, length, mix, normalize, scale, sub

AUDIO_RATE = 48000
MIX_SAMPLES = 1024
RAMP_STEP = MIX_SAMPLES / AUDIO_RATE
DEFAULT_RAMP = 1.0 / 60.0

_NAN = float("nan")
_NAN3: Vec3 = (_NAN, _NAN, _NAN)
_ZERO3: Vec3 = (0.0, 0.0, 0.0)


@dataclass
class Ramp:
    """A value that moves smoothly towards ``target`` over ``ramp`` seconds."""

    value: Any
    target: Any = None
    ramp: float = 0.0

    def __post_init__(self) -> None:
        if self.target is None:
            self.target = self.value

    def set(self, value: Any, ramp: float) -> None:
        """Head for ``value`` over ``ramp`` seconds; jump there if ``ramp <= 0``."""
        if ramp <= 0.0:
            self.value = value
            self.target = value
            self.ramp = 0.0
        else:
            self.target = value
            self.ramp = ramp


class Sample:
    """Mono 48kHz floating-point audio."""

    def __init__(self, data: Sequence[float]):
        self.data: List[float] = [float(x) for x in data]
        if not self.data:
            raise ValueError("a sample needs at least one audio value")


@dataclass(eq=False)
class PlayingSample:
    """Book-keeping for one sample that is currently playing.

    A sample plays in "2D" mode (``pan`` is a number, ``position`` is NaN)
    or "3D" mode (``pan`` is NaN, ``position`` and ``half_volume_radius``
    are set).
    """

    data: List[float]
    loop: bool = False
    volume: Ramp = field(default_factory=lambda: Ramp(1.0))
    pan: Ramp = field(default_factory=lambda: Ramp(_NAN))
    position: Ramp = field(default_factory=lambda: Ramp(_NAN3))
    half_volume_radius: Ramp = field(default_factory=lambda: Ramp(_NAN))
    i: int = 0
    stopping: bool = False
    stopped: bool = False
    _lock: Any = field(default_factory=threading.RLock, repr=False)

    @property
    def is_3d(self) -> bool:
        return math.isnan(self.pan.value)

    def set_volume(self, new_volume: float, ramp: float = DEFAULT_RAMP) -> None:
        """Change volume over ``ramp`` seconds; ignored once stopping."""
        with self._lock:
            if not self.stopping:
                self.volume.set(new_volume, ramp)

    def set_pan(self, new_pan: float, ramp: float = DEFAULT_RAMP) -> None:
        """Change panning (-1 left to 1 right); ignored for 3D samples."""
        if self.is_3d:
            return
        with self._lock:
            self.pan.set(new_pan, ramp)

    def set_position(self, new_position: Sequence[float], ramp: float = DEFAULT_RAMP) -> None:
        """Move a 3D sample; ignored for 2D samples."""
        if not self.is_3d:
            return
        with self._lock:
            self.position.set(tuple(float(c) for c in new_position), ramp)

    def set_half_volume_radius(self, new_radius: float, ramp: float = DEFAULT_RAMP) -> None:
        """Change the distance at which a 3D sample is at half volume; ignored for 2D."""
        if not self.is_3d:
            return
        with self._lock:
            self.half_volume_radius.set(new_radius, ramp)

    def stop(self, ramp: float = DEFAULT_RAMP) -> None:
        """Fade out over ``ramp`` seconds, after which the sample is dropped."""
        with self._lock:
            if not (self.stopping or self.stopped):
                self.stopping = True
                self.volume.target = 0.0
                self.volume.ramp = ramp
            else:
                self.volume.ramp = min(self.volume.ramp, ramp)


@dataclass(eq=False)
class Listener:
    """Position and right-pointing unit vector used to pan 3D samples."""

    position: Ramp = field(default_factory=lambda: Ramp(_ZERO3))
    right: Ramp = field(default_factory=lambda: Ramp((1.0, 0.0, 0.0)))
    _lock: Any = field(default_factory=threading.RLock, repr=False)

    def set_position_right(self, new_position: Sequence[float], new_right: Sequence[float],
                           ramp: float = DEFAULT_RAMP) -> None:
        """Move the listener; ``new_right`` is normalized (zero means +x)."""
        with self._lock:
            self.position.set(tuple(float(c) for c in new_position), ramp)
            if tuple(new_right) == _ZERO3:
                self.right.set((1.0, 0.0, 0.0), ramp)
            else:
                self.right.set(normalize(new_right), ramp)


def compute_pan_weights(pan: float) -> Tuple[float, float]:
    """Equal-power (left, right) weights for a pan in [-1, 1] (clamped)."""
    pan = max(-1.0, min(1.0, pan))
    ang = 0.5 * math.pi * (0.5 * (pan + 1.0))
    return math.cos(ang), math.sin(ang)


def compute_pan_from_listener_and_position(
    listener_position: Sequence[float],
    listener_right: Sequence[float],
    source_position: Sequence[float],
    source_half_radius: float,
) -> Tuple[float, float]:
    """(left, right) weights for a source heard by the listener."""
    to = sub(source_position, listener_position)
    distance = length(to)
    if distance == 0.0:
        w = math.sqrt(2.0)
        return w, w
    amt = dot(listener_right, to) / distance
    ang = 0.5 * math.pi * (0.5 * (amt + 1.0))
    if source_half_radius == 0.0:
        att = 0.0
    else:
        att = 1.0 / (1.0 + distance / source_half_radius)
    return math.cos(ang) * att, math.sin(ang) * att


def step_value_ramp(ramp: Ramp) -> None:
    """Advance a scalar ramp by one mix block."""
    if ramp.ramp < RAMP_STEP:
        ramp.value = ramp.target
        ramp.ramp = 0.0
    else:
        ramp.value += (RAMP_STEP / ramp.ramp) * (ramp.target - ramp.value)
        ramp.ramp -= RAMP_STEP


def step_position_ramp(ramp: Ramp) -> None:
    """Advance a 3D position ramp by one mix block."""
    if ramp.ramp < RAMP_STEP:
        ramp.value = ramp.target
        ramp.ramp = 0.0
    else:
        ramp.value = mix(ramp.value, ramp.target, RAMP_STEP / ramp.ramp)
        ramp.ramp -= RAMP_STEP


def step_direction_ramp(ramp: Ramp) -> None:
    """Advance a unit-direction ramp by one mix block, rotating towards the target."""
    if ramp.ramp < RAMP_STEP:
        ramp.value = ramp.target
        ramp.ramp = 0.0
        return
    target = ramp.target
    norm = cross(ramp.value, target)
    if norm == _ZERO3:
        tx, ty, tz = target
        if tx <= ty and tx <= tz:
            norm = (1.0, 0.0, 0.0)
        elif ty <= tz:
            norm = (0.0, 1.0, 0.0)
        else:
            norm = (0.0, 0.0, 1.0)
        norm = sub(norm, scale(target, dot(target, norm)))
    norm = normalize(norm)
    perp = cross(norm, target)

    angle = math.acos(max(-1.0, min(1.0, dot(ramp.value, target))))
    angle *= (ramp.ramp - RAMP_STEP) / ramp.ramp

    ramp.value = add(scale(target, math.cos(angle)), scale(perp, math.sin(angle)))
    ramp.ramp -= RAMP_STEP


class Mixer:
    """Mixes playing samples into stereo blocks of ``MIX_SAMPLES`` frames."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.volume = Ramp(1.0)
        self.listener = Listener(_lock=self._lock)
        self._playing: List[PlayingSample] = []

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold off mixing while the caller changes values directly."""
        with self._lock:
            yield

    @property
    def playing_samples(self) -> Tuple[PlayingSample, ...]:
        with self._lock:
            return tuple(self._playing)

    def _start(self, playing: PlayingSample) -> PlayingSample:
        with self._lock:
            self._playing.append(playing)
        return playing

    def _start_2d(self, sample: Sample, volume: float, pan: float, loop: bool) -> PlayingSample:
        return self._start(PlayingSample(
            data=sample.data, loop=loop, volume=Ramp(float(volume)),
            pan=Ramp(float(pan)), _lock=self._lock,
        ))

    def _start_3d(self, sample: Sample, volume: float, position: Sequence[float],
                  half_volume_radius: float, loop: bool) -> PlayingSample:
        return self._start(PlayingSample(
            data=sample.data, loop=loop, volume=Ramp(float(volume)),
            position=Ramp(tuple(float(c) for c in position)),
            half_volume_radius=Ramp(float(half_volume_radius)), _lock=self._lock,
        ))

    def play(self, sample: Sample, volume: float = 1.0, pan: float = 0.0) -> PlayingSample:
        """Play ``sample`` once in 2D mode."""
        return self._start_2d(sample, volume, pan, False)

    def play_3d(self, sample: Sample, volume: float, position: Sequence[float],
                half_volume_radius: float = math.inf) -> PlayingSample:
        """Play ``sample`` once, panned by its position relative to the listener."""
        return self._start_3d(sample, volume, position, half_volume_radius, False)

    def loop(self, sample: Sample, volume: float = 1.0, pan: float = 0.0) -> PlayingSample:
        """Play ``sample`` repeatedly in 2D mode."""
        return self._start_2d(sample, volume, pan, True)

    def loop_3d(self, sample: Sample, volume: float, position: Sequence[float],
                half_volume_radius: float = math.inf) -> PlayingSample:
        """Play ``sample`` repeatedly in 3D mode."""
        return self._start_3d(sample, volume, position, half_volume_radius, True)

    def stop_all_samples(self) -> None:
        """Fade out every playing sample."""
        with self._lock:
            for playing in self._playing:
                playing.stop()

    def set_volume(self, new_volume: float, ramp: float = DEFAULT_RAMP) -> None:
        """Change the global volume over ``ramp`` seconds."""
        with self._lock:
            self.volume.set(new_volume, ramp)

    def _pan_for(self, playing: PlayingSample, listener_pos: Vec3,
                 listener_right: Vec3) -> Tuple[float, float]:
        if playing.is_3d:
            return compute_pan_from_listener_and_position(
                listener_pos, listener_right,
                playing.position.value, playing.half_volume_radius.value,
            )
        return compute_pan_weights(playing.pan.value)

    def mix(self) -> List[Tuple[float, float]]:
        """Produce the next block of ``MIX_SAMPLES`` (left, right) frames."""
        with self._lock:
            buffer = [[0.0, 0.0] for _ in range(MIX_SAMPLES)]

            start_volume = self.volume.value
            start_position = self.listener.position.value
            start_right = self.listener.right.value

            step_value_ramp(self.volume)
            step_position_ramp(self.listener.position)
            step_direction_ramp(self.listener.right)

            end_volume = self.volume.value
            end_position = self.listener.position.value
            end_right = self.listener.right.value

            still_playing: List[PlayingSample] = []
            for playing in self._playing:
                start_l, start_r = self._pan_for(playing, start_position, start_right)
                if playing.is_3d:
                    step_position_ramp(playing.position)
                    step_value_ramp(playing.half_volume_radius)
                else:
                    step_value_ramp(playing.pan)
                gain = start_volume * playing.volume.value
                start_l *= gain
                start_r *= gain

                step_value_ramp(playing.volume)

                end_l, end_r = self._pan_for(playing, end_position, end_right)
                gain = end_volume * playing.volume.value
                end_l *= gain
                end_r *= gain

                pan_l, pan_r = start_l, start_r
                step_l = (end_l - start_l) / MIX_SAMPLES
                step_r = (end_r - start_r) / MIX_SAMPLES

                data = playing.data
                for frame in buffer:
                    value = data[playing.i]
                    frame[0] += pan_l * value
                    frame[1] += pan_r * value
                    playing.i += 1
                    if playing.i == len(data):
                        if playing.loop:
                            playing.i = 0
                        else:
                            break
                    pan_l += step_l
                    pan_r += step_r

                finished = playing.i >= len(data) or (
                    playing.stopping and playing.volume.value == 0.0
                )
                if finished:
                    playing.stopped = True
                else:
                    still_playing.append(playing)
            self._playing = still_playing

            return [(l, r) for l, r in buffer]