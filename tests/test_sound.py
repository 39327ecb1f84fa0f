import math

import pytest

from morphmania.geometry import dot, length
from morphmania.sound import (
    MIX_SAMPLES,
    RAMP_STEP,
    Listener,
    Mixer,
    Ramp,
    Sample,
    compute_pan_from_listener_and_position,
    compute_pan_weights,
    step_direction_ramp,
    step_position_ramp,
    step_value_ramp,
)


def test_ramp_set_immediate_and_ramped():
    r = Ramp(1.0)
    assert r.target == 1.0
    r.set(3.0, 0.0)
    assert (r.value, r.target, r.ramp) == (3.0, 3.0, 0.0)
    r.set(5.0, 0.5)
    assert (r.value, r.target, r.ramp) == (3.0, 5.0, 0.5)


def test_step_value_ramp_moves_and_snaps():
    r = Ramp(0.0)
    r.set(1.0, 2 * RAMP_STEP)
    step_value_ramp(r)
    assert r.value == pytest.approx(0.5)
    assert r.ramp == pytest.approx(RAMP_STEP)
    r.ramp = RAMP_STEP / 2
    step_value_ramp(r)
    assert r.value == 1.0
    assert r.ramp == 0.0


def test_step_position_ramp_moves_towards_target():
    r = Ramp((0.0, 0.0, 0.0))
    r.set((2.0, 4.0, 0.0), 2 * RAMP_STEP)
    step_position_ramp(r)
    assert r.value == pytest.approx((1.0, 2.0, 0.0))
    step_position_ramp(r)
    step_position_ramp(r)
    assert r.value == (2.0, 4.0, 0.0)


def test_step_direction_ramp_keeps_unit_length():
    r = Ramp((1.0, 0.0, 0.0))
    r.set((0.0, 1.0, 0.0), 4 * RAMP_STEP)
    previous = dot(r.value, r.target)
    step_direction_ramp(r)
    assert length(r.value) == pytest.approx(1.0)
    assert dot(r.value, r.target) > previous
    for _ in range(5):
        step_direction_ramp(r)
    assert r.value == (0.0, 1.0, 0.0)


@pytest.mark.parametrize("pan", [-1.0, -0.3, 0.0, 0.7, 1.0])
def test_pan_weights_equal_power(pan):
    left, right = compute_pan_weights(pan)
    assert left * left + right * right == pytest.approx(1.0)


def test_pan_weights_extremes_and_clamp():
    assert compute_pan_weights(-1.0) == pytest.approx((1.0, 0.0), abs=1e-7)
    assert compute_pan_weights(1.0) == pytest.approx((0.0, 1.0), abs=1e-7)
    assert compute_pan_weights(5.0) == compute_pan_weights(1.0)
    left, right = compute_pan_weights(0.0)
    assert left == pytest.approx(right)


def test_3d_pan_at_listener_position():
    left, right = compute_pan_from_listener_and_position(
        (1.0, 2.0, 3.0), (1.0, 0.0, 0.0), (1.0, 2.0, 3.0), 1.0)
    assert left == right == pytest.approx(math.sqrt(2.0))


def test_3d_pan_half_volume_at_radius():
    left, right = compute_pan_from_listener_and_position(
        (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (3.0, 0.0, 0.0), 3.0)
    assert left == pytest.approx(0.0, abs=1e-7)
    assert right == pytest.approx(0.5)


def test_3d_pan_infinite_radius_no_attenuation():
    left, right = compute_pan_from_listener_and_position(
        (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 10.0, 0.0), math.inf)
    assert left * left + right * right == pytest.approx(1.0)
    assert left == pytest.approx(right)


def test_sample_rejects_empty():
    with pytest.raises(ValueError):
        Sample([])


def test_mix_constant_sample_centre_pan():
    mixer = Mixer()
    sample = Sample([1.0] * (2 * MIX_SAMPLES))
    playing = mixer.play(sample)
    block = mixer.mix()
    assert len(block) == MIX_SAMPLES
    expected = compute_pan_weights(0.0)
    assert block[0] == pytest.approx(expected)
    assert block[-1] == pytest.approx(expected)
    assert playing in mixer.playing_samples
    mixer.mix()
    assert playing.stopped
    assert mixer.playing_samples == ()


def test_mix_short_sample_leaves_silence():
    mixer = Mixer()
    mixer.play(Sample([1.0] * 10), pan=-1.0)
    block = mixer.mix()
    assert block[9][0] == pytest.approx(1.0)
    assert block[10] == (0.0, 0.0)
    assert mixer.playing_samples == ()


def test_loop_keeps_playing():
    mixer = Mixer()
    playing = mixer.loop(Sample([0.5, -0.5, 0.25]))
    for _ in range(3):
        block = mixer.mix()
    assert not playing.stopped
    assert playing in mixer.playing_samples
    assert block[0][0] != 0.0


def test_stop_removes_sample():
    mixer = Mixer()
    playing = mixer.loop(Sample([1.0] * 4))
    playing.stop()
    assert playing.stopping
    assert playing.volume.target == 0.0
    mixer.mix()
    assert playing.stopped
    assert mixer.playing_samples == ()


def test_stop_again_shortens_ramp():
    mixer = Mixer()
    playing = mixer.loop(Sample([1.0]))
    playing.stop(1.0)
    playing.stop(0.5)
    assert playing.volume.ramp == 0.5
    playing.stop(2.0)
    assert playing.volume.ramp == 0.5


def test_set_volume_ignored_when_stopping():
    mixer = Mixer()
    playing = mixer.loop(Sample([1.0]))
    playing.set_volume(0.5, 0.0)
    assert playing.volume.value == 0.5
    playing.stop(1.0)
    playing.set_volume(1.0, 0.0)
    assert playing.volume.target == 0.0


def test_pan_and_position_modes():
    mixer = Mixer()
    flat = mixer.play(Sample([1.0]), 1.0, 0.0)
    spatial = mixer.play_3d(Sample([1.0]), 1.0, (1.0, 0.0, 0.0))
    flat.set_position((5.0, 5.0, 5.0), 0.0)
    assert all(math.isnan(c) for c in flat.position.value)
    flat.set_pan(0.5, 0.0)
    assert flat.pan.value == 0.5
    spatial.set_pan(0.5, 0.0)
    assert math.isnan(spatial.pan.value)
    spatial.set_position((2.0, 0.0, 0.0), 0.0)
    spatial.set_half_volume_radius(4.0, 0.0)
    assert spatial.position.value == (2.0, 0.0, 0.0)
    assert spatial.half_volume_radius.value == 4.0


def test_stop_all_samples():
    mixer = Mixer()
    a = mixer.loop(Sample([1.0]))
    b = mixer.loop_3d(Sample([1.0]), 1.0, (0.0, 1.0, 0.0))
    mixer.stop_all_samples()
    assert a.stopping and b.stopping
    mixer.mix()
    assert mixer.playing_samples == ()


def test_global_volume_scales_output():
    mixer = Mixer()
    mixer.set_volume(0.0, 0.0)
    mixer.loop(Sample([1.0]))
    block = mixer.mix()
    assert all(frame == (0.0, 0.0) for frame in block)


def test_listener_set_position_right():
    listener = Listener()
    listener.set_position_right((1.0, 2.0, 3.0), (0.0, 0.0, 0.0), 0.0)
    assert listener.position.value == (1.0, 2.0, 3.0)
    assert listener.right.value == (1.0, 0.0, 0.0)
    listener.set_position_right((0.0, 0.0, 0.0), (0.0, 3.0, 0.0), 0.0)
    assert listener.right.value == pytest.approx((0.0, 1.0, 0.0))