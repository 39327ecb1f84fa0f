# morphmania

The game logic of a small 3D puzzle game. The player shifts between four
forms (worm, cat, cube and blob) to collect beads scattered around a village.
The package holds the parts that need no window or GPU:

- `morphmania.geometry`: vector helpers on 3-tuples (`add`, `sub`, `scale`,
  `dot`, `cross`, `length`, `normalize`, `mix`) and a `Quat` rotation type
  with `angle_axis`, `rotation_between`, `rotate`, `columns` and `*` for
  composing rotations or rotating a vector.
- `morphmania.walkmesh`: `WalkPoint`, `barycentric_weights` and `WalkMesh`.
  A `WalkMesh` finds the nearest walk point to a position, takes a step inside
  one triangle (`walk_in_triangle` returns the end point and the fraction of
  the step taken), crosses an edge into the neighbouring triangle
  (`cross_edge` returns the new point and a `Quat`, or `None` at a boundary
  or, for every morph but the cube, where the floor changes height), and
  reads back world positions and normals.
- `morphmania.walkmeshes`: `IndexEntry` and `WalkMeshes.from_index`, which
  splits shared vertex, normal, triangle and name tables into named walk
  meshes; `lookup` retrieves one by name and raises `KeyError` if it is
  missing. Inconsistent tables raise `ValueError`.
- `morphmania.morphs`: `Morph`, `Controls` and `compute_move`, which turn the
  keys held down into a player-local step for each form.
- `morphmania.catjump`: `CatJump`, the cat's three-hop bouncing jump, upwards
  or, when the world is flipped, downwards.
- `morphmania.beads`: `bead_hit`, `BeadField` (collects at most one bead per
  `collide` call and counts those left) and `format_time`, which truncates a
  time to two decimals.
- `morphmania.sound`: a 48 kHz stereo `Mixer` producing blocks of 1024
  `(left, right)` frames, with ramped global volume, 2D equal-power panning
  and 3D panning driven by a `Listener`. `Ramp`, `Sample` and
  `PlayingSample` hold its state; `PlayingSample` has `set_volume`,
  `set_pan`, `set_position`, `set_half_volume_radius` and `stop`.
- `morphmania.textlayout`: `split_lines` and `TextLayout`, which wraps lines
  at spaces to fit between the margins, given a per-character advance
  function, and computes where each line's baseline goes.
- `morphmania.splash`: `SplashScreen`, the title screen's choice between
  tutorial and game, and `lerp` for colour fades.
- `morphmania.tutorial`: `TutorialFlow`, the staged tutorial: which keys work
  at each stage, the clock, and the prompts to show with their fade colours.

## Install

```
pip install .
```

## Examples

```python
from morphmania.walkmesh import WalkMesh

mesh = WalkMesh(
    vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)],
    normals=[(0, 0, 1)] * 3,
    triangles=[(0, 1, 2)],
)
at = mesh.nearest_walk_point((0.2, 0.2, 5.0))
print(mesh.to_world_point(at))          # about (0.2, 0.2, 0.0)

end, fraction = mesh.walk_in_triangle(at, (0.1, 0.0, 0.0))
```

```python
from morphmania.sound import Mixer, Sample

mixer = Mixer()
mixer.play(Sample([0.5] * 4800), 1.0, 0.0)
block = mixer.mix()   # 1024 (left, right) frames
```

```python
from morphmania.morphs import Controls, Morph, compute_move

move = compute_move(Morph.CAT, Controls(forward=True), elapsed=1 / 60)
```

## What it does not do

- It draws nothing and opens no window: there is no rendering of scenes,
  meshes or glyphs. `TextLayout` only computes line breaks and positions.
- It reads no files. Walk meshes are built from tables already in memory,
  and `Sample` takes a list of audio values rather than a sound file.
- The `Mixer` only produces frames; sending them to an audio device is up to
  the caller.
- A walk mesh moves a point within one triangle and over one edge at a time.
  Chaining those calls into a full move across the mesh, including sliding
  along walls, is left to the caller.

## Tests

```
pip install ".[test]"
pytest
```