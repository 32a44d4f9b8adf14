# slimefield

This is the game logic for a small third-person arena, written in plain Python.
The player runs, jumps and fires projectiles at wandering slimes. The package has
no dependencies, and it holds only the simulation. A renderer or input layer can
sit on top of it.

## Modules

- `slimefield.vecmath` has:
  - `Vec3`, an immutable vector with `+`, `-`, `*`, `dot`, `cross`, `length`
    and `normalized`.
  - 4×4 row-major matrices in a left-handed convention, built by `identity`,
    `multiply`, `scaling`, `translation`, `rotation_roll_pitch_yaw`,
    `rotation_axis`, `look_at_lh` and `perspective_fov_lh`. The last two raise
    `ValueError` on degenerate input.
  - `random_range`.
- `slimefield.camera` has `Camera`. It holds the view and projection matrices
  and the `eye`, `focus`, `up`, `front` and `right` vectors. Set them with
  `set_look_at` and `set_perspective_fov`.
- `slimefield.collision` has these functions:
  - `intersect_ray_vs_cylinder` returns a `RayHit` (`point`, `distance`), or
    `None` if the ray misses.
  - `intersect_sphere_vs_sphere`, `intersect_cylinder_vs_cylinder` and
    `intersect_sphere_vs_cylinder` return the pushed-out position, or `None`
    when the shapes do not touch.
- `slimefield.wav` has `parse_wav` (bytes) and `load_wav` (path). Both read
  RIFF/WAVE PCM into a `WaveData` (`format`, `data`). The `WaveFormat` has
  `channels`, `samples_per_sec`, `bits_per_sample`, `block_align` and
  `avg_bytes_per_sec`. 8-bit samples are converted to signed. Malformed input
  raises `WavError`.
- `slimefield.camera_controller` has `CameraController`, a mouse-look camera.
  It follows a target and reads a `VirtualCursor`. Each `update` re-centres
  the cursor. A cursor toggle key passed to `update` shows or hides the cursor.
- `slimefield.character` has `Character`, which covers gravity, ground contact
  at y = 0, friction, acceleration, turning, jumping, damage and invincibility
  time. Subclasses can override `on_landing`, `on_damaged` and `on_dead`.
- `slimefield.projectile` has `ProjectileStraight`, `ProjectileHoming` and
  `ProjectileManager`. The manager drops destroyed projectiles after each
  update.
- `slimefield.enemy` has `Enemy`, `EnemyManager` and `EnemySlime`:
  - `EnemyManager` pushes overlapping enemies apart.
  - A slime moves between the `SlimeState` values `WANDER`, `IDLE` and
    `ATTACK`, and fires at a player it can see.
- `slimefield.player` has `Player`. It is driven each frame by a `PadState`
  that holds the stick axes and the `Button` flags pressed. It covers:
  - moving relative to the camera;
  - double jumps;
  - straight and homing shots;
  - stomping and pushing enemies;
  - a ray test against slimes.

  An optional `hit_callback` receives the point where an enemy was hit.
- `slimefield.scene` has `Scene`, `SceneManager` and `SceneLoading`:
  - `SceneManager` switches scenes at the start of an update.
  - `SceneLoading` initialises the next scene on a background thread and hands
    over once that scene is ready.

## Example

```python
from slimefield.vecmath import Vec3
from slimefield.collision import intersect_ray_vs_cylinder, intersect_cylinder_vs_cylinder

hit = intersect_ray_vs_cylinder(Vec3(0, 0.5, -5), Vec3(0, 0, 1), Vec3(0, 0, 0), 0.5, 1.0)
if hit:
    print(hit.point, hit.distance)  # hits the side at z = -0.5, distance 4.5

pushed = intersect_cylinder_vs_cylinder(Vec3(0, 0, 0), 0.5, 2.0, Vec3(0.5, 0, 0), 0.5, 1.0)
print(pushed)  # the second cylinder moved to x = 1.0
```

This example reads a sound file:

```python
from slimefield.wav import load_wav

wave = load_wav("hit.wav")
print(wave.format.channels, wave.format.samples_per_sec, len(wave.data))
```

## What it does not do

The package does not do any of the following:

- open a window or draw anything;
- load models, sprites or effects;
- play sound (it only parses WAVE data);
- read a keyboard, mouse or game pad.

Input reaches it as `PadState` values, a toggle flag and `VirtualCursor`
positions. There is no command to start a game.

## Tests

```
pip install -e .[test]
pytest
```