# sphfluid

sphfluid is a two-dimensional fluid simulation built on smoothed particle
hydrodynamics (SPH). Fluid particles interact through density, pressure and
viscosity kernels. Rigid boundaries are sampled with boundary particles and
can be static or moving. A pygame window draws the particles, coloured by
velocity, density or pressure.

## Installation

```
pip install .
```

To install the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Commands

```
sphfluid-demo [--width W] [--height H] [--particles N] [--seed S] [--frames F]
```

This opens a window with two square blocks of fluid falling onto a box, a
triangle and a circle. The defaults are a 1920x1080 window and 50000
particles. `--seed` makes the initial jitter reproducible. `--frames` stops
the demo after that many frames. With the default of 0 it runs until you
close the window.

```
sphfluid-sandbox [--width W] [--height H] [--seed S] [--frames F]
```

This opens an empty world where you pour fluid and draw boundaries:

- `Q` switches to fluid mode. A circle outline follows the pointer. A left
  click fills that circle with fluid. The mouse wheel changes its radius,
  which starts at 100 and never goes below 0.
- `E` switches to boundary mode. Then:
  - `Z` selects polygon. Each left click adds a vertex, and the last vertex
    follows the pointer. A right click closes the polygon and adds it to the
    simulation.
  - `X` selects box. The first left click sets one corner and the second sets
    the opposite corner.
  - `C` selects circle. The first left click sets the centre and the second
    sets the radius.
  - In box or circle mode, a right click cancels the shape.
  - The mouse wheel changes the compression, that is how densely the boundary
    is sampled. It moves in steps of 1/25 and stays within 0 to 1.
- Switching mode or shape with `Q`, `E`, `Z`, `X` or `C` abandons any shape
  you were drawing.
- `1`, `2` and `3` colour the fluid by speed (0–100), density (0–5000) or
  pressure (0–1e6) on the viridis colour map.

## Using the library

```python
from sphfluid.boundary import Boundary
from sphfluid.parameters import FluidParameters
from sphfluid.simulation import Simulation
from sphfluid.vector import Vector2f

params = FluidParameters(
    gravity=9.8,
    damping=0.95,
    rest_density=1000.0,
    stiffness=1e3,
    viscosity=1e6,
    smoothing_radius=8.0,
)
sim = Simulation(800.0, 600.0, params)
sim.add_particle_grid(Vector2f(400.0, 200.0), 40, 1600)

floor = Boundary(32.0)
floor.create_box(Vector2f(100.0, 450.0), Vector2f(700.0, 500.0), 0.5)
floor.activate()
sim.add_boundary(floor)

for _ in range(100):
    sim.update()

print(sim.num_particles, sim.positions[0], sim.pressure_at(Vector2f(400.0, 300.0)))
```

Notes:

- `positions`, `velocities`, `densities`, `pressures` and `num_particles` are
  read-only properties of `Simulation`.
- A boundary must be activated with `Boundary.activate()` before you add it.
  Otherwise `add_boundary` raises `ValueError`. Use `add_boundaries` to add
  several at once.
- A `Boundary` created without a mass is static. If you give it a mass (and
  optionally `initial_velocity`), the fluid pressure pushes it along without
  rotating it.
- `Simulation` takes an optional `rng` (a `random.Random`). It is used for the
  jitter in `add_particle_grid` and `add_particle_circle` and for the
  placement in `add_particles_random`.
- `set_down_direction` changes the direction of gravity. The vector is
  normalised.
- `pressure_at` sums the pressures of the particles in the 3x3 grid cells
  around a point. It uses the grid built during the most recent step.
- Particles that leave the `[0, width) x [0, height)` world are put back at
  the edge. Their velocity is reversed and scaled by `damping`.

### Timestep

By default each step uses a fixed timestep of `0.01`. If you pass a
`fixed_timestep` of zero or below, the step adapts to the fastest particle and
is clamped between `1e-6` and `1/120`.

### Modules

- `sphfluid.vector`: `Vector2f`, an immutable 2D vector. Vectors compare by
  magnitude.
- `sphfluid.gridcell`: `GridCell`, `cell_from_point`, `cell_from_index` and
  `morton_code`, which gives the cells' Z-order codes.
- `sphfluid.spatial`: `SpatialHash`, which maps grid cells to particle indices.
- `sphfluid.parameters`: `FluidParameters`.
- `sphfluid.boundary`: `Boundary`, with `create_polygon`, `create_box` and
  `create_circle`, and `combined_positions`.
- `sphfluid.simulation`: `Simulation`, the SPH solver.
- `sphfluid.colormap`: the `VIRIDIS`, `INFERNO`, `MAGMA` and `BLUES` colour
  maps, `sample_colormap`, `pressure_color`, and `pressure_gradient_strip`,
  which builds a triangle strip of coloured vertices.
- `sphfluid.rendering`: `ParticleLayer`, which plots particles as single
  pixels on a pygame surface.
- `sphfluid.demo` and `sphfluid.sandbox`: the two commands. `build_demo`
  builds the demo scene and `SandboxState` holds the sandbox's input handling,
  so both can be used without a window.

## Limitations

- The solver is pure Python and runs on a single thread. The default scenes of
  50000 particles are slow, so use `--particles` to try smaller demos.
- `pressure_gradient_strip` only produces vertex data. Neither command draws a
  pressure field overlay.
- Right-clicking in the sandbox's fluid mode does nothing. Fluid cannot be
  removed once it has been poured.