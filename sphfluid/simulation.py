"""Smoothed-particle hydrodynamics solver for a 2D weakly compressible fluid."""

from __future__ import annotations

import bisect
import math
import random
from typing import Iterable, Sequence

from .boundary import Boundary
from .gridcell import cell_from_point
from .parameters import FluidParameters
from .spatial import SpatialHash
from .vector import Vector2f

_ZERO = Vector2f(0.0, 0.0)
_GRID_SPACING_FACTOR = 2.5
_CIRCLE_SPACING_FACTOR = 1.5
_MIN_TIMESTEP = 1e-6
_MAX_TIMESTEP = 1.0 / 120.0


class Simulation:
    """A rectangular world of fluid particles interacting with boundaries.

    Particles live in ``[0, width) x [0, height)``. A positive
    ``fixed_timestep`` is used for every step; otherwise the step is chosen
    from the fastest particle.
    """

    def __init__(
        self,
        width: float,
        height: float,
        params: FluidParameters,
        down_dir: Vector2f = Vector2f(0.0, 1.0),
        fixed_timestep: float = 1e-2,
        rng: random.Random | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.params = params
        self.fixed_timestep = fixed_timestep
        self.current_step = 0
        self._down_dir = down_dir
        self._rng = rng if rng is not None else random.Random()

        h = params.smoothing_radius
        self._poly6_c = 4.0 / (math.pi * h**8)
        self._spiky_gc = -30.0 / (math.pi * h**5)
        self._viscosity_lc = 40.0 / (math.pi * h**5)

        self._position: list[Vector2f] = []
        self._velocity: list[Vector2f] = []
        self._mass: list[float] = []
        self._density: list[float] = []
        self._pressure: list[float] = []
        self._neighbors: list[list[int]] = []
        self._boundary_neighbors: list[list[int]] = []
        self._grid = SpatialHash()

        self._boundaries: list[Boundary] = []
        self._boundary_pos: list[Vector2f] = []
        self._boundary_volume: list[float] = []
        self._boundary_start: list[int] = []
        self._boundary_force: list[Vector2f] = []
        self._boundary_grid = SpatialHash()

    # Particle creation

    def _append_particle_values(self, amount: int) -> None:
        p = self.params
        particle_mass = p.rest_density * (4.0 / 9.0) * p.smoothing_radius**2
        self._velocity.extend([_ZERO] * amount)
        self._mass.extend([particle_mass] * amount)
        self._density.extend([p.rest_density] * amount)
        self._pressure.extend([0.0] * amount)
        self._neighbors.extend([] for _ in range(amount))
        self._boundary_neighbors.extend([] for _ in range(amount))

    def add_particle_grid(
        self, center: Vector2f, grid_width: int, amount: int
    ) -> None:
        """Add ``amount`` jittered particles in rows of ``grid_width`` around ``center``."""
        spacing = self.params.smoothing_radius / _GRID_SPACING_FACTOR
        grid_height = amount / grid_width
        self._append_particle_values(amount)

        left = center.x - spacing * grid_width / 2.0
        top = center.y - spacing * grid_height / 2.0
        for i in range(amount):
            row, column = divmod(i, grid_width)
            x = left + self._rng.uniform(0.0, spacing) + spacing * column
            y = top + self._rng.uniform(0.0, spacing) + spacing * row
            self._position.append(Vector2f(x, y))

    def add_particles_random(
        self, lower: Vector2f, upper: Vector2f, amount: int
    ) -> None:
        """Add ``amount`` particles placed uniformly in the box ``lower``..``upper``."""
        self._append_particle_values(amount)
        for _ in range(amount):
            x = self._rng.uniform(lower.x, upper.x)
            y = self._rng.uniform(lower.y, upper.y)
            self._position.append(Vector2f(x, y))

    def add_particle_circle(self, origin: Vector2f, radius: float) -> None:
        """Fill a disc of ``radius`` around ``origin`` with jittered particles."""
        spacing = self.params.smoothing_radius / _CIRCLE_SPACING_FACTOR
        sq_radius = radius * radius
        amount = 0
        x = 0.0
        while x < radius:
            y = 0.0
            while y < radius:
                if x * x + y * y <= sq_radius:
                    px = origin.x + self._rng.uniform(0.0, spacing)
                    py = origin.y + self._rng.uniform(0.0, spacing)
                    self._position.extend(
                        (
                            Vector2f(px + x, py + y),
                            Vector2f(px - x, py + y),
                            Vector2f(px - x, py - y),
                            Vector2f(px + x, py - y),
                        )
                    )
                    amount += 4
                y += spacing
            x += spacing
        self._append_particle_values(amount)

    # Boundaries

    def add_boundary(self, boundary: Boundary) -> None:
        """Register an activated boundary with the simulation."""
        if len(boundary.volumes) != boundary.num_particles:
            raise ValueError("boundary must be activated before it is added")
        self._boundaries.append(boundary)
        self._boundary_start.append(len(self._boundary_pos))
        self._boundary_pos.extend(boundary.positions)
        self._boundary_volume.extend(boundary.volumes)
        self._boundary_force.append(_ZERO)

    def add_boundaries(self, boundaries: Iterable[Boundary]) -> None:
        """Register several activated boundaries, in order."""
        for boundary in boundaries:
            self.add_boundary(boundary)

    # Stepping

    def update(self) -> None:
        """Advance the simulation by one time step."""
        if not self._position:
            return
        dt = self._timestep()
        self._find_neighbors()
        self._apply_non_pressure_force(dt)
        self._calculate_density(dt)
        self._calculate_pressure()
        self._apply_pressure_force(dt)
        self._apply_force_to_boundaries(dt)
        self._apply_world_boundary()
        self.current_step += 1

    def _timestep(self) -> float:
        if self.fixed_timestep > 0.0:
            return self.fixed_timestep
        v_max = max(v.magnitude() for v in self._velocity)
        step = 0.4 * 2.0 * self.params.smoothing_radius / (v_max + 1e-6)
        return min(max(step, _MIN_TIMESTEP), _MAX_TIMESTEP)

    def _sort_z_index(self) -> None:
        h = self.params.smoothing_radius
        keys = [cell_from_point(p, h).z_order for p in self._position]
        order = sorted(range(len(keys)), key=keys.__getitem__)
        self._position = [self._position[i] for i in order]
        self._velocity = [self._velocity[i] for i in order]
        self._mass = [self._mass[i] for i in order]
        self._density = [self._density[i] for i in order]
        self._pressure = [self._pressure[i] for i in order]

    def _build_grids(self) -> None:
        h = self.params.smoothing_radius
        self._grid.clear()
        for index, position in enumerate(self._position):
            self._grid.add(cell_from_point(position, h), index)
        self._boundary_grid.clear()
        for index, position in enumerate(self._boundary_pos):
            self._boundary_grid.add(cell_from_point(position, h), index)

    def _find_neighbors(self) -> None:
        h = self.params.smoothing_radius
        sq_h = self.params.sq_smoothing_radius
        self._sort_z_index()
        self._build_grids()

        def within(a: Vector2f, b: Vector2f) -> bool:
            r = a - b
            return r.dot(r) <= sq_h

        self._neighbors = []
        self._boundary_neighbors = []
        for position in self._position:
            center = cell_from_point(position, h)
            self._neighbors.append(
                [
                    j
                    for j in self._grid.neighborhood(center)
                    if within(position, self._position[j])
                ]
            )
            self._boundary_neighbors.append(
                [
                    k
                    for k in self._boundary_grid.neighborhood(center)
                    if within(position, self._boundary_pos[k])
                ]
            )

    def _integrate(self, forces: Sequence[Vector2f], dt: float) -> None:
        self._velocity = [
            v + dt * f / m for v, f, m in zip(self._velocity, forces, self._mass)
        ]
        self._position = [p + dt * v for p, v in zip(self._position, self._velocity)]

    def _apply_non_pressure_force(self, dt: float) -> None:
        p = self.params
        h = p.smoothing_radius
        gravity = p.gravity * self._down_dir
        forces = []
        for i, (pos, vel, mass) in enumerate(
            zip(self._position, self._velocity, self._mass)
        ):
            v_force = _ZERO
            for j in self._neighbors[i]:
                volume = self._mass[j] / self._density[j]
                dist = (pos - self._position[j]).magnitude()
                lap = self._viscosity_laplacian(dist, h)
                v_force = v_force + volume * (self._velocity[j] - vel) * lap

            vb_force = _ZERO
            for k in self._boundary_neighbors[i]:
                dist = (pos - self._boundary_pos[k]).magnitude()
                lap = self._viscosity_laplacian(dist, h)
                vb_force = vb_force + self._boundary_volume[k] * (-vel) * lap

            forces.append(
                gravity * mass + v_force * p.viscosity + vb_force * p.viscosity
            )
        self._integrate(forces, dt)

    def _calculate_density(self, dt: float) -> None:
        p = self.params
        h = p.smoothing_radius
        densities = []
        for i, (pos, vel) in enumerate(zip(self._position, self._velocity)):
            density = 0.0
            for j in self._neighbors[i]:
                rij = pos - self._position[j]
                influence = self._poly6(rij.magnitude(), h)
                vel_diff = vel - self._velocity[j]
                grad = self._poly6_gradient(rij, h)
                density += self._mass[j] * influence + dt * vel_diff.dot(grad)
            for k in self._boundary_neighbors[i]:
                dist = (pos - self._boundary_pos[k]).magnitude()
                density += (
                    p.rest_density * self._boundary_volume[k] * self._poly6(dist, h)
                )
            densities.append(density)
        self._density = densities

    def _calculate_pressure(self) -> None:
        p = self.params
        self._pressure = [
            p.stiffness * ((d / p.rest_density) ** 7 - 1.0) for d in self._density
        ]

    def _boundary_owner(self, k: int) -> int:
        return bisect.bisect_right(self._boundary_start, k) - 1

    def _apply_pressure_force(self, dt: float) -> None:
        p = self.params
        h = p.smoothing_radius
        p_rho = [pr / (d * d) for pr, d in zip(self._pressure, self._density)]

        forces = []
        for i, (pos, mass) in enumerate(zip(self._position, self._mass)):
            total = _ZERO
            for j in self._neighbors[i]:
                if j == i:
                    continue
                grad = self._spiky_gradient(pos - self._position[j], h)
                total = total + self._mass[j] * (p_rho[i] + p_rho[j]) * grad
            force = -mass * total

            total = _ZERO
            for k in self._boundary_neighbors[i]:
                grad = self._spiky_gradient(pos - self._boundary_pos[k], h)
                boundary_mass = p.rest_density * self._boundary_volume[k]
                total = total + boundary_mass * grad
                owner = self._boundary_owner(k)
                self._boundary_force[owner] = (
                    self._boundary_force[owner]
                    + mass * p_rho[i] * boundary_mass * grad
                )
            forces.append(force - mass * p_rho[i] * total)
        self._integrate(forces, dt)

    def _apply_force_to_boundaries(self, dt: float) -> None:
        for boundary, force in zip(self._boundaries, self._boundary_force):
            boundary.apply_force(force, dt)

    def _apply_world_boundary(self) -> None:
        damping = self.params.damping
        for i, (pos, vel) in enumerate(zip(self._position, self._velocity)):
            x, y = pos
            vx, vy = vel
            if x <= 0.0:
                x, vx = 0.0, vx * -damping
            elif x >= self.width:
                x, vx = self.width - 1.0, vx * -damping
            if y <= 0.0:
                y, vy = 0.0, vy * -damping
            elif y >= self.height:
                y, vy = self.height - 1.0, vy * -damping
            self._position[i] = Vector2f(x, y)
            self._velocity[i] = Vector2f(vx, vy)

    # Kernels

    def _poly6(self, dist: float, h: float) -> float:
        if dist < 0.0 or dist > h:
            return 0.0
        factor = self.params.sq_smoothing_radius - dist * dist
        return self._poly6_c * factor * factor * factor

    def _poly6_gradient(self, r: Vector2f, h: float) -> Vector2f:
        sq_dist = r.dot(r)
        sq_h = h * h
        if sq_dist < 0.0 or sq_dist > sq_h:
            return _ZERO
        factor = -6.0 * (sq_h - sq_dist)
        return self._poly6_c * factor * factor * r

    def _spiky_gradient(self, r: Vector2f, h: float) -> Vector2f:
        sq_dist = r.dot(r)
        if sq_dist <= 0.0 or sq_dist > self.params.sq_smoothing_radius:
            return _ZERO
        dist = math.sqrt(sq_dist)
        factor = h - dist
        return self._spiky_gc * factor * factor * r / dist

    def _viscosity_laplacian(self, dist: float, h: float) -> float:
        if dist < 0.0 or dist > h:
            return 0.0
        return self._viscosity_lc * (h - dist)

    # Queries

    @property
    def positions(self) -> tuple[Vector2f, ...]:
        """Particle positions."""
        return tuple(self._position)

    @property
    def velocities(self) -> tuple[Vector2f, ...]:
        """Particle velocities."""
        return tuple(self._velocity)

    @property
    def pressures(self) -> tuple[float, ...]:
        """Particle pressures."""
        return tuple(self._pressure)

    @property
    def densities(self) -> tuple[float, ...]:
        """Particle densities."""
        return tuple(self._density)

    @property
    def num_particles(self) -> int:
        """Number of fluid particles."""
        return len(self._position)

    @property
    def boundaries(self) -> tuple[Boundary, ...]:
        """Boundaries registered with the simulation."""
        return tuple(self._boundaries)

    @property
    def down_direction(self) -> Vector2f:
        """Direction in which gravity pulls."""
        return self._down_dir

    def set_down_direction(self, direction: Vector2f) -> None:
        """Point gravity along ``direction`` (normalised)."""
        self._down_dir = direction.normalize()

    def pressure_at(self, point: Vector2f) -> float:
        """Sum of pressures of particles in the 3x3 cells around ``point``.

        Uses the spatial grid built during the most recent step.
        """
        center = cell_from_point(point, self.params.smoothing_radius)
        return sum(
            (self._pressure[i] for i in self._grid.neighborhood(center)), 0.0
        )