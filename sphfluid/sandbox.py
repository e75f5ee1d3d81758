"""Interactive sandbox: pour fluid and draw boundaries with the mouse.

Keys: ``q`` places fluid, ``e`` draws boundaries; ``z``, ``x`` and ``c``
pick polygon, box or circle boundaries; ``1``, ``2`` and ``3`` colour the
fluid by velocity, density or pressure. Mouse buttons follow pygame's
numbering: 1 is the left button, 3 the right one.
"""

from __future__ import annotations

import argparse
import random
from enum import Enum, auto
from typing import Sequence

from .boundary import Boundary, combined_positions
from .colormap import VIRIDIS, WHITE
from .demo import BOUNDARY_RADIUS, FRAME_RATE, demo_parameters
from .simulation import Simulation
from .vector import Vector2f

SCROLL_TICK_RESOLUTION = 1.0 / 25.0
DEFAULT_FLUID_RADIUS = 100.0

_LEFT_BUTTON = 1
_RIGHT_BUTTON = 3


class Mode(Enum):
    """What the mouse currently acts on."""

    BOUNDARY = auto()
    FLUID = auto()


class FluidView(Enum):
    """Which particle quantity colours the fluid."""

    VELOCITY = auto()
    DENSITY = auto()
    PRESSURE = auto()


class ShapeKind(Enum):
    """Shape of the boundary being drawn."""

    POLYGON = auto()
    BOX = auto()
    CIRCLE = auto()


_VIEW_RANGES = {
    FluidView.VELOCITY: (0.0, 100.0),
    FluidView.DENSITY: (0.0, 5e3),
    FluidView.PRESSURE: (0.0, 1e6),
}

_MODE_KEYS = {"q": Mode.FLUID, "e": Mode.BOUNDARY}
_SHAPE_KEYS = {"z": ShapeKind.POLYGON, "x": ShapeKind.BOX, "c": ShapeKind.CIRCLE}
_VIEW_KEYS = {"1": FluidView.VELOCITY, "2": FluidView.DENSITY, "3": FluidView.PRESSURE}


class SandboxState:
    """Input state of the sandbox and the edits it makes to a simulation."""

    def __init__(self, simulation: Simulation, smoothing_radius: float) -> None:
        self.simulation = simulation
        self.smoothing_radius = smoothing_radius
        self.mode = Mode.FLUID
        self.fluid_view = FluidView.VELOCITY
        self.shape = ShapeKind.POLYGON
        self.fluid_origin = Vector2f(0.0, 0.0)
        self.fluid_radius = DEFAULT_FLUID_RADIUS
        self.compression = 1.0
        self.creating = False
        self.vertices: list[Vector2f] = []
        self.boundaries: list[Boundary] = []
        self.temp_boundary = Boundary(smoothing_radius)

    # Event handlers

    def handle_key(self, key: str) -> None:
        """React to a key press given by its name, such as ``"q"`` or ``"1"``."""
        key = key.lower()
        if key in _MODE_KEYS:
            self.mode = _MODE_KEYS[key]
            self.cancel_shape()
        elif key in _SHAPE_KEYS:
            self.shape = _SHAPE_KEYS[key]
            self.cancel_shape()
        elif key in _VIEW_KEYS:
            self.fluid_view = _VIEW_KEYS[key]

    def handle_click(self, button: int, position: Vector2f) -> None:
        """React to a mouse button press at ``position``."""
        if self.mode is Mode.FLUID:
            if button == _LEFT_BUTTON:
                self.simulation.add_particle_circle(self.fluid_origin, self.fluid_radius)
            return
        if self.shape is ShapeKind.POLYGON:
            self._polygon_click(button, position)
        else:
            self._two_point_click(button, position)

    def handle_scroll(self, delta: float, position: Vector2f) -> None:
        """React to a wheel scroll of ``delta`` ticks with the pointer at ``position``."""
        if self.mode is Mode.FLUID:
            self.fluid_radius = max(0.0, self.fluid_radius + delta)
            return
        self.compression = min(
            max(self.compression + delta * SCROLL_TICK_RESOLUTION, 0.0), 1.0
        )
        if not self.creating:
            return
        if self.shape is ShapeKind.POLYGON:
            self.temp_boundary = self._make_polygon()
        else:
            self.temp_boundary = self._make_two_point(position)

    def handle_move(self, position: Vector2f) -> None:
        """React to the pointer moving to ``position``."""
        if self.mode is Mode.FLUID:
            self.fluid_origin = position
            return
        if not self.creating:
            return
        if self.shape is ShapeKind.POLYGON:
            self.vertices[-1] = position
            self.temp_boundary = self._make_polygon()
        else:
            self.temp_boundary = self._make_two_point(position)

    def cancel_shape(self) -> None:
        """Abandon the boundary being drawn, if any."""
        if self.creating:
            self._reset_shape()

    # Queries

    def boundary_positions(self) -> list[Vector2f]:
        """Particles of every placed boundary followed by the one being drawn."""
        return combined_positions([*self.boundaries, self.temp_boundary])

    def fluid_field(self) -> tuple[tuple, float, float]:
        """Values colouring the fluid and the range they are mapped over."""
        sim = self.simulation
        values = {
            FluidView.VELOCITY: sim.velocities,
            FluidView.DENSITY: sim.densities,
            FluidView.PRESSURE: sim.pressures,
        }[self.fluid_view]
        vmin, vmax = _VIEW_RANGES[self.fluid_view]
        return values, vmin, vmax

    # Shape building

    def _reset_shape(self) -> None:
        self.vertices.clear()
        self.temp_boundary = Boundary(self.smoothing_radius)
        self.creating = False

    def _commit(self, boundary: Boundary) -> None:
        boundary.activate()
        self.simulation.add_boundary(boundary)
        self.boundaries.append(boundary)
        self._reset_shape()

    def _make_polygon(self) -> Boundary:
        boundary = Boundary(self.smoothing_radius)
        boundary.create_polygon(self.vertices, self.compression)
        return boundary

    def _make_two_point(self, point: Vector2f) -> Boundary:
        boundary = Boundary(self.smoothing_radius)
        first = self.vertices[0]
        if self.shape is ShapeKind.BOX:
            boundary.create_box(first, point, self.compression)
        else:
            boundary.create_circle(first, (point - first).magnitude(), self.compression)
        return boundary

    def _polygon_click(self, button: int, position: Vector2f) -> None:
        if button == _LEFT_BUTTON:
            if not self.creating:
                self.vertices.append(position)
                self.creating = True
            # The last vertex follows the pointer until the next click.
            self.vertices.append(position)
        elif button == _RIGHT_BUTTON and self.creating:
            self.vertices.pop()
            self._commit(self._make_polygon())

    def _two_point_click(self, button: int, position: Vector2f) -> None:
        if button == _LEFT_BUTTON:
            if not self.creating:
                self.vertices.append(position)
                self.creating = True
                return
            self._commit(self._make_two_point(position))
        elif button == _RIGHT_BUTTON:
            self._reset_shape()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sphfluid-sandbox", description="Interactive fluid simulation sandbox."
    )
    parser.add_argument("--width", type=int, default=1920)
    parser.add_argument("--height", type=int, default=1080)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--frames", type=int, default=0, help="stop after this many frames (0: run until closed)"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the sandbox window and run it until it is closed."""
    import pygame

    from .rendering import ParticleLayer

    args = _parse_args(argv)
    sim = Simulation(
        args.width,
        args.height,
        demo_parameters(),
        Vector2f(0.0, 1.0),
        rng=random.Random(args.seed),
    )
    state = SandboxState(sim, BOUNDARY_RADIUS)

    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption("Fluid Simulation Sandbox")
        clock = pygame.time.Clock()
        particles = ParticleLayer()
        boundary_layer = ParticleLayer()

        frame = 0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    state.handle_key(pygame.key.name(event.key))
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button in (_LEFT_BUTTON, _RIGHT_BUTTON):
                        state.handle_click(event.button, Vector2f(*map(float, event.pos)))
                elif event.type == pygame.MOUSEWHEEL:
                    pos = Vector2f(*map(float, pygame.mouse.get_pos()))
                    state.handle_scroll(float(event.y), pos)
                elif event.type == pygame.MOUSEMOTION:
                    state.handle_move(Vector2f(*map(float, event.pos)))

            values, vmin, vmax = state.fluid_field()
            particles.update_field(sim.positions, values, vmin, vmax, VIRIDIS)
            boundary_layer.update_solid(state.boundary_positions(), WHITE)

            screen.fill((0, 0, 0))
            particles.draw(screen)
            boundary_layer.draw(screen)
            if state.mode is Mode.FLUID and state.fluid_radius >= 1.0:
                pygame.draw.circle(
                    screen,
                    WHITE,
                    (state.fluid_origin.x, state.fluid_origin.y),
                    state.fluid_radius,
                    width=1,
                )
            pygame.display.flip()
            sim.update()
            clock.tick(FRAME_RATE)

            frame += 1
            if args.frames and frame >= args.frames:
                running = False
    finally:
        pygame.quit()
    return 0