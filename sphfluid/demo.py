"""Demo scene: two blocks of fluid falling onto a box, a triangle and a circle."""

from __future__ import annotations

import argparse
import math
import random
from typing import Sequence

from .boundary import Boundary, combined_positions
from .colormap import VIRIDIS, WHITE
from .parameters import FluidParameters
from .rendering import ParticleLayer
from .simulation import Simulation
from .vector import Vector2f

GRAVITY = 9.8
DAMPING = 0.95
REST_DENSITY = 1000.0
STIFFNESS = 1e3
VISCOSITY = 1e6
SMOOTHING_RADIUS = 8.0
BOUNDARY_RADIUS = SMOOTHING_RADIUS * 4.0
FRAME_RATE = 144


def demo_parameters() -> FluidParameters:
    """Fluid parameters used by the demo and the sandbox."""
    return FluidParameters(
        gravity=GRAVITY,
        damping=DAMPING,
        rest_density=REST_DENSITY,
        stiffness=STIFFNESS,
        viscosity=VISCOSITY,
        smoothing_radius=SMOOTHING_RADIUS,
    )


def build_demo(
    width: float = 1920,
    height: float = 1080,
    num_particles: int = 50000,
    rng: random.Random | None = None,
) -> tuple[Simulation, list[Boundary]]:
    """Build the demo simulation and its activated boundaries.

    The fluid is split into two square blocks centred at a quarter and at
    three quarters of the world.
    """
    if num_particles < 2:
        raise ValueError("the demo needs at least two particles")
    sim = Simulation(
        width, height, demo_parameters(), Vector2f(0.0, 1.0), -1.0, rng
    )

    half = num_particles // 2
    grid_width = int(math.sqrt(num_particles / 2.0))
    sim.add_particle_grid(Vector2f(width * 0.25, height * 0.25), grid_width, half)
    sim.add_particle_grid(Vector2f(width * 0.75, height * 0.75), grid_width, half)

    box = Boundary(BOUNDARY_RADIUS)
    box.create_box(
        Vector2f(0.25 * width, 0.6 * height),
        Vector2f(0.33 * width, 0.8 * height),
        0.25,
    )

    triangle = Boundary(BOUNDARY_RADIUS)
    triangle.create_polygon(
        [Vector2f(200.0, 800.0), Vector2f(400.0, 800.0), Vector2f(300.0, 1000.0)],
        0.0625,
    )

    circle = Boundary(BOUNDARY_RADIUS)
    circle.create_circle(Vector2f(width / 2.0, height - 200.0), 100.0)

    boundaries = [box, triangle, circle]
    for boundary in boundaries:
        boundary.activate()
    sim.add_boundaries(boundaries)
    return sim, boundaries


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sphfluid-demo", description="Run the fluid simulation demo."
    )
    parser.add_argument("--width", type=int, default=1920)
    parser.add_argument("--height", type=int, default=1080)
    parser.add_argument("--particles", type=int, default=50000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--frames", type=int, default=0, help="stop after this many frames (0: run until closed)"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Open a window and run the demo until it is closed."""
    import pygame

    args = _parse_args(argv)
    sim, boundaries = build_demo(
        args.width, args.height, args.particles, random.Random(args.seed)
    )

    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption("Fluid Simulation Demo")
        clock = pygame.time.Clock()

        particles = ParticleLayer()
        boundary_layer = ParticleLayer()
        boundary_layer.update_solid(combined_positions(boundaries), WHITE)

        frame = 0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False

            particles.update_field(sim.positions, sim.velocities, 0.0, 100.0, VIRIDIS)
            screen.fill((0, 0, 0))
            particles.draw(screen)
            boundary_layer.draw(screen)
            pygame.display.flip()
            sim.update()
            clock.tick(FRAME_RATE)

            frame += 1
            if args.frames and frame >= args.frames:
                running = False
    finally:
        pygame.quit()
    return 0