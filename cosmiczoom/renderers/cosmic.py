from __future__ import annotations

import math

import numpy as np

from cosmiczoom.surface import Surface, rgb

FOAM_POINTS = 200
FOAM_HALF_EXTENT = 200
GALAXY_POINTS = 300
TUNNEL_RINGS = 10
STARS = 150
STAR_HALF_EXTENT = 250

def draw_quantum_foam(time: float, surface: Surface, rng: np.random.Generator) -> None:
    """Fresh uniform noise every call; no point survives between frames."""
    xs = rng.uniform(-FOAM_HALF_EXTENT, FOAM_HALF_EXTENT, FOAM_POINTS)
    ys = rng.uniform(-FOAM_HALF_EXTENT, FOAM_HALF_EXTENT, FOAM_POINTS)
    alphas = rng.uniform(100, 255, FOAM_POINTS)
    sizes = rng.uniform(1, 4, FOAM_POINTS)

    surface.no_stroke()
    for x, y, a, d in zip(xs, ys, alphas, sizes):
        surface.fill(rgb(255, 255, 255, a / 255))
        surface.circle(float(x), float(y), float(d))

def draw_galaxy(time: float, surface: Surface, rng: np.random.Generator) -> None:
    surface.stroke(rgb(255, 200, 255, 150 / 255), 1)
    for i in range(GALAXY_POINTS):
        angle = i * 0.2 + time * 5
        radius = i * 1.5
        surface.point(math.cos(angle) * radius, math.sin(angle) * radius)

def draw_infinity(time: float, surface: Surface, rng: np.random.Generator) -> None:
    surface.no_fill()
    for i in range(TUNNEL_RINGS):
        size = 200 / (i + 1)
        x = math.sin(time * 2 + i) * 50
        y = math.cos(time * 2 + i) * 50
        surface.stroke(rgb(255, 255, 255, (100 - i * 8) / 255), 1)
        surface.ellipse(x, y, size, size)

    xs = rng.uniform(-STAR_HALF_EXTENT, STAR_HALF_EXTENT, STARS)
    ys = rng.uniform(-STAR_HALF_EXTENT, STAR_HALF_EXTENT, STARS)
    alphas = rng.uniform(100, 255, STARS)
    for x, y, a in zip(xs, ys, alphas):
        surface.stroke(rgb(255, 255, 255, a / 255))
        surface.point(float(x), float(y))
