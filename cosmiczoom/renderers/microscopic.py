from __future__ import annotations

import math

import numpy as np

from cosmiczoom.surface import Surface, hsb, rgb

BUBBLES = 10
LATTICE_HALF = 3
LATTICE_SPACING = 40
NUCLEI = 5
ORBIT_DIAMETER = 35

def draw_soap(time: float, surface: Surface, rng: np.random.Generator) -> None:
    """Iridescent bubbles drifting on independent orbits."""
    surface.no_stroke()
    for i in range(BUBBLES):
        x = math.sin(time + i) * 150
        y = math.cos(time * 0.8 + i) * 150
        size = 80 + math.sin(time * 2 + i) * 20

        hue = (time * 20 + i * 30) % 360
        surface.fill(hsb(hue, 80, 80, 0.6))
        surface.circle(x, y, size)

        surface.fill(rgb(255, 255, 255, 0.3))
        surface.circle(x - 5, y - 5, size * 0.3)

def draw_molecules(time: float, surface: Surface, rng: np.random.Generator) -> None:
    """Jittering 7x7 lattice; bonds only run right and down so nothing is drawn twice."""
    s = LATTICE_SPACING
    bond = rgb(100, 200, 255, 0.5)
    node = rgb(255, 150, 0, 0.9)
    for i in range(-LATTICE_HALF, LATTICE_HALF + 1):
        for j in range(-LATTICE_HALF, LATTICE_HALF + 1):
            x = i * s + math.sin(time + i) * 5
            y = j * s + math.cos(time + j) * 5

            surface.stroke(bond, 1)
            if i < LATTICE_HALF:
                surface.line(x, y, x + s, y)
            if j < LATTICE_HALF:
                surface.line(x, y, x, y + s)

            surface.no_stroke()
            surface.fill(node)
            surface.circle(x, y, 10)

def draw_atoms(time: float, surface: Surface, rng: np.random.Generator) -> None:
    for i in range(NUCLEI):
        x = math.sin(time * 2 + i * 2) * 100
        y = math.cos(time * 1.3 + i) * 100

        surface.no_stroke()
        surface.fill(rgb(255, 0, 100, 0.8))
        surface.circle(x, y, 15)

        surface.no_fill()
        surface.stroke(rgb(0, 200, 255, 0.4), 1)
        surface.circle(x, y, ORBIT_DIAMETER)

        # electron rides the ring, each nucleus with its own phase
        angle = time * 5 + i
        r = ORBIT_DIAMETER / 2
        surface.fill(rgb(0, 255, 255))
        surface.circle(x + math.cos(angle) * r, y + math.sin(angle) * r, 3)
