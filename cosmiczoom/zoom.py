from __future__ import annotations

import enum
import math
from typing import Dict, Tuple

ZOOM_SPEED = 0.005
MAX_ZOOM = 12.0
MIN_ZOOM = 1.0
LOW_FREQ = 100.0
HIGH_FREQ = 800.0

class SceneKind(enum.Enum):
    SOAP = "soap"
    MOLECULES = "molecules"
    ATOMS = "atoms"
    QUANTUM_FOAM = "quantum_foam"
    GALAXY = "galaxy"
    INFINITY = "infinity"

# Upper bound (exclusive) of each zoom band; anything past the last is INFINITY.
SCENE_THRESHOLDS: Tuple[Tuple[float, SceneKind], ...] = (
    (2.0, SceneKind.SOAP),
    (4.0, SceneKind.MOLECULES),
    (6.0, SceneKind.ATOMS),
    (8.0, SceneKind.QUANTUM_FOAM),
    (10.0, SceneKind.GALAXY),
)

SCENE_LABELS: Dict[SceneKind, str] = {
    SceneKind.SOAP: "Soap Bubble",
    SceneKind.MOLECULES: "Molecules",
    SceneKind.ATOMS: "Atoms",
    SceneKind.QUANTUM_FOAM: "Quantum Foam",
    SceneKind.GALAXY: "Galaxy",
    SceneKind.INFINITY: "Infinity",
}

def scene_for_zoom(zoom: float) -> SceneKind:
    for upper, kind in SCENE_THRESHOLDS:
        if zoom < upper:
            return kind
    return SceneKind.INFINITY

def _lerp_clamped(x: float, x0: float, x1: float, y0: float, y1: float) -> float:
    t = (x - x0) / (x1 - x0)
    t = min(1.0, max(0.0, t))
    return y0 + (y1 - y0) * t

class ZoomController:
    """
    Owns the camera zoom scalar.

    Zoom grows by a fixed step per tick and snaps back to exactly 1.0 once it
    passes ``max_zoom``; scene, camera scale and drone pitch are all derived
    from it on demand.
    """

    def __init__(self, start: float = MIN_ZOOM, speed: float = ZOOM_SPEED, max_zoom: float = MAX_ZOOM) -> None:
        if not (math.isfinite(speed) and speed > 0):
            raise ValueError("speed must be a finite number > 0")
        if not (math.isfinite(max_zoom) and max_zoom > MIN_ZOOM):
            raise ValueError("max_zoom must be a finite number > 1")
        if not (MIN_ZOOM <= start <= max_zoom):
            raise ValueError("start must lie within [1, max_zoom]")
        self.speed = float(speed)
        self.max_zoom = float(max_zoom)
        self._zoom = float(start)

    @property
    def zoom(self) -> float:
        return self._zoom

    def advance(self) -> None:
        self._zoom += self.speed
        if self._zoom > self.max_zoom:
            self._zoom = MIN_ZOOM

    def current_scale(self) -> float:
        return 1.0 / self._zoom

    def current_scene(self) -> SceneKind:
        return scene_for_zoom(self._zoom)

    def current_label(self) -> str:
        return SCENE_LABELS[self.current_scene()]

    def mapped_frequency(self, lo: float = LOW_FREQ, hi: float = HIGH_FREQ) -> float:
        return _lerp_clamped(self._zoom, MIN_ZOOM, self.max_zoom, lo, hi)
