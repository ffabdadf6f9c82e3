from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from cosmiczoom.renderers.cosmic import draw_galaxy, draw_infinity, draw_quantum_foam
from cosmiczoom.renderers.microscopic import draw_atoms, draw_molecules, draw_soap
from cosmiczoom.surface import Surface
from cosmiczoom.zoom import SceneKind

SceneRenderer = Callable[[float, Surface, np.random.Generator], None]

SCENE_RENDERERS: Dict[SceneKind, SceneRenderer] = {
    SceneKind.SOAP: draw_soap,
    SceneKind.MOLECULES: draw_molecules,
    SceneKind.ATOMS: draw_atoms,
    SceneKind.QUANTUM_FOAM: draw_quantum_foam,
    SceneKind.GALAXY: draw_galaxy,
    SceneKind.INFINITY: draw_infinity,
}

_missing = set(SceneKind) - set(SCENE_RENDERERS)
if _missing:
    raise RuntimeError(f"No renderer registered for: {sorted(k.value for k in _missing)}")
