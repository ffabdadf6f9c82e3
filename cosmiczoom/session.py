from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import numpy as np

from cosmiczoom.audio import AudioDriver, ToneGenerator
from cosmiczoom.renderers.registry import SCENE_RENDERERS, SceneRenderer
from cosmiczoom.surface import Surface, rgb
from cosmiczoom.util.logging_setup import get_logger
from cosmiczoom.zoom import HIGH_FREQ, LOW_FREQ, SceneKind, ZoomController

TIME_STEP = 0.01
BACKGROUND = (0, 0, 0)
PROMPT = "Tap screen to start cosmic drone"

@dataclass
class AnimationClock:
    time: float = 0.0
    step: float = TIME_STEP

    def advance(self) -> None:
        self.time += self.step

@dataclass
class Session:
    """Everything that changes between frames, created once at startup."""

    zoom: ZoomController
    audio: AudioDriver
    clock: AnimationClock = field(default_factory=AnimationClock)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    low_freq: float = LOW_FREQ
    high_freq: float = HIGH_FREQ

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], tone: ToneGenerator) -> "Session":
        return cls(
            zoom=ZoomController(start=cfg["start_zoom"], speed=cfg["zoom_speed"], max_zoom=cfg["max_zoom"]),
            audio=AudioDriver(tone, base_frequency=cfg["low_freq"], amplitude=cfg["amplitude"]),
            clock=AnimationClock(step=cfg["time_step"]),
            rng=np.random.default_rng(cfg["seed"]),
            low_freq=cfg["low_freq"],
            high_freq=cfg["high_freq"],
        )

class FrameLoop:
    def __init__(
        self,
        session: Session,
        surface: Surface,
        renderers: Optional[Mapping[SceneKind, SceneRenderer]] = None,
    ) -> None:
        self.session = session
        self.surface = surface
        self.renderers = renderers if renderers is not None else SCENE_RENDERERS
        self.frame = 0
        self._last_scene: Optional[SceneKind] = None

    def tick(self) -> SceneKind:
        """Draw one frame, push the drone pitch, then step zoom and clock. Returns the scene drawn."""
        s = self.session
        surf = self.surface
        scene = s.zoom.current_scene()
        if scene is not self._last_scene:
            get_logger().info("Frame %s: entering %s (zoom=%.3f)", self.frame, scene.value, s.zoom.zoom)
            self._last_scene = scene

        surf.clear(BACKGROUND)
        surf.save()
        surf.translate(surf.width / 2, surf.height / 2)
        surf.scale(s.zoom.current_scale())
        self.renderers[scene](s.clock.time, surf, s.rng)
        surf.restore()

        # overlay sits outside the camera transform
        surf.save()
        surf.no_stroke()
        surf.fill(rgb(255, 255, 255, 200 / 255))
        surf.text(s.zoom.current_label(), surf.width / 2, surf.height - 30, 16)
        if not s.audio.started:
            surf.fill(rgb(255, 255, 255))
            surf.text(PROMPT, surf.width / 2, surf.height / 2, 20)
        surf.restore()

        if s.audio.started:
            s.audio.update_frequency(s.zoom.mapped_frequency(s.low_freq, s.high_freq))

        s.zoom.advance()
        s.clock.advance()
        self.frame += 1
        return scene
