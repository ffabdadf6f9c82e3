from __future__ import annotations

import os
from typing import Any, Dict, Optional

from tqdm import tqdm

from cosmiczoom.audio import RecordingOscillator, synthesize_drone, write_wav
from cosmiczoom.errors import ConfigError
from cosmiczoom.session import FrameLoop, Session
from cosmiczoom.surface import PillowSurface
from cosmiczoom.util.logging_setup import get_logger

def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def _save_frame(surface: PillowSurface, frames_dir: str, frame_index: int) -> str:
    path = os.path.join(frames_dir, f"frame_{frame_index:06d}.png")
    surface.image.save(path, format="PNG", optimize=True)
    return path

def render_sequence(
    *, cfg: Dict[str, Any], with_audio: bool = False, drone_wav: Optional[str] = None, progress: bool = True
) -> Dict[str, Any]:
    """
    Run the frame loop headless for ``total_frames`` ticks, saving each frame as a PNG.

    With ``with_audio`` the drone counts as started before the first frame, so the
    prompt is not drawn and every frame records a pitch; ``drone_wav`` then
    receives the synthesised drone.
    """
    logger = get_logger()

    width = int(cfg["width"])
    height = int(cfg["height"])
    total_frames = int(cfg["total_frames"])
    frames_dir = str(cfg["frames_dir"])

    if drone_wav and not with_audio:
        raise ConfigError("drone_wav requires with_audio.")

    _ensure_dir(frames_dir)

    tone = RecordingOscillator()
    session = Session.from_config(cfg, tone)
    surface = PillowSurface(width, height)
    loop = FrameLoop(session, surface)
    if with_audio:
        session.audio.on_first_interaction()

    logger.info("Render start total_frames=%s size=%sx%s zoom=%s speed=%s audio=%s",
                total_frames, width, height, session.zoom.zoom, session.zoom.speed, with_audio)

    scenes: Dict[str, int] = {}
    for i in tqdm(range(total_frames), disable=not progress):
        scene = loop.tick()
        scenes[scene.value] = scenes.get(scene.value, 0) + 1
        path = _save_frame(surface, frames_dir, i)
        logger.debug("Saved frame %s -> %s (scene=%s)", i, path, scene.value)

    if drone_wav:
        # the first retune is the start pitch pushed before frame 0
        samples = synthesize_drone(tone.frequencies[1:], int(cfg["fps"]), int(cfg["sample_rate"]), float(cfg["amplitude"]))
        write_wav(drone_wav, samples, int(cfg["sample_rate"]))
        logger.info("Drone written: %s (%.2fs)", drone_wav, len(samples) / int(cfg["sample_rate"]))

    logger.info("Render complete frames_dir=%s", frames_dir)
    return {
        "frames_dir": frames_dir,
        "total_frames": total_frames,
        "width": width,
        "height": height,
        "scenes": scenes,
        "final_zoom": session.zoom.zoom,
        "drone_wav": drone_wav,
    }
