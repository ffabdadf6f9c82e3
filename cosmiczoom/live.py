from __future__ import annotations

import time
from typing import Any, Dict

import numpy as np

from cosmiczoom.audio import SineOscillator
from cosmiczoom.errors import AudioError, CosmicZoomError
from cosmiczoom.session import FrameLoop, Session
from cosmiczoom.surface import PillowSurface
from cosmiczoom.util.logging_setup import get_logger

WINDOW_TITLE = "Cosmic Zoom"
_QUIT_KEYS = (27, ord("q"))

def run_live(*, cfg: Dict[str, Any]) -> int:
    """Show the zoom in an OpenCV window until it is closed; a click starts the drone."""
    logger = get_logger()
    try:
        import cv2  # type: ignore
    except Exception as e:
        raise CosmicZoomError(f"OpenCV not installed: {e}") from e

    tone = SineOscillator(sample_rate=int(cfg["sample_rate"]), block_size=int(cfg["block_size"]))
    session = Session.from_config(cfg, tone)
    surface = PillowSurface(int(cfg["width"]), int(cfg["height"]))
    loop = FrameLoop(session, surface)

    def on_mouse(event, x, y, flags, param):
        if event != cv2.EVENT_LBUTTONDOWN:
            return
        try:
            session.audio.on_first_interaction()
        except AudioError:
            logger.exception("Could not start drone; click again to retry")

    cv2.namedWindow(WINDOW_TITLE, cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback(WINDOW_TITLE, on_mouse)
    frame_ms = 1000.0 / int(cfg["fps"])
    logger.info("Live session %sx%s @ %sfps", surface.width, surface.height, cfg["fps"])

    try:
        while True:
            start = time.perf_counter()
            loop.tick()
            frame = cv2.cvtColor(np.asarray(surface.image), cv2.COLOR_RGB2BGR)
            cv2.imshow(WINDOW_TITLE, frame)

            elapsed_ms = (time.perf_counter() - start) * 1000.0
            key = cv2.waitKey(max(1, int(frame_ms - elapsed_ms))) & 0xFF
            if key in _QUIT_KEYS:
                break
            if cv2.getWindowProperty(WINDOW_TITLE, cv2.WND_PROP_VISIBLE) < 1:
                break
    finally:
        session.audio.shutdown()
        cv2.destroyAllWindows()

    logger.info("Live session ended after %s frames", loop.frame)
    return loop.frame
