import json
import math
from typing import Any, Dict, Optional

from cosmiczoom.errors import ConfigError

DEFAULTS: Dict[str, Any] = {
    "width": 960,
    "height": 720,
    "fps": 60,
    "start_zoom": 1.0,
    "zoom_speed": 0.005,
    "max_zoom": 12.0,
    "time_step": 0.01,
    "low_freq": 100.0,
    "high_freq": 800.0,
    "amplitude": 0.2,
    "sample_rate": 44100,
    "block_size": 512,
    "seed": None,
    "frames_dir": "frames",
    "total_frames": 600,
    "output_video": "cosmic_zoom.mp4",
    "drone_wav": None,
}

def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return dict(DEFAULTS)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config {config_path} is not valid JSON: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError("Config JSON must be an object.")

    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ConfigError(f"Unknown config field(s): {', '.join(unknown)}")
    return cfg

def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(DEFAULTS)
    out.update(cfg)

    try:
        for key in ("width", "height", "fps", "total_frames", "sample_rate", "block_size"):
            out[key] = int(out[key])
        for key in ("start_zoom", "zoom_speed", "max_zoom", "time_step", "low_freq", "high_freq", "amplitude"):
            out[key] = float(out[key])
        if out["seed"] is not None:
            out["seed"] = int(out["seed"])
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigError(f"Invalid config value: {e}") from e

    for key in ("start_zoom", "zoom_speed", "max_zoom", "time_step", "low_freq", "high_freq", "amplitude"):
        if not math.isfinite(out[key]):
            raise ConfigError(f"{key} must be a finite number.")

    for key in ("width", "height", "fps", "total_frames", "sample_rate", "block_size"):
        if out[key] <= 0:
            raise ConfigError(f"{key} must be positive.")
    if out["zoom_speed"] <= 0:
        raise ConfigError("zoom_speed must be > 0.")
    if out["max_zoom"] <= 1.0:
        raise ConfigError("max_zoom must be > 1.")
    if not (1.0 <= out["start_zoom"] <= out["max_zoom"]):
        raise ConfigError("start_zoom must lie within [1, max_zoom].")
    if out["time_step"] <= 0:
        raise ConfigError("time_step must be > 0.")
    if not (0 < out["low_freq"] < out["high_freq"]):
        raise ConfigError("Frequencies must satisfy 0 < low_freq < high_freq.")
    if not (0.0 <= out["amplitude"] <= 1.0):
        raise ConfigError("amplitude must lie within [0, 1].")

    out["frames_dir"] = str(out["frames_dir"])
    out["output_video"] = str(out["output_video"])
    if out["drone_wav"] is not None:
        out["drone_wav"] = str(out["drone_wav"])
    return out
