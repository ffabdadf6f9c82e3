from __future__ import annotations

import argparse
import logging
import os
import subprocess
from typing import Optional

from cosmiczoom.config import load_config, normalise_config
from cosmiczoom.errors import CosmicZoomError
from cosmiczoom.util.logging_setup import configure_root_logging, get_logger

def _git_commit() -> Optional[str]:
    try:
        r = subprocess.run(["git", "rev-parse", "HEAD"], capture_output=True, text=True, check=True)
        return r.stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return None

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cosmiczoom", description="Zoom from a soap bubble to infinity, with a rising drone.")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. If omitted, built-in defaults are used.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Log file path (rotating). Empty disables file logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("live", help="Open a window and loop the zoom; click to start the drone.")

    r = sub.add_parser("render", help="Render frames headless to the frames directory.")
    r.add_argument("--frames-dir", type=str, default=None, help="Override frames_dir from config.")
    r.add_argument("--total-frames", type=int, default=None, help="Override total_frames from config.")
    r.add_argument("--with-audio", action="store_true", help="Treat the drone as started from the first frame.")
    r.add_argument("--drone-wav", type=str, default=None, help="Write the drone to this WAV file (implies --with-audio).")
    r.add_argument("--no-manifest", action="store_true", help="Skip writing artifacts/run.json.")

    e = sub.add_parser("encode", help="Encode frames into an MP4 video using OpenCV.")
    e.add_argument("--input-dir", type=str, default=None, help="Frames directory (defaults to config.frames_dir).")
    e.add_argument("--output", type=str, default=None, help="Output MP4 file (defaults to config.output_video).")
    e.add_argument("--fps", type=int, default=None, help="Frames per second (defaults to config.fps).")

    return p

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    configure_root_logging(level=log_level, console=True, log_file=log_file)
    logger = get_logger()

    try:
        cfg = load_config(args.config)

        if args.cmd == "live":
            from cosmiczoom.live import run_live

            run_live(cfg=normalise_config(cfg))
            return 0

        if args.cmd == "render":
            from cosmiczoom.pipeline import render_sequence
            from cosmiczoom.util.manifest import build_manifest, write_manifest

            if args.frames_dir:
                cfg["frames_dir"] = args.frames_dir
            if args.total_frames is not None:
                cfg["total_frames"] = args.total_frames
            if args.drone_wav:
                cfg["drone_wav"] = args.drone_wav
            cfg = normalise_config(cfg)

            drone_wav = cfg["drone_wav"]
            info = render_sequence(cfg=cfg, with_audio=args.with_audio or bool(drone_wav), drone_wav=drone_wav)

            if not args.no_manifest:
                manifest = build_manifest(config=cfg, render_info=info, git_commit=_git_commit())
                write_manifest(os.path.join("artifacts", "run.json"), manifest)
                logger.info("Run manifest written: artifacts/run.json")
            return 0

        if args.cmd == "encode":
            from cosmiczoom.video.opencv_writer import encode_with_opencv

            cfg = normalise_config(cfg)
            input_dir = args.input_dir or cfg["frames_dir"]
            output = args.output or cfg["output_video"]
            fps = args.fps or cfg["fps"]

            encode_with_opencv(input_dir=input_dir, output_file=output, fps=fps)
            return 0

        raise RuntimeError("Unknown command.")
    except CosmicZoomError as e:
        logger.error("%s", e)
        return 1

if __name__ == "__main__":
    raise SystemExit(main())
