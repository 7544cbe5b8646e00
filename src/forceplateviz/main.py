"""
Application Initialization
==========================
Builds the source -> adapter -> renderer chain and runs it in an interactive
PyVista window, one adapter tick per timer event.

Usage:
    $ python -m forceplateviz --recording session.json --plate "Force-plate 1"
    $ python -m forceplateviz            # synthetic sway recording
"""
from __future__ import annotations

import argparse
import logging
import math
from typing import List, Optional, Sequence

import numpy as np
import pyvista as pv

from forceplateviz.config import ArrowConfig, VisualConfig, DEFAULT_PLATE_NAME, load_config
from forceplateviz.controller.adapter import ForcePlateAdapter
from forceplateviz.logging_config import setup_logging
from forceplateviz.model.force_plate import ForceSample
from forceplateviz.model.geometry_primitives import Point, Vector
from forceplateviz.model.source import Frame, ReplayMotionSource
from forceplateviz.view.pyvista_renderer import PyVistaSceneRenderer

logger = logging.getLogger(__name__)

# Effectively unbounded; the window is closed by the user
MAX_TIMER_STEPS = 10**9


def synthetic_recording(
    plate_name: str = DEFAULT_PLATE_NAME,
    n_frames: int = 240,
    width: float = 0.6,
    depth: float = 0.4,
    dropout_every: int = 80,
) -> List[Frame]:
    """
    A person swaying on a plate: the centre of pressure circles the plate
    centre and the vertical load oscillates around body weight. Every
    `dropout_every` frames a short gap without samples simulates tracking loss.
    """
    transform = np.eye(4)
    half_w, half_d = width / 2.0, depth / 2.0
    corners = (
        Point(-half_w, -half_d, 0.0),
        Point(half_w, -half_d, 0.0),
        Point(half_w, half_d, 0.0),
        Point(-half_w, half_d, 0.0),
    )

    frames: List[Frame] = []
    for i in range(n_frames):
        if dropout_every and i % dropout_every >= dropout_every - 5:
            frames.append({})
            continue

        phase = 2.0 * math.pi * i / n_frames
        cop = Point(0.5 * half_w * math.cos(phase), 0.5 * half_d * math.sin(phase), 0.0)
        force = Vector(40.0 * math.sin(2 * phase), 25.0 * math.cos(2 * phase), -700.0 - 150.0 * math.sin(3 * phase))
        moment = Vector(0.0, 0.0, 25.0 * math.sin(phase))

        frames.append({
            plate_name: ForceSample(
                name=plate_name,
                transform=transform,
                corners=corners,
                application_point=cop,
                force=force,
                moment=moment,
                timestamp=i / 60.0,
            )
        })
    return frames


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="forceplateviz", description="Force plate visualization")
    parser.add_argument("--recording", help="JSON recording to replay (synthetic sway if omitted)")
    parser.add_argument("--plate", default=DEFAULT_PLATE_NAME, help="Name of the force plate to show")
    parser.add_argument("--config", help="JSON file with 'arrow' and 'visual' sections")
    parser.add_argument("--interval", type=int, default=16, help="Timer interval in milliseconds")
    parser.add_argument("--no-debug-overlay", action="store_true", help="Hide reference frame and corner markers")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--trace-ticks", action="store_true", help="With --debug, also log per-tick adapter messages")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    # 1. Setup Logging
    setup_logging(
        level=logging.DEBUG if args.debug else logging.INFO,
        log_file=args.log_file,
        trace_ticks=args.trace_ticks,
    )

    # 2. Configuration
    arrow_config, visual_config = ArrowConfig(), VisualConfig()
    if args.config:
        arrow_config, visual_config = load_config(args.config)

    # 3. Sample source
    if args.recording:
        source = ReplayMotionSource.from_json(args.recording)
    else:
        logger.info("No recording given, using a synthetic sway recording.")
        source = ReplayMotionSource(synthetic_recording(plate_name=args.plate))

    # 4. Scene
    plotter = pv.Plotter(title="Force plate")
    plotter.add_axes()
    renderer = PyVistaSceneRenderer(plotter)
    adapter = ForcePlateAdapter(
        source,
        renderer,
        plate_name=args.plate,
        arrow_config=arrow_config,
        visual_config=visual_config,
    )
    draw_overlay = not args.no_debug_overlay

    def tick(_step: int) -> None:
        source.advance()
        adapter.refresh()
        if draw_overlay:
            adapter.on_debug_draw()
        renderer.render()

    # First frame before the window opens so the camera can frame the plate
    adapter.refresh()
    if draw_overlay:
        adapter.on_debug_draw()
    plotter.camera_position = "iso"
    plotter.reset_camera()

    # 5. Start Event Loop
    plotter.add_timer_event(max_steps=MAX_TIMER_STEPS, duration=args.interval, callback=tick)
    plotter.show()


if __name__ == "__main__":
    main()
