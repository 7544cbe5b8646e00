"""
Force Plate Adapter
===================
Connects a MotionSource to a SceneRenderer once per render tick.

The adapter keeps the most recently fetched sample. Every tick re-renders
from it; an absent sample hides the plate and both arrows. The debug overlay
is drawn from the same cached sample, so it always matches what the last
tick displayed.
"""
from __future__ import annotations

import logging
from typing import Optional

from forceplateviz.config import ArrowConfig, VisualConfig, DEFAULT_PLATE_NAME
from forceplateviz.model.arrow import ArrowShape, build_arrow
from forceplateviz.model.force_plate import ForceSample, downscale_force, downscale_moment, fit_plate_box
from forceplateviz.model.geometry_primitives import Point, Vector
from forceplateviz.model.overlay import build_debug_overlay
from forceplateviz.model.source import MotionSource
from forceplateviz.view.renderer import FORCE_ARROW, MOMENT_ARROW, SceneRenderer

logger = logging.getLogger(__name__)


class ForcePlateAdapter:
    def __init__(
        self,
        source: MotionSource,
        renderer: SceneRenderer,
        plate_name: str = DEFAULT_PLATE_NAME,
        arrow_config: Optional[ArrowConfig] = None,
        visual_config: Optional[VisualConfig] = None,
        show_plate: bool = True,
        show_force: bool = True,
        show_moment: bool = True,
    ) -> None:
        self.source = source
        self.renderer = renderer
        self.plate_name = plate_name
        self.arrow_config = arrow_config or ArrowConfig()
        self.visual_config = visual_config or VisualConfig()

        # --- Visibility state ---
        # Mirrors optional scene objects: a disabled visual is never touched
        self.show_plate = show_plate
        self.show_force = show_force
        self.show_moment = show_moment

        # --- Data cache ---
        self._cached_sample: Optional[ForceSample] = None
        self._tracked: bool = False

    @property
    def cached_sample(self) -> Optional[ForceSample]:
        return self._cached_sample

    # ------------------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------------------

    def refresh(self) -> None:
        """Fetch the current sample from the source and tick with it."""
        self.on_tick(self.source.get_force_sample(self.plate_name))

    def on_tick(self, sample: Optional[ForceSample]) -> None:
        """
        Update the plate and arrows for this frame.

        Args:
            sample: The sample fetched for this frame, or None when the plate
                is not tracked (hides every visual).
        """
        self._cached_sample = sample
        self._log_tracking_change(sample is not None)

        if self.show_plate:
            box = None if sample is None else fit_plate_box(sample, self.visual_config.plate_thickness)
            self.renderer.show_plate(box)

        if self.show_force:
            force = None
            if sample is not None:
                force = self.build_arrow(
                    sample.application_point,
                    downscale_force(sample.force, self.visual_config.force_scale),
                )
            self.renderer.show_arrow(FORCE_ARROW, force)

        if self.show_moment:
            moment = None
            if sample is not None:
                moment = self.build_arrow(
                    sample.application_point,
                    downscale_moment(sample.moment, self.visual_config.moment_scale),
                )
            self.renderer.show_arrow(MOMENT_ARROW, moment)

    def on_debug_draw(self) -> None:
        """Redraw the debug overlay from the cached sample. Draws nothing without one."""
        self.renderer.clear_overlay()
        if self._cached_sample is None:
            return

        overlay = build_debug_overlay(
            self._cached_sample,
            force_scale=self.visual_config.force_scale,
            marker_radius=self.visual_config.marker_radius,
        )
        self.renderer.draw_overlay(overlay)

    # ------------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------------

    def build_arrow(self, origin: Point, direction_and_magnitude: Vector) -> ArrowShape:
        shape = build_arrow(
            origin,
            direction_and_magnitude,
            head_length=self.arrow_config.head_length,
            head_width=self.arrow_config.head_width,
        )
        if not shape.visible:
            logger.debug(f"Arrow at {origin} too short to draw (length={shape.length:.4f}).")
        return shape

    def _log_tracking_change(self, tracked: bool) -> None:
        if tracked == self._tracked:
            return
        self._tracked = tracked
        if tracked:
            logger.info(f"Force plate '{self.plate_name}' is now tracked.")
        else:
            logger.info(f"Force plate '{self.plate_name}' lost.")
