"""
Debug Overlay
Builds the reference frame, force line and corner markers drawn on top of the
plate when debugging a setup. Pure data, no rendering.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from forceplateviz.config import DEFAULT_FORCE_SCALE, DEFAULT_MARKER_RADIUS
from forceplateviz.model.force_plate import ForceSample, downscale_force, reference_frame_axes
from forceplateviz.model.geometry_primitives import Point

# Axis colours follow the usual X/Y/Z = red/green/blue convention
COLOR_RIGHT = "red"
COLOR_UP = "green"
COLOR_FORWARD = "blue"
COLOR_FORCE = "yellow"
COLOR_OUTLINE = "red"


@dataclass(frozen=True)
class OverlayLine:
    start: Point
    end: Point
    color: str


@dataclass(frozen=True)
class OverlaySphere:
    center: Point
    radius: float
    color: str


@dataclass(frozen=True)
class OverlayLabel:
    position: Point
    text: str


@dataclass
class DebugOverlay:
    lines: List[OverlayLine] = field(default_factory=list)
    spheres: List[OverlaySphere] = field(default_factory=list)
    labels: List[OverlayLabel] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.lines or self.spheres or self.labels)


def build_debug_overlay(
    sample: ForceSample,
    force_scale: float = DEFAULT_FORCE_SCALE,
    marker_radius: float = DEFAULT_MARKER_RADIUS,
) -> DebugOverlay:
    """
    Collect the debug primitives for one sample.

    Args:
        sample: The force plate measurement.
        force_scale: Same display scale as the force arrow, so the force line
            overlays the arrow.
        marker_radius: Radius of the application point and corner spheres.

    Returns:
        DebugOverlay with, in order: the three frame axes (up, right, forward),
        the force line, the four outline edges; spheres at the application
        point and corners; labels "1".."4" at the corners.
    """
    overlay = DebugOverlay()

    # 1. Reference frame
    axes = reference_frame_axes(sample)
    overlay.lines.append(OverlayLine(axes.origin, axes.up, COLOR_UP))
    overlay.lines.append(OverlayLine(axes.origin, axes.right, COLOR_RIGHT))
    overlay.lines.append(OverlayLine(axes.origin, axes.forward, COLOR_FORWARD))

    # 2. Force line from the application point
    apex = sample.application_point + downscale_force(sample.force, force_scale)
    overlay.lines.append(OverlayLine(sample.application_point, apex, COLOR_FORCE))
    overlay.spheres.append(OverlaySphere(sample.application_point, marker_radius, COLOR_FORCE))

    # 3. Plate outline, closed back to the first corner
    corners = sample.corners
    for i, corner in enumerate(corners):
        overlay.lines.append(OverlayLine(corner, corners[(i + 1) % len(corners)], COLOR_OUTLINE))

    for i, corner in enumerate(corners, start=1):
        overlay.labels.append(OverlayLabel(corner, str(i)))
        overlay.spheres.append(OverlaySphere(corner, marker_radius, COLOR_OUTLINE))

    return overlay
