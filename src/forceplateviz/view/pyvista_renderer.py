"""
PyVista Scene Renderer
Draws the plate proxy, arrows and debug overlay into a pyvista Plotter.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, TYPE_CHECKING

import numpy as np
import pyvista as pv

from forceplateviz.model.arrow import ArrowShape
from forceplateviz.model.force_plate import PlateBox
from forceplateviz.model.geometry_primitives import Point
from forceplateviz.model.overlay import DebugOverlay
from forceplateviz.view.renderer import FORCE_ARROW, MOMENT_ARROW

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

ARROW_COLORS: Dict[str, str] = {
    FORCE_ARROW: "#FFC300",
    MOMENT_ARROW: "#3A86FF",
}
PLATE_COLOR = "#B0B0B0"
MIN_TUBE_RADIUS = 1e-6


def arrow_to_polydata(shape: ArrowShape, n_sides: int = 16) -> pv.PolyData:
    """
    Convert a visible ArrowShape into a tube whose radius follows the width
    profile (radius = width / 2 at each control point).

    Raises:
        ValueError: If the arrow is hidden.
    """
    if not shape.visible:
        raise ValueError("Cannot build geometry for a hidden arrow.")

    points = shape.points_array()
    n = points.shape[0]
    line = pv.PolyData(points)
    line.lines = np.hstack([[n], np.arange(n, dtype=np.int_)])
    # Tube radius must stay positive at the tip
    line.point_data["radius"] = np.maximum(shape.widths_array() / 2.0, MIN_TUBE_RADIUS)

    return line.tube(scalars="radius", absolute=True, n_sides=n_sides, capping=True)


def plate_to_polydata(box: PlateBox) -> pv.PolyData:
    """Cube with the box size, rotated and moved into place."""
    sx, sy, sz = box.size
    cube = pv.Cube(center=(0.0, 0.0, 0.0), x_length=sx, y_length=sy, z_length=sz)
    return cube.transform(box.to_matrix(), inplace=False)


class PyVistaSceneRenderer:
    """
    SceneRenderer backed by a pyvista Plotter.

    Args:
        plotter: Target plotter (on-screen or off-screen).
        parent_transform: 4x4 local-to-world matrix applied to all geometry.
    """

    def __init__(self, plotter: pv.Plotter, parent_transform: Optional[npt.NDArray[np.float64]] = None) -> None:
        self.plotter = plotter
        self.parent_transform: npt.NDArray[np.float64] = (
            np.eye(4) if parent_transform is None else np.asarray(parent_transform, dtype=np.float64)
        )
        if self.parent_transform.shape != (4, 4):
            raise ValueError(f"parent_transform must be 4x4, got {self.parent_transform.shape}.")

        # --- Actors state ---
        self._plate_actor: Optional[pv.Actor] = None
        self._arrow_actors: Dict[str, pv.Actor] = {}
        self._overlay_actors: List[pv.Actor] = []

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def to_world(self, point: Point) -> npt.NDArray[np.float64]:
        return (self.parent_transform @ np.array([point.x, point.y, point.z, 1.0]))[:3]

    def show_plate(self, box: Optional[PlateBox]) -> None:
        self._remove(self._plate_actor)
        self._plate_actor = None
        if box is None:
            return

        mesh = plate_to_polydata(box).transform(self.parent_transform, inplace=False)
        self._plate_actor = self.plotter.add_mesh(mesh, color=PLATE_COLOR, opacity=0.8, pickable=False)

    def show_arrow(self, key: str, shape: Optional[ArrowShape]) -> None:
        self._remove(self._arrow_actors.pop(key, None))
        if shape is None or not shape.visible:
            return

        mesh = arrow_to_polydata(shape).transform(self.parent_transform, inplace=False)
        self._arrow_actors[key] = self.plotter.add_mesh(
            mesh,
            color=ARROW_COLORS.get(key, "white"),
            smooth_shading=True,
            pickable=False,
        )

    def draw_overlay(self, overlay: DebugOverlay) -> None:
        for line in overlay.lines:
            mesh = pv.Line(self.to_world(line.start), self.to_world(line.end))
            self._overlay_actors.append(
                self.plotter.add_mesh(mesh, color=line.color, line_width=2, pickable=False)
            )

        for sphere in overlay.spheres:
            mesh = pv.Sphere(radius=sphere.radius, center=self.to_world(sphere.center))
            self._overlay_actors.append(
                self.plotter.add_mesh(mesh, color=sphere.color, pickable=False)
            )

        if overlay.labels:
            positions = np.array([self.to_world(label.position) for label in overlay.labels])
            self._overlay_actors.append(
                self.plotter.add_point_labels(
                    positions,
                    [label.text for label in overlay.labels],
                    font_size=12,
                    show_points=False,
                    always_visible=True,
                )
            )

    def clear_overlay(self) -> None:
        for actor in self._overlay_actors:
            self._remove(actor)
        self._overlay_actors.clear()

    def render(self) -> None:
        self.plotter.render()

    def _remove(self, actor: Optional[pv.Actor]) -> None:
        if actor is not None:
            self.plotter.remove_actor(actor, render=False)
