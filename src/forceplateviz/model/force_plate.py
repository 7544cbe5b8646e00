"""
Force Plate Data Model
======================
A single force plate measurement and the geometry derived from it.

Classes:
    ForceSample: Reference frame, corners, application point, force and moment.
    PlateBox: Placement of the proxy box that represents the plate in the scene.
    FrameAxes: Origin and unit-axis end points of the plate reference frame.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from forceplateviz.config import DEFAULT_FORCE_SCALE, DEFAULT_MOMENT_SCALE, DEFAULT_PLATE_THICKNESS
from forceplateviz.model.geometry_primitives import Point, Vector

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class SampleFormatError(ValueError):
    """Raised when a force sample is built from malformed data."""


@dataclass(frozen=True, eq=False)
class ForceSample:
    """
    One force plate measurement in the local space of the scene.

    The transform is a 4x4 homogeneous matrix (rotation in the upper-left
    3x3 block, position in the last column) placing the plate reference frame.
    Corners are ordered around the plate outline.
    """
    name: str
    transform: npt.NDArray[np.float64]
    corners: Tuple[Point, Point, Point, Point]
    application_point: Point
    force: Vector
    moment: Vector
    timestamp: Optional[float] = None

    def __post_init__(self) -> None:
        matrix = np.asarray(self.transform, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise SampleFormatError(f"Transform must be 4x4, got {matrix.shape}.")
        if not np.all(np.isfinite(matrix)):
            raise SampleFormatError("Transform contains non-finite values.")
        if len(self.corners) != 4:
            raise SampleFormatError(f"Expected 4 corners, got {len(self.corners)}.")
        # json.load lets NaN and Infinity through
        for label, value in (("application_point", self.application_point),
                             ("force", self.force), ("moment", self.moment)):
            if not value.is_finite():
                raise SampleFormatError(f"{label} contains non-finite values: {value}.")
        for i, corner in enumerate(self.corners):
            if not corner.is_finite():
                raise SampleFormatError(f"Corner {i} contains non-finite values: {corner}.")
        # Frozen dataclass: normalise fields through object.__setattr__
        object.__setattr__(self, "transform", matrix)
        object.__setattr__(self, "corners", tuple(self.corners))

    @property
    def position(self) -> Point:
        return extract_position(self.transform)

    @property
    def rotation(self) -> npt.NDArray[np.float64]:
        return extract_rotation(self.transform)

    def transform_point(self, point: Point) -> Point:
        """Map a point from plate space into the sample's local space."""
        homogeneous = self.transform @ np.array([point.x, point.y, point.z, 1.0])
        return Point.from_iterable(homogeneous[:3])


@dataclass(frozen=True, eq=False)
class PlateBox:
    """Proxy box: centre, orientation (3x3) and edge lengths along its local axes."""
    center: Point
    rotation: npt.NDArray[np.float64] = field(default_factory=lambda: np.eye(3))
    size: Tuple[float, float, float] = (1.0, 1.0, DEFAULT_PLATE_THICKNESS)

    def to_matrix(self) -> npt.NDArray[np.float64]:
        """Homogeneous rotation + translation matrix (without the size scaling)."""
        matrix = np.eye(4)
        matrix[:3, :3] = self.rotation
        matrix[:3, 3] = self.center.to_array()
        return matrix


@dataclass(frozen=True)
class FrameAxes:
    origin: Point
    right: Point
    up: Point
    forward: Point


def extract_position(matrix: npt.NDArray[np.float64]) -> Point:
    """Translation part of a 4x4 homogeneous matrix."""
    return Point(float(matrix[0, 3]), float(matrix[1, 3]), float(matrix[2, 3]))


def extract_rotation(matrix: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Rotation part of a 4x4 homogeneous matrix.

    Columns of the upper-left block are normalised so a scaled transform still
    yields a pure rotation. Zero-length columns are left untouched.
    """
    block = np.array(matrix[:3, :3], dtype=np.float64)
    norms = np.linalg.norm(block, axis=0)
    norms[norms == 0.0] = 1.0
    return block / norms


def downscale_force(force: Vector, scale: float = DEFAULT_FORCE_SCALE) -> Vector:
    """
    Scale a force for display. The default negative scale inverts the vector
    so the reaction force is drawn above the plate.
    """
    return force / scale


def downscale_moment(moment: Vector, scale: float = DEFAULT_MOMENT_SCALE) -> Vector:
    """Scale a moment for display, inverted like the force by default."""
    return moment / scale


def fit_plate_box(sample: ForceSample, thickness: float = DEFAULT_PLATE_THICKNESS) -> PlateBox:
    """
    Fit the proxy box to the plate outline.

    The box takes the rotation of the plate reference frame, spans
    |c0 c1| x |c1 c2| in the plate plane and is `thickness` deep. It is pushed
    back by half its thickness along the frame's forward (+Z) axis so its top
    face coincides with the plate surface.
    """
    corners = sample.corners
    rotation = sample.rotation
    forward = Vector.from_iterable(rotation @ np.array([0.0, 0.0, 1.0]))

    size = (
        corners[0].distance_to(corners[1]),
        corners[1].distance_to(corners[2]),
        thickness,
    )
    center = sample.position - forward * (thickness / 2.0)
    return PlateBox(center=center, rotation=rotation, size=size)


def reference_frame_axes(sample: ForceSample) -> FrameAxes:
    """Images of the plate-space origin and unit X/Y/Z points."""
    return FrameAxes(
        origin=sample.transform_point(Point(0.0, 0.0, 0.0)),
        right=sample.transform_point(Point(1.0, 0.0, 0.0)),
        up=sample.transform_point(Point(0.0, 1.0, 0.0)),
        forward=sample.transform_point(Point(0.0, 0.0, 1.0)),
    )


def sample_from_arrays(
    name: str,
    transform: Sequence[Sequence[float]],
    corners: Sequence[Sequence[float]],
    application_point: Sequence[float],
    force: Sequence[float],
    moment: Sequence[float],
    timestamp: Optional[float] = None,
) -> ForceSample:
    """
    Build a ForceSample from plain nested sequences (e.g. parsed JSON).

    Raises:
        SampleFormatError: If any field has the wrong shape or cannot be
            converted to float.
    """
    try:
        corner_points = tuple(Point.from_iterable(c) for c in corners)
        return ForceSample(
            name=name,
            transform=np.array(transform, dtype=np.float64),
            corners=corner_points,
            application_point=Point.from_iterable(application_point),
            force=Vector.from_iterable(force),
            moment=Vector.from_iterable(moment),
            timestamp=None if timestamp is None else float(timestamp),
        )
    except SampleFormatError:
        raise
    except (TypeError, ValueError) as e:
        raise SampleFormatError(f"Malformed sample '{name}': {e}") from e
