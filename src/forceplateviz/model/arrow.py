"""
Arrow Geometry
==============
Builds the tapered polyline used to draw force and moment arrows.

An arrow is four colinear control points plus a width profile keyed at the
same fractions along the arrow:

       .   _1.0
      / \\
     /. .\\ _breakpoint
      | |
      |_|  _0.0

The first two keys share the stem width, the third jumps to the head width
and the last one closes the tip to zero. The second key sits at
``0.999 - breakpoint`` so the stem-to-head step happens over a very short
segment instead of a gradual ramp.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Tuple, TYPE_CHECKING

import numpy as np

from forceplateviz.config import DEFAULT_HEAD_LENGTH, DEFAULT_HEAD_WIDTH
from forceplateviz.model.geometry_primitives import Point, Vector

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Fraction of the shaft kept before the head key. Do not round to 1.0.
SHAFT_END_FRACTION = 0.999


class InvalidInputError(ValueError):
    """Raised when arrow input contains NaN/inf or an invalid head size."""


@dataclass(frozen=True)
class WidthKeyframe:
    """Width of the arrow at fraction `t` of its length."""
    t: float
    width: float


@dataclass(frozen=True)
class ArrowShape:
    control_points: Tuple[Point, ...] = ()
    width_profile: Tuple[WidthKeyframe, ...] = ()
    visible: bool = False
    length: float = 0.0

    @classmethod
    def hidden(cls, length: float = 0.0) -> ArrowShape:
        """An arrow too short to be drawn."""
        return cls(length=length)

    @property
    def start(self) -> Point:
        return self.control_points[0]

    @property
    def end(self) -> Point:
        return self.control_points[-1]

    def width_at(self, t: float) -> float:
        """
        Evaluate the width profile at fraction `t` with linear interpolation
        between keyframes. Values outside the profile are held constant.

        Raises:
            ValueError: If the arrow is not visible (it has no profile).
        """
        if not self.visible:
            raise ValueError("Hidden arrow has no width profile.")
        ts = [k.t for k in self.width_profile]
        widths = [k.width for k in self.width_profile]
        return float(np.interp(t, ts, widths))

    def points_array(self) -> npt.NDArray[np.float64]:
        """Control points as an (N, 3) array."""
        return np.array([p.to_array() for p in self.control_points], dtype=np.float64).reshape(-1, 3)

    def widths_array(self) -> npt.NDArray[np.float64]:
        """Key widths, aligned with `width_profile`."""
        return np.array([k.width for k in self.width_profile], dtype=np.float64)


def _check_finite(name: str, value: Point | Vector) -> None:
    if not value.is_finite():
        raise InvalidInputError(f"{name} must have finite components, got {value}.")


def build_arrow(
    origin: Point,
    direction_and_magnitude: Vector,
    head_length: float = DEFAULT_HEAD_LENGTH,
    head_width: float = DEFAULT_HEAD_WIDTH,
) -> ArrowShape:
    """
    Build the tapered polyline for an arrow starting at `origin`.

    Args:
        origin: Arrow tail in local space.
        direction_and_magnitude: Pointing direction; its magnitude is the
            arrow length (already scaled by the caller).
        head_length: Length of the arrowhead. Also the minimum drawable length.
        head_width: Width at the base of the head. The stem is a quarter of it.

    Returns:
        A visible ArrowShape, or a hidden one if the arrow is shorter than
        `head_length`.

    Raises:
        InvalidInputError: On non-finite input, `head_length <= 0` or
            `head_width < 0`.
    """
    _check_finite("origin", origin)
    _check_finite("direction_and_magnitude", direction_and_magnitude)
    if not (math.isfinite(head_length) and head_length > 0.0):
        raise InvalidInputError(f"head_length must be a positive finite number, got {head_length}.")
    if not (math.isfinite(head_width) and head_width >= 0.0):
        raise InvalidInputError(f"head_width must be a non-negative finite number, got {head_width}.")

    end_position = origin + direction_and_magnitude
    length = origin.distance_to(end_position)

    if length < head_length:
        return ArrowShape.hidden(length=length)

    break_point = head_length / length
    stem_width = head_width / 4.0

    # Breakpoints >= 0.999 put the shaft key at or before the origin; kept unclamped.
    fractions = (0.0, SHAFT_END_FRACTION - break_point, 1.0 - break_point, 1.0)
    widths = (stem_width, stem_width, head_width, 0.0)

    control_points = (
        origin,
        origin.lerp(end_position, fractions[1]),
        origin.lerp(end_position, fractions[2]),
        end_position,
    )
    width_profile = tuple(WidthKeyframe(t, w) for t, w in zip(fractions, widths))

    return ArrowShape(
        control_points=control_points,
        width_profile=width_profile,
        visible=True,
        length=length,
    )
