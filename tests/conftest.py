"""Shared pytest fixtures for forceplateviz tests."""

from typing import List, Optional, Tuple

import numpy as np
import pytest

from forceplateviz.model.arrow import ArrowShape
from forceplateviz.model.force_plate import ForceSample, PlateBox
from forceplateviz.model.geometry_primitives import Point, Vector
from forceplateviz.model.overlay import DebugOverlay


PLATE_NAME = "Force-plate 1"


def rotation_x_90() -> np.ndarray:
    """Rotation of +90 degrees about X as a 3x3 matrix."""
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, 0.0, -1.0],
        [0.0, 1.0, 0.0],
    ])


def make_sample(
    transform: Optional[np.ndarray] = None,
    force: Vector = Vector(0.0, 0.0, -700.0),
    moment: Vector = Vector(0.0, 0.0, 5.0),
    application_point: Point = Point(0.1, -0.05, 0.0),
    name: str = PLATE_NAME,
) -> ForceSample:
    return ForceSample(
        name=name,
        transform=np.eye(4) if transform is None else transform,
        corners=(
            Point(-0.3, -0.2, 0.0),
            Point(0.3, -0.2, 0.0),
            Point(0.3, 0.2, 0.0),
            Point(-0.3, 0.2, 0.0),
        ),
        application_point=application_point,
        force=force,
        moment=moment,
        timestamp=0.0,
    )


class RecordingRenderer:
    """SceneRenderer fake that records every call."""

    def __init__(self) -> None:
        self.plates: List[Optional[PlateBox]] = []
        self.arrows: List[Tuple[str, Optional[ArrowShape]]] = []
        self.overlays: List[DebugOverlay] = []
        self.clears = 0
        self.renders = 0

    def show_plate(self, box: Optional[PlateBox]) -> None:
        self.plates.append(box)

    def show_arrow(self, key: str, shape: Optional[ArrowShape]) -> None:
        self.arrows.append((key, shape))

    def draw_overlay(self, overlay: DebugOverlay) -> None:
        self.overlays.append(overlay)

    def clear_overlay(self) -> None:
        self.clears += 1

    def render(self) -> None:
        self.renders += 1

    def last_arrow(self, key: str) -> Optional[ArrowShape]:
        for k, shape in reversed(self.arrows):
            if k == key:
                return shape
        raise KeyError(key)


@pytest.fixture
def sample() -> ForceSample:
    """Level plate at the origin with a 700 N vertical load."""
    return make_sample()


@pytest.fixture
def rotated_sample() -> ForceSample:
    """Plate rotated 90 degrees about X and moved to (1, 2, 3)."""
    transform = np.eye(4)
    transform[:3, :3] = rotation_x_90()
    transform[:3, 3] = [1.0, 2.0, 3.0]
    return make_sample(transform=transform)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()
