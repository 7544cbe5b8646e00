"""
Scene Renderer Interface
The drawing side of the force plate adapter. Implementations own the mapping
from the adapter's local space into world space.
"""
from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from forceplateviz.model.arrow import ArrowShape
from forceplateviz.model.force_plate import PlateBox
from forceplateviz.model.overlay import DebugOverlay

FORCE_ARROW = "force"
MOMENT_ARROW = "moment"


@runtime_checkable
class SceneRenderer(Protocol):
    def show_plate(self, box: Optional[PlateBox]) -> None:
        """Place the plate proxy box, or hide it when `box` is None."""
        ...

    def show_arrow(self, key: str, shape: Optional[ArrowShape]) -> None:
        """
        Update the arrow object `key`.

        None hides the whole object (no sample). A hidden ArrowShape keeps the
        object but skips drawing it this frame.
        """
        ...

    def draw_overlay(self, overlay: DebugOverlay) -> None:
        ...

    def clear_overlay(self) -> None:
        ...

    def render(self) -> None:
        ...
