"""
Motion Sources
==============
Providers of force plate samples for the rendering adapter.

The real-time client that streams samples from the capture system lives
outside this package; anything implementing `MotionSource` can stand in for it.

Classes:
    MotionSource: Interface, returns the latest sample for a plate or None.
    StaticMotionSource: Fixed samples keyed by plate name.
    ReplayMotionSource: Steps through recorded frames, one per call.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Union, runtime_checkable

from forceplateviz.model.force_plate import ForceSample, SampleFormatError, sample_from_arrays

logger = logging.getLogger(__name__)

# One frame maps plate names to samples; a missing name means "not tracked"
Frame = Dict[str, ForceSample]


@runtime_checkable
class MotionSource(Protocol):
    def get_force_sample(self, name: str) -> Optional[ForceSample]:
        """Latest sample for the named plate, or None if it is not tracked."""
        ...


class StaticMotionSource:
    """Always returns the same samples. Useful for stills and tests."""

    def __init__(self, samples: Iterable[ForceSample] = ()) -> None:
        self._samples: Dict[str, ForceSample] = {s.name: s for s in samples}

    def set_sample(self, sample: ForceSample) -> None:
        self._samples[sample.name] = sample

    def remove_sample(self, name: str) -> None:
        self._samples.pop(name, None)

    def get_force_sample(self, name: str) -> Optional[ForceSample]:
        return self._samples.get(name)


class ReplayMotionSource:
    """
    Replays recorded frames.

    Each call to `advance()` moves to the next frame; `get_force_sample` reads
    from the current frame so several plates can be queried within one tick.
    With `loop=True` the replay wraps around, otherwise it holds the last frame.
    """

    def __init__(self, frames: List[Frame], loop: bool = True) -> None:
        self._frames = frames
        self._loop = loop
        self._index = 0

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def index(self) -> int:
        return self._index

    def advance(self) -> None:
        if not self._frames:
            return
        if self._index + 1 < len(self._frames):
            self._index += 1
        elif self._loop:
            self._index = 0

    def get_force_sample(self, name: str) -> Optional[ForceSample]:
        if not self._frames:
            return None
        return self._frames[self._index].get(name)

    @classmethod
    def from_json(cls, path: Union[str, Path], loop: bool = True) -> ReplayMotionSource:
        """
        Load a recording.

        Expected format::

            {"frames": [
                {"Force-plate 1": {"transform": [[...4x4...]],
                                   "corners": [[x, y, z], ... 4 ...],
                                   "application_point": [x, y, z],
                                   "force": [x, y, z],
                                   "moment": [x, y, z],
                                   "timestamp": 0.0}},
                {}
            ]}

        An empty frame object is a tick where no plate was tracked.

        Raises:
            SampleFormatError: If the file content does not match the format.
        """
        logger.info(f"Loading recording from: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise SampleFormatError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("frames"), list):
            raise SampleFormatError("Recording must be an object with a 'frames' list.")

        frames: List[Frame] = []
        for i, raw_frame in enumerate(data["frames"]):
            if not isinstance(raw_frame, dict):
                raise SampleFormatError(f"Frame {i} must be an object.")
            frame: Frame = {}
            for name, raw in raw_frame.items():
                try:
                    frame[name] = sample_from_arrays(
                        name=name,
                        transform=raw["transform"],
                        corners=raw["corners"],
                        application_point=raw["application_point"],
                        force=raw["force"],
                        moment=raw["moment"],
                        timestamp=raw.get("timestamp"),
                    )
                except (KeyError, TypeError, AttributeError) as e:
                    raise SampleFormatError(f"Frame {i}, plate '{name}': missing or invalid field {e}") from e
            frames.append(frame)

        logger.info(f"Loaded {len(frames)} frames.")
        return cls(frames, loop=loop)
