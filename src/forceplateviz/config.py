"""
Configuration
=============
Central registry for the geometry and display constants of the force plate
visualization.

The defaults give arrows with a 0.15 m head, force drawn at 1/500 and moment
at 1/100 of their value (inverted so the ground reaction force points up out
of the plate) and a 2 cm thick plate.

Exports:
    ArrowConfig: Head length/width of force and moment arrows.
    VisualConfig: Scale factors and sizes of the plate visuals.
    load_config: Read both sections from a JSON file.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Tuple, Union

logger = logging.getLogger(__name__)

# Global Constants
DEFAULT_HEAD_LENGTH: float = 0.15
DEFAULT_HEAD_WIDTH: float = 0.1
DEFAULT_FORCE_SCALE: float = -500.0
DEFAULT_MOMENT_SCALE: float = -100.0
DEFAULT_PLATE_THICKNESS: float = 0.02
DEFAULT_MARKER_RADIUS: float = 0.01
DEFAULT_PLATE_NAME: str = "Force-plate 1"


class ConfigError(ValueError):
    """Raised for unknown keys or out-of-range configuration values."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _checked_kwargs(cls: type, data: Dict[str, Any]) -> Dict[str, float]:
    _require(isinstance(data, dict), f"{cls.__name__} section must be an object, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    _require(not unknown, f"Unknown {cls.__name__} option(s): {', '.join(sorted(unknown))}")
    try:
        return {key: float(value) for key, value in data.items()}
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid {cls.__name__} value: {e}") from e


@dataclass(frozen=True)
class ArrowConfig:
    head_length: float = DEFAULT_HEAD_LENGTH
    head_width: float = DEFAULT_HEAD_WIDTH

    def __post_init__(self) -> None:
        _require(math.isfinite(self.head_length) and self.head_length > 0.0,
                 f"head_length must be positive, got {self.head_length}")
        _require(math.isfinite(self.head_width) and self.head_width >= 0.0,
                 f"head_width must be non-negative, got {self.head_width}")

    @property
    def stem_width(self) -> float:
        return self.head_width / 4.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ArrowConfig:
        return ArrowConfig(**_checked_kwargs(ArrowConfig, data))


@dataclass(frozen=True)
class VisualConfig:
    """
    Display scaling of the plate visuals.

    Force and moment vectors are divided by their scale before being turned
    into arrows. Negative scales flip the vector.
    """
    force_scale: float = DEFAULT_FORCE_SCALE
    moment_scale: float = DEFAULT_MOMENT_SCALE
    plate_thickness: float = DEFAULT_PLATE_THICKNESS
    marker_radius: float = DEFAULT_MARKER_RADIUS

    def __post_init__(self) -> None:
        _require(math.isfinite(self.force_scale) and self.force_scale != 0.0,
                 f"force_scale must be a non-zero number, got {self.force_scale}")
        _require(math.isfinite(self.moment_scale) and self.moment_scale != 0.0,
                 f"moment_scale must be a non-zero number, got {self.moment_scale}")
        _require(math.isfinite(self.plate_thickness) and self.plate_thickness >= 0.0,
                 f"plate_thickness must be non-negative, got {self.plate_thickness}")
        _require(math.isfinite(self.marker_radius) and self.marker_radius > 0.0,
                 f"marker_radius must be positive, got {self.marker_radius}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> VisualConfig:
        return VisualConfig(**_checked_kwargs(VisualConfig, data))


def load_config(path: Union[str, Path]) -> Tuple[ArrowConfig, VisualConfig]:
    """
    Load arrow and visual settings from a JSON file.

    The file holds an object with optional "arrow" and "visual" sections;
    missing sections and keys fall back to the defaults.

    Raises:
        ConfigError: If the file is not a JSON object or contains invalid values.
        OSError: If the file cannot be read.
    """
    logger.info(f"Loading configuration from: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    _require(isinstance(data, dict), f"Configuration root must be an object, got {type(data).__name__}")
    unknown = set(data) - {"arrow", "visual"}
    _require(not unknown, f"Unknown configuration section(s): {', '.join(sorted(unknown))}")

    arrow = ArrowConfig.from_dict(data.get("arrow", {}))
    visual = VisualConfig.from_dict(data.get("visual", {}))
    logger.debug(f"Loaded {arrow} and {visual}")
    return arrow, visual
