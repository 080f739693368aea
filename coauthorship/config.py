"""Configuration for the co-authorship network.

Defaults give a 2200x2200 canvas, the three-stop country palette and
the standard force coefficients. A JSON file can override any top-level
field, plus any field of the nested ``forces`` block.

Usage::

    from coauthorship.config import load_config

    config = load_config("network.json")   # missing/broken file -> defaults
    config.forces.charge_strength           # -50.0

Example ``network.json``::

    {
        "width": 1600,
        "top_countries": 8,
        "forces": {"link_strength": 0.8}
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path

from coauthorship.scales import parse_hex

logger = logging.getLogger(__name__)

# Colour stops for country rank 0, the middle rank and the last rank
DEFAULT_PALETTE = ("#ffcccc", "#ff6666", "#0055ff")
FALLBACK_COLOR = "#a9a9a9"


@dataclass
class ForceParameters:
    """Live-tunable force coefficients owned by the layout engine.

    Args:
        charge_strength: Many-body coefficient; negative repels.
        collide_factor: Multiplier applied to each node radius for
            collision avoidance.
        link_strength: Spring coefficient along every edge.
        link_distance: Spring rest length.
        center_strength: Pull toward the canvas centre, per axis.
    """

    charge_strength: float = -50.0
    collide_factor: float = 1.5
    link_strength: float = 0.5
    link_distance: float = 150.0
    center_strength: float = 0.1


@dataclass
class NetworkConfig:
    """Canvas, encoding and simulation settings."""

    width: int = 2200
    height: int = 2200
    offset_y: int = 50
    radius_range: tuple[float, float] = (3.0, 12.0)
    stroke_range: tuple[float, float] = (1.0, 5.0)
    top_countries: int = 10
    palette: tuple[str, str, str] = DEFAULT_PALETTE
    fallback_color: str = FALLBACK_COLOR
    link_color: str = "#aaa"
    link_opacity: float = 0.6
    max_ticks: int = 300
    seed: int = 0
    forces: ForceParameters = field(default_factory=ForceParameters)


def _coerce(default, value):
    """Convert *value* to the shape and type of *default*.

    Raises:
        TypeError: If *value* is not a string, number or list as required.
        ValueError: If a list has the wrong length.
    """
    if isinstance(default, tuple):
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"expected a list, got {value!r}")
        if len(value) != len(default):
            raise ValueError(f"expected {len(default)} items, got {len(value)}")
        return tuple(_coerce(d, v) for d, v in zip(default, value))
    if isinstance(default, str):
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {value!r}")
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return type(default)(value)


def config_from_dict(data: dict) -> NetworkConfig:
    """Build a ``NetworkConfig`` from a plain dict.

    Unknown keys and values of the wrong type are logged and skipped; the
    affected field keeps its default.
    """
    config = NetworkConfig()
    known = {f.name for f in fields(NetworkConfig)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        if key == "forces":
            if not isinstance(value, dict):
                logger.warning("Ignoring config key 'forces': expected an object, got %r", value)
                continue
            config.forces = _forces_from_dict(value)
            continue
        try:
            coerced = _coerce(getattr(config, key), value)
            if key == "palette":
                for color in coerced:
                    parse_hex(color)
            setattr(config, key, coerced)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring config key %r: %s", key, e)
    return config


def _forces_from_dict(data: dict) -> ForceParameters:
    forces = ForceParameters()
    known = {f.name for f in fields(ForceParameters)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown force parameter %r", key)
            continue
        try:
            setattr(forces, key, _coerce(getattr(forces, key), value))
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring force parameter %r: %s", key, e)
    return forces


def load_config(path: str | Path | None = None) -> NetworkConfig:
    """Load configuration from a JSON file, falling back to defaults.

    Args:
        path: Path to a JSON object with overrides. If None, the
            defaults are returned unchanged.

    Returns:
        A ``NetworkConfig``. A missing or malformed file is logged as a
        warning and yields the defaults.
    """
    if path is None:
        return NetworkConfig()
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not load config %s: %s. Using defaults.", path, e)
        return NetworkConfig()
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object. Using defaults.", path)
        return NetworkConfig()
    return config_from_dict(data)
