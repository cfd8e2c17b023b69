#!/usr/bin/env python3
"""
Preset JSON loading utilities.

A preset overrides any subset of the SimulationConfig fields; omitted fields
keep their defaults.

Schema
======
Preset JSON (kickorbit/templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "config": {
    "gravitational_constant": 3700.0,
    "primary_mass": 1000.0,
    "secondary_mass": 1.0,
    "primary_radius": 20.0,
    "secondary_radius": 5.0,
    "initial_separation": 150.0,
    "timestep": 0.01,
    "trail_capacity": 1000,
    "collision_slack": 0.8,
    "origin": [400.0, 300.0],
    "kick_indicator_duration": 1.0
  }
}

Users can add their own JSON files into the templates folder and they'll be
picked up by the loader.
"""
import dataclasses
import json
import logging
import os
from typing import List, Optional, Tuple

from .data_models import SimulationConfig
from .errors import ConfigurationError
from .vector_utils import Vector2

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")

_CONFIG_FIELDS = {f.name for f in dataclasses.fields(SimulationConfig)}
_INT_FIELDS = {"trail_capacity"}


def _read_json(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read preset {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in preset {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Preset {path} must contain a JSON object")
    return data


def _coerce_value(name: str, value):
    try:
        if name == "origin":
            return Vector2(float(value[0]), float(value[1]))
        if name in _INT_FIELDS:
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(value)
            return int(value)
        return float(value)
    except (TypeError, ValueError, IndexError) as exc:
        raise ConfigurationError(f"Invalid value for {name}: {value!r}") from exc


def config_from_dict(data: dict, base: Optional[SimulationConfig] = None) -> SimulationConfig:
    """Build a SimulationConfig from a mapping of field overrides."""
    unknown = set(data) - _CONFIG_FIELDS
    if unknown:
        raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    overrides = {name: _coerce_value(name, value) for name, value in data.items()}
    return (base or SimulationConfig()).replace(**overrides)


def load_config_file(path: str) -> Tuple[SimulationConfig, str]:
    """
    Load a preset JSON file from any path.
    Returns (config, display_name)
    """
    data = _read_json(path)
    display_name = data.get("name") or os.path.splitext(os.path.basename(path))[0]
    config = config_from_dict(data.get("config", {}))
    return config, display_name


def list_templates() -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available presets."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(TEMPLATES_DIR):
        return items
    for fn in sorted(os.listdir(TEMPLATES_DIR)):
        if not fn.lower().endswith(".json"):
            continue
        display = os.path.splitext(fn)[0]
        try:
            display = _read_json(os.path.join(TEMPLATES_DIR, fn)).get("name") or display
        except ConfigurationError as exc:
            logger.warning("Skipping display name of %s: %s", fn, exc)
        items.append((fn, display))
    return items


def load_template(file_name: str) -> Tuple[SimulationConfig, str]:
    """
    Load a bundled preset by file name.
    Returns (config, display_name)
    """
    return load_config_file(os.path.join(TEMPLATES_DIR, file_name))
