from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import Any, Dict, Optional

import yaml

from .algorithms import PLACEMENT_RULES
from .units import FULL_PALLET

logger = logging.getLogger(__name__)

SETTINGS_ENV = "PALLET_ASSIGNMENT_SETTINGS"


@dataclass(frozen=True)
class PackingPolicy:
    capacity_percent: float = FULL_PALLET
    eps: float = 1e-6
    strategy: str = "first_fit"
    max_workers: int = 1

    def __post_init__(self) -> None:
        if not math.isfinite(self.capacity_percent) or self.capacity_percent <= 0:
            raise ValueError(f"capacity_percent must be positive, got {self.capacity_percent!r}")
        if not math.isfinite(self.eps) or self.eps < 0:
            raise ValueError(f"eps must be non-negative, got {self.eps!r}")
        if self.strategy not in PLACEMENT_RULES:
            raise ValueError(f"unknown packing strategy {self.strategy!r}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers!r}")


DEFAULT_PACKING_POLICY = PackingPolicy()

_CASTS = {
    "capacity_percent": float,
    "eps": float,
    "strategy": str,
    "max_workers": int,
}


def default_settings_path() -> str:
    env_path = os.getenv(SETTINGS_ENV)
    if env_path:
        return os.path.expanduser(env_path)
    return os.path.join(os.path.dirname(__file__), "settings.yaml")


def policy_from_mapping(data: Dict[str, Any], base: PackingPolicy = DEFAULT_PACKING_POLICY) -> PackingPolicy:
    known = {f.name for f in fields(PackingPolicy)}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown packing setting %r", key)
            continue
        try:
            values[key] = _CASTS[key](value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid value for packing setting {key!r}: {value!r}") from e
    return replace(base, **values)


@lru_cache(maxsize=None)
def load_policy(path: Optional[str] = None) -> PackingPolicy:
    """Load the packing policy from ``settings.yaml`` when it exists."""

    settings_path = path or default_settings_path()
    if not os.path.exists(settings_path):
        logger.debug("No settings file at %s, using defaults", settings_path)
        return DEFAULT_PACKING_POLICY
    with open(settings_path, "r", encoding="utf-8") as f:
        try:
            loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in settings file {settings_path}: {e}") from e
    if not isinstance(loaded, dict):
        raise ValueError(f"Settings file {settings_path} must contain a mapping")
    section = loaded.get("packing", loaded)
    if not isinstance(section, dict):
        raise ValueError(f"'packing' section in {settings_path} must be a mapping")
    return policy_from_mapping(section)
