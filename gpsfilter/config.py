from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

import yaml


@dataclass
class FilterParams:
    noise: float = 1.0  # observation noise multiplier
    pos_noise: float = 1e-6  # position variance (process and observation)
    vel_noise: float = 1.0  # velocity process variance
    unit_scale: float = 0.001  # velocity units -> position units per second
    position_scale: float = 1000.0  # degrees -> position units
    initial_variance: float = 1e12  # "unknown" start

    def __post_init__(self) -> None:
        for name in ("pos_noise", "vel_noise", "unit_scale", "position_scale", "initial_variance"):
            v = float(getattr(self, name))
            if not math.isfinite(v) or v <= 0.0:
                raise ValueError(f"{name} must be a positive finite number, got {v}")
            setattr(self, name, v)


@dataclass
class ReaderParams:
    dt: float = 1.0  # seconds between fixes

    def __post_init__(self) -> None:
        self.dt = float(self.dt)
        if not math.isfinite(self.dt) or self.dt <= 0.0:
            raise ValueError(f"dt must be a positive finite number, got {self.dt}")


def _section(cfg: Dict[str, Any], name: str, cls) -> Dict[str, Any]:
    sec = cfg.get(name) or {}
    if not isinstance(sec, dict):
        raise ValueError(f"config section '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(sec) - known)
    if unknown:
        raise ValueError(f"unknown keys in '{name}': {unknown}")
    return {k: float(v) for k, v in sec.items()}


def load_config(path: str | None) -> Tuple[FilterParams, ReaderParams]:
    """Load filter/reader params from YAML; defaults when path is missing."""
    if not path or not os.path.exists(path):
        return FilterParams(), ReaderParams()
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config root must be a mapping: {path}")
    return (
        FilterParams(**_section(cfg, "filter", FilterParams)),
        ReaderParams(**_section(cfg, "reader", ReaderParams)),
    )
