# ──────────────────────────────────────────────────────────────────────────────
# File: hpsizing/validation.py
# Range checks for calculator inputs (camelCase form / JSON keys)
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
import math

# key -> (min, max, display name)
LIMITS: dict[str, tuple[float, float, str]] = {
    "wallArea":            (1, 1000, "Wall Area"),
    "wallU":               (0.1, 2.0, "Wall U-Value"),
    "roofArea":            (1, 1000, "Roof Area"),
    "roofU":               (0.1, 2.0, "Roof U-Value"),
    "floorArea":           (1, 1000, "Floor Area"),
    "floorU":              (0.1, 2.0, "Floor U-Value"),
    "flowTemp":            (30, 80, "Flow Temperature"),
    "maxOutput":           (1, 100, "Max Output"),
    "baseTemp":            (-50, 50, "Base Temperature"),
    "indoorTemp":          (15, 30, "Indoor Temperature"),
    "exceedanceThreshold": (0, 8760, "Exceedance Threshold"),
    "airChanges":          (0, 10, "Air Changes per Hour"),
    "hotWaterUsage":       (0, 500, "Hot Water Usage"),
}


def validate_inputs(data: dict) -> None:
    """Raise ValueError naming the first missing, non-numeric or out-of-range input."""
    for key, (lo, hi, name) in LIMITS.items():
        try:
            value = float(data.get(key))
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {name}") from None
        if math.isnan(value):
            raise ValueError(f"Invalid value for {name}")
        if value < lo or value > hi:
            raise ValueError(f"{name} must be between {lo} and {hi}")
