# ──────────────────────────────────────────────────────────────────────────────
# File: hpsizing/heating.py
# Steady-state heat loss, hot-water demand and heat pump COP
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
import numpy as np

CEILING_HEIGHT_M = 2.4
AIR_HEAT_CAPACITY_WH_M3K = 0.33

WATER_HEAT_CAPACITY_J_LK = 4186.0
HOT_WATER_RISE_K = 40.0  # 10 °C mains -> 50 °C
J_PER_KWH = 3_600_000.0

# COP step table: rows are flow-temperature tiers, columns are
# (flow - outdoor) bands. Upper bounds are inclusive.
_FLOW_TIERS_C = np.array([35.0, 45.0, 55.0])
_DIFF_BANDS_K = np.array([20.0, 30.0, 40.0])
_COP_TABLE = np.array(
    [
        [4.5, 4.0, 3.5, 3.0],
        [4.0, 3.5, 3.0, 2.5],
        [3.5, 3.0, 2.5, 2.2],
        [3.0, 2.5, 2.2, 2.0],
    ]
)


def heat_loss_kw(
    wall_area: float,
    wall_u: float,
    roof_area: float,
    roof_u: float,
    floor_area: float,
    floor_u: float,
    indoor_temp: float,
    outdoor_temp: float | np.ndarray,
    air_changes: float = 0.5,
) -> float | np.ndarray:
    """Fabric plus ventilation loss in kW.

    Volume is taken as floor_area x 2.4 m. Not clamped: returns <= 0 when
    outdoor_temp >= indoor_temp, callers decide when heating is on.
    """
    delta = indoor_temp - outdoor_temp
    fabric_w = (wall_area * wall_u + roof_area * roof_u + floor_area * floor_u) * delta
    volume_m3 = floor_area * CEILING_HEIGHT_M
    ventilation_w = AIR_HEAT_CAPACITY_WH_M3K * volume_m3 * air_changes * delta
    return (fabric_w + ventilation_w) / 1000.0


def daily_hot_water_kwh(daily_usage_l: float) -> float:
    return float(daily_usage_l) * WATER_HEAT_CAPACITY_J_LK * HOT_WATER_RISE_K / J_PER_KWH


def hot_water_kw(daily_usage_l: float) -> float:
    # Spread evenly over the day
    return daily_hot_water_kwh(daily_usage_l) / 24.0


def cop(flow_temp_c: float, tout_c: float | np.ndarray) -> float | np.ndarray:
    """Look up the COP for a flow temperature and outdoor temperature(s)."""
    tout = np.asarray(tout_c, dtype=float)
    # searchsorted(side="left") puts a value equal to a bound in the lower bin
    tier = np.searchsorted(_FLOW_TIERS_C, float(flow_temp_c), side="left")
    band = np.searchsorted(_DIFF_BANDS_K, float(flow_temp_c) - tout, side="left")
    out = _COP_TABLE[tier, band]
    if out.ndim == 0:
        return float(out)
    return out
