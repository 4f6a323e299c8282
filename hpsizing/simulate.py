# ──────────────────────────────────────────────────────────────────────────────
# File: hpsizing/simulate.py
# Simulates a year of hourly heat demand and heat pump electricity use
# ──────────────────────────────────────────────────────────────────────────────

from __future__ import annotations
import logging
from typing import Iterable

import numpy as np
import pandas as pd

from .heating import cop, heat_loss_kw, hot_water_kw
from .params import (
    BuildingParameters,
    HeatPumpParameters,
    HourlyPoint,
    HourlySample,
    SimulationResult,
)
from .timekeys import decode_time_key

logger = logging.getLogger(__name__)


def simulate(
    building: BuildingParameters,
    heat_pump: HeatPumpParameters,
    samples: Iterable[HourlySample],
    fabric_only: bool = False,
) -> SimulationResult:
    """Run the annual simulation over hourly samples (one sample = one hour).

    fabric_only drops the ventilation and hot-water terms, which reproduces
    the earlier fabric-loss-only version of the calculator.
    """
    samples = list(samples)
    logger.debug("Simulating %d hourly samples (fabric_only=%s)", len(samples), fabric_only)
    if not samples:
        return SimulationResult()

    hourly = hourly_table(building, heat_pump, samples, fabric_only=fabric_only)

    total_heat = float(hourly["total_kW"].sum())
    total_elec = float(hourly["elec_kWh"].sum())
    average_cop = total_heat / total_elec if total_elec > 0 else 0.0

    monthly = (
        hourly.groupby("month")["elec_kWh"]
        .sum()
        .reindex(range(1, 13), fill_value=0.0)
    )

    # Exceedance counts space heating only; sizing below uses the total load.
    hours_exceeding = int((hourly["heat_kW"] > heat_pump.max_output).sum())

    points = tuple(
        HourlyPoint(int(d), int(h), float(t), float(e))
        for d, h, t, e in zip(
            hourly["day_of_year"], hourly["hour"], hourly["T_out_C"], hourly["elec_kWh"]
        )
    )

    result = SimulationResult(
        total_heat_energy=total_heat,
        total_electrical_energy=total_elec,
        average_cop=average_cop,
        hours_exceeding_capacity=hours_exceeding,
        peak_heat_load=max(0.0, float(hourly["total_kW"].max())),
        monthly_electrical_energy=tuple(float(v) for v in monthly.to_numpy()),
        hourly_data=points,
        recommended_min_size=recommended_min_size(
            hourly["total_kW"].to_numpy(), heat_pump.exceedance_threshold
        ),
    )
    logger.info(
        "Annual heat %.1f kWh, electricity %.1f kWh, SCOP %.2f, peak %.2f kW, "
        "recommended size %.2f kW",
        result.total_heat_energy,
        result.total_electrical_energy,
        result.average_cop,
        result.peak_heat_load,
        result.recommended_min_size,
    )
    return result


def hourly_table(
    building: BuildingParameters,
    heat_pump: HeatPumpParameters,
    samples: list[HourlySample],
    fabric_only: bool = False,
) -> pd.DataFrame:
    """One row per sample, in source order.

    columns: [month, day_of_year, hour, T_out_C, heat_kW, total_kW, COP, elec_kWh]
    """
    keys = [decode_time_key(s.time_key) for s in samples]
    tout = np.array([float(s.outdoor_temp) for s in samples], dtype=float)

    air_changes = 0.0 if fabric_only else building.air_changes
    hw_kW = 0.0 if fabric_only else hot_water_kw(heat_pump.hot_water_usage)

    loss = heat_loss_kw(
        building.wall_area, building.wall_u,
        building.roof_area, building.roof_u,
        building.floor_area, building.floor_u,
        building.indoor_temp, tout,
        air_changes,
    )
    # heating only runs below the base (balance) temperature
    heat_kW = np.where(tout < heat_pump.base_temp, loss, 0.0)
    total_kW = heat_kW + hw_kW
    COP = np.asarray(cop(heat_pump.flow_temp, tout), dtype=float)

    return pd.DataFrame(
        {
            "month": [k.month for k in keys],
            "day_of_year": [k.day_of_year for k in keys],
            "hour": [k.hour for k in keys],
            "T_out_C": tout,
            "heat_kW": heat_kW,
            "total_kW": total_kW,
            "COP": COP,
            "elec_kWh": total_kW / COP,
        }
    )


def recommended_min_size(loads, exceedance_threshold: int) -> float:
    """Smallest capacity that at most `exceedance_threshold` hours exceed.

    The loads are sorted high to low and the value at the (clamped)
    threshold index is returned; 0.0 for no loads.
    """
    ranked = np.sort(np.asarray(loads, dtype=float))[::-1]
    if ranked.size == 0:
        return 0.0
    idx = min(max(0, int(exceedance_threshold)), ranked.size - 1)
    return float(ranked[idx])
