# ──────────────────────────────────────────────────────────────────────────────
# File: hpsizing/params.py
# Input and output records for the annual simulation
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
from dataclasses import dataclass, field, asdict

import pandas as pd

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class BuildingParameters:
    wall_area: float
    wall_u: float
    roof_area: float
    roof_u: float
    floor_area: float
    floor_u: float
    indoor_temp: float
    air_changes: float = 0.5


@dataclass(frozen=True)
class HeatPumpParameters:
    flow_temp: float
    max_output: float
    base_temp: float
    hot_water_usage: float = 0.0
    exceedance_threshold: int = 24


@dataclass(frozen=True)
class HourlySample:
    outdoor_temp: float
    time_key: str = ""


@dataclass(frozen=True)
class HourlyPoint:
    day_of_year: int
    hour: int
    temperature: float
    electrical_energy: float


@dataclass(frozen=True)
class SimulationResult:
    """Annual totals (kWh), peak and sizing (kW) plus the chart series."""

    total_heat_energy: float = 0.0
    total_electrical_energy: float = 0.0
    average_cop: float = 0.0
    hours_exceeding_capacity: int = 0
    peak_heat_load: float = 0.0
    monthly_electrical_energy: tuple[float, ...] = (0.0,) * 12
    hourly_data: tuple[HourlyPoint, ...] = field(default_factory=tuple)
    recommended_min_size: float = 0.0

    def to_dict(self) -> dict:
        """Camel-cased record as served to the browser front end."""
        return {
            "totalHeatEnergy": self.total_heat_energy,
            "electricalEnergy": self.total_electrical_energy,
            "averageCoP": self.average_cop,
            "hoursExceedingCapacity": self.hours_exceeding_capacity,
            "peakHeatLoad": self.peak_heat_load,
            "monthlyElectricalEnergy": list(self.monthly_electrical_energy),
            "hourlyDataCollection": [
                {
                    "dayOfYear": p.day_of_year,
                    "hour": p.hour,
                    "temperature": p.temperature,
                    "electricalEnergy": p.electrical_energy,
                }
                for p in self.hourly_data
            ],
            "recommendedMinSize": self.recommended_min_size,
        }

    def hourly_frame(self) -> pd.DataFrame:
        cols = ["day_of_year", "hour", "temperature", "electrical_energy"]
        if not self.hourly_data:
            return pd.DataFrame(columns=cols)
        return pd.DataFrame([asdict(p) for p in self.hourly_data], columns=cols)

    def monthly_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "month": list(MONTH_LABELS),
                "kWh": list(self.monthly_electrical_energy),
            }
        )
