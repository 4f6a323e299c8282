# hpsizing/data_loading.py
from __future__ import annotations
from pathlib import Path
import json
import logging

import numpy as np
import pandas as pd

from .params import BuildingParameters, HeatPumpParameters, HourlySample
from .validation import validate_inputs

logger = logging.getLogger(__name__)

TIME_COL = "time(UTC)"
TEMP_COL = "T2m"

DEFAULT_EXCEEDANCE_THRESHOLD = 24  # hours, the only optional input

# Semi-detached house, used by the apps when nothing else is supplied
DEFAULT_INPUTS: dict = {
    "wallArea": 120.0, "wallU": 0.20,
    "roofArea": 80.0, "roofU": 0.15,
    "floorArea": 80.0, "floorU": 0.18,
    "indoorTemp": 20.0, "airChanges": 0.5,
    "flowTemp": 45.0, "maxOutput": 8.0,
    "baseTemp": 15.5, "hotWaterUsage": 150.0,
    "exceedanceThreshold": DEFAULT_EXCEEDANCE_THRESHOLD,
}


class WeatherDataError(ValueError):
    pass


# you can call this with either str or Path
def _to_path(p) -> Path:
    return Path(p).expanduser().resolve()


def weather_from_pvgis(payload: dict) -> pd.DataFrame:
    """PVGIS TMY JSON -> columns: time(UTC), T2m"""
    try:
        rows = payload["outputs"]["tmy_hourly"]
    except (KeyError, TypeError):
        raise WeatherDataError("Invalid weather data received from PVGIS") from None
    if not rows:
        return pd.DataFrame({TIME_COL: pd.Series(dtype=str), TEMP_COL: pd.Series(dtype=float)})
    df = pd.DataFrame(rows)
    return _normalise_weather(df)


def _normalise_weather(df: pd.DataFrame) -> pd.DataFrame:
    if TEMP_COL not in df.columns and "T_out_C" in df.columns:
        df = df.rename(columns={"T_out_C": TEMP_COL})
    if TIME_COL not in df.columns and "time" in df.columns:
        df = df.rename(columns={"time": TIME_COL})
    if TEMP_COL not in df.columns:
        raise WeatherDataError("Invalid weather data received from PVGIS")
    if TIME_COL not in df.columns:
        df = df.assign(**{TIME_COL: ""})
    df = df[[TIME_COL, TEMP_COL]].copy()
    df[TIME_COL] = df[TIME_COL].fillna("").astype(str)
    df[TEMP_COL] = df[TEMP_COL].astype(float)
    return df.reset_index(drop=True)


def load_weather(path: str | Path, fmt: str | None = None) -> pd.DataFrame:
    """Load a saved PVGIS TMY file (.json) or an hourly CSV -> columns: time(UTC), T2m

    fmt overrides the format taken from the file suffix ("json" or "csv").
    """
    path = _to_path(path)
    fmt = (fmt or path.suffix.lstrip(".")).lower()
    if fmt == "json":
        with open(path, "r", encoding="utf-8") as f:
            df = weather_from_pvgis(json.load(f))
    else:
        # plain csv with a time(UTC),T2m header row; the metadata preamble of
        # a raw PVGIS csv export must be stripped first
        df = _normalise_weather(pd.read_csv(path))
    logger.info("Loaded %d hourly weather rows from %s", len(df), path.name)
    return df


def weather_files(folder: str | Path) -> list[Path]:
    """.json / .csv files in folder that load as hourly weather, sorted by name"""
    folder = _to_path(folder)
    if not folder.is_dir():
        return []
    found = []
    for p in sorted(folder.iterdir()):
        if p.suffix.lower() not in (".json", ".csv"):
            continue
        try:
            load_weather(p)
        except (ValueError, OSError) as e:
            logger.warning("Skipping %s, not a weather file: %s", p.name, e)
            continue
        found.append(p)
    return found


def synthetic_weather(
    hours: int = 8760, avg_temp_c: float = 10.0, swing_c: float = 5.0, year: int = 2007
) -> pd.DataFrame:
    """Sinusoidal stand-in year, avg_temp_c +/- swing_c, with PVGIS-style time keys."""
    i = np.arange(int(hours))
    stamps = pd.date_range(f"{year}-01-01", periods=int(hours), freq="h")
    return pd.DataFrame(
        {
            TIME_COL: stamps.strftime("%Y%m%d:%H%M"),
            TEMP_COL: avg_temp_c + np.sin(i / 12.0) * swing_c,
        }
    )


def samples_from_frame(df: pd.DataFrame) -> list[HourlySample]:
    df = _normalise_weather(df)
    return [
        HourlySample(outdoor_temp=float(t), time_key=k)
        for k, t in zip(df[TIME_COL], df[TEMP_COL])
    ]


def parameters_from_dict(data: dict) -> tuple[BuildingParameters, HeatPumpParameters]:
    """Validate camelCase inputs and build records.

    Every key is required except exceedanceThreshold, which defaults to 24.
    """
    merged = dict(data)
    if merged.get("exceedanceThreshold") is None:
        merged["exceedanceThreshold"] = DEFAULT_EXCEEDANCE_THRESHOLD
    validate_inputs(merged)
    building = BuildingParameters(
        wall_area=float(merged["wallArea"]),
        wall_u=float(merged["wallU"]),
        roof_area=float(merged["roofArea"]),
        roof_u=float(merged["roofU"]),
        floor_area=float(merged["floorArea"]),
        floor_u=float(merged["floorU"]),
        indoor_temp=float(merged["indoorTemp"]),
        air_changes=float(merged["airChanges"]),
    )
    heat_pump = HeatPumpParameters(
        flow_temp=float(merged["flowTemp"]),
        max_output=float(merged["maxOutput"]),
        base_temp=float(merged["baseTemp"]),
        hot_water_usage=float(merged["hotWaterUsage"]),
        exceedance_threshold=int(float(merged["exceedanceThreshold"])),
    )
    return building, heat_pump


def load_parameters(path: str | Path) -> tuple[BuildingParameters, HeatPumpParameters]:
    """Load a JSON file of calculator inputs"""
    path = _to_path(path)
    with open(path, "r", encoding="utf-8") as f:
        return parameters_from_dict(json.load(f))
