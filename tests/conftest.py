"""
Shared fixtures for the heat pump sizing tests.
"""

import pytest
from pathlib import Path

from hpsizing.params import BuildingParameters, HeatPumpParameters, HourlySample


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def data_dir(project_root) -> Path:
    return project_root / "data"


@pytest.fixture
def house() -> BuildingParameters:
    """Semi-detached reference house; 1.6416 kW loss at 0 °C outside."""
    return BuildingParameters(
        wall_area=120, wall_u=0.20,
        roof_area=80, roof_u=0.15,
        floor_area=80, floor_u=0.18,
        indoor_temp=20, air_changes=0.5,
    )


@pytest.fixture
def heat_pump() -> HeatPumpParameters:
    """45 °C flow, no hot water, 1 kW so that cold hours exceed capacity."""
    return HeatPumpParameters(
        flow_temp=45, max_output=1.0, base_temp=15,
        hot_water_usage=0, exceedance_threshold=0,
    )


def constant_samples(temp_c: float, n: int) -> list[HourlySample]:
    """n consecutive hours from 1 Jan 00:00 at a fixed outdoor temperature."""
    out = []
    for i in range(n):
        day, hour = divmod(i, 24)
        # stays inside January for n <= 744
        out.append(HourlySample(temp_c, f"200701{day + 1:02d}:{hour:02d}00"))
    return out


@pytest.fixture
def make_samples():
    return constant_samples
