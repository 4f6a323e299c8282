# Tests for the annual hourly simulation and capacity sizing

import dataclasses

import pytest

from hpsizing.heating import heat_loss_kw, hot_water_kw
from hpsizing.params import HourlySample, SimulationResult
from hpsizing.simulate import hourly_table, recommended_min_size, simulate


def _loss(house, tout):
    return heat_loss_kw(
        house.wall_area, house.wall_u, house.roof_area, house.roof_u,
        house.floor_area, house.floor_u, house.indoor_temp, tout, house.air_changes,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 1. Empty input
# ─────────────────────────────────────────────────────────────────────────────
def test_empty_samples_give_zero_result(house, heat_pump):
    result = simulate(house, heat_pump, [])

    assert result == SimulationResult()
    assert result.total_heat_energy == 0
    assert result.total_electrical_energy == 0
    assert result.average_cop == 0
    assert result.hours_exceeding_capacity == 0
    assert result.peak_heat_load == 0
    assert result.recommended_min_size == 0
    assert sum(result.monthly_electrical_energy) == 0
    assert result.hourly_data == ()
    assert result.to_dict()["hourlyDataCollection"] == []
    assert result.hourly_frame().empty


# ─────────────────────────────────────────────────────────────────────────────
# 2. Constant cold weather
# ─────────────────────────────────────────────────────────────────────────────
def test_single_cold_hour(house, heat_pump):
    result = simulate(house, heat_pump, [HourlySample(0.0, "20070115:0800")])

    assert result.total_heat_energy == pytest.approx(1.6416)
    # flow 45, diff 45 -> COP 2.5
    assert result.total_electrical_energy == pytest.approx(1.6416 / 2.5)
    assert result.average_cop == pytest.approx(2.5)
    assert result.peak_heat_load == pytest.approx(1.6416)
    assert result.hours_exceeding_capacity == 1
    assert result.recommended_min_size == pytest.approx(1.6416)
    point = result.hourly_data[0]
    assert (point.day_of_year, point.hour, point.temperature) == (15, 8, 0.0)


def test_constant_temperature_totals(house, heat_pump, make_samples):
    n = 72
    result = simulate(house, heat_pump, make_samples(-3.0, n))
    per_hour = _loss(house, -3.0)

    assert result.total_heat_energy == pytest.approx(n * per_hour)
    assert sum(result.monthly_electrical_energy) == pytest.approx(result.total_electrical_energy)
    assert result.monthly_electrical_energy[0] == pytest.approx(result.total_electrical_energy)
    assert result.hours_exceeding_capacity == n
    assert len(result.hourly_data) == n


def test_no_heating_at_or_above_base_temperature(house, heat_pump, make_samples):
    result = simulate(house, heat_pump, make_samples(heat_pump.base_temp, 24))

    assert result.total_heat_energy == 0
    assert result.total_electrical_energy == 0
    assert result.average_cop == 0
    assert result.peak_heat_load == 0


def test_peak_never_negative(house, heat_pump, make_samples):
    # base above indoor: 22 °C outside heats "negatively"
    hp = dataclasses.replace(heat_pump, base_temp=25)
    result = simulate(house, hp, make_samples(22.0, 5))
    assert result.total_heat_energy < 0
    assert result.peak_heat_load == 0


# ─────────────────────────────────────────────────────────────────────────────
# 3. Hot water
# ─────────────────────────────────────────────────────────────────────────────
def test_hot_water_added_to_every_hour(house, heat_pump, make_samples):
    hp = dataclasses.replace(heat_pump, hot_water_usage=150)
    n = 48
    result = simulate(house, hp, make_samples(18.0, n))
    hw = hot_water_kw(150)

    assert hw == pytest.approx(0.290694, rel=1e-5)
    assert result.total_heat_energy == pytest.approx(n * hw)
    assert result.peak_heat_load == pytest.approx(hw)
    # flow 45, diff 27 -> COP 3.5
    assert result.total_electrical_energy == pytest.approx(n * hw / 3.5)
    assert result.hours_exceeding_capacity == 0
    assert result.recommended_min_size == pytest.approx(hw)


def test_exceedance_counts_space_heating_only(house, heat_pump, make_samples):
    # hot water alone would push the total over max_output
    hp = dataclasses.replace(heat_pump, max_output=1.7, hot_water_usage=150)
    result = simulate(house, hp, make_samples(0.0, 10))

    assert _loss(house, 0.0) < hp.max_output
    assert result.peak_heat_load > hp.max_output
    assert result.hours_exceeding_capacity == 0
    assert result.recommended_min_size == pytest.approx(_loss(house, 0.0) + hot_water_kw(150))


# ─────────────────────────────────────────────────────────────────────────────
# 4. Monthly and hourly series
# ─────────────────────────────────────────────────────────────────────────────
def test_monthly_buckets_and_order(house, heat_pump):
    samples = [
        HourlySample(5.0, "20070110:0100"),
        HourlySample(-5.0, "20070705:1200"),
        HourlySample(0.0, "20071231:2300"),
        HourlySample(2.0, ""),
    ]
    result = simulate(house, heat_pump, samples)
    monthly = result.monthly_electrical_energy

    assert len(monthly) == 12
    assert monthly[0] == pytest.approx(result.hourly_data[0].electrical_energy
                                       + result.hourly_data[3].electrical_energy)
    assert monthly[6] == pytest.approx(result.hourly_data[1].electrical_energy)
    assert monthly[11] == pytest.approx(result.hourly_data[2].electrical_energy)
    assert sum(monthly) == pytest.approx(result.total_electrical_energy)

    assert [(p.day_of_year, p.hour) for p in result.hourly_data] == [
        (10, 1), (186, 12), (365, 23), (1, 0),
    ]
    assert [p.temperature for p in result.hourly_data] == [5.0, -5.0, 0.0, 2.0]


def test_to_dict_shape(house, heat_pump):
    result = simulate(house, heat_pump, [HourlySample(0.0, "20070115:0800")])
    d = result.to_dict()

    assert set(d) == {
        "totalHeatEnergy", "electricalEnergy", "averageCoP", "hoursExceedingCapacity",
        "peakHeatLoad", "monthlyElectricalEnergy", "hourlyDataCollection", "recommendedMinSize",
    }
    assert len(d["monthlyElectricalEnergy"]) == 12
    assert d["hourlyDataCollection"] == [
        {"dayOfYear": 15, "hour": 8, "temperature": 0.0,
         "electricalEnergy": pytest.approx(1.6416 / 2.5)},
    ]


def test_hourly_table_columns(house, heat_pump, make_samples):
    df = hourly_table(house, heat_pump, make_samples(0.0, 3))
    assert list(df.columns) == [
        "month", "day_of_year", "hour", "T_out_C", "heat_kW", "total_kW", "COP", "elec_kWh",
    ]
    assert list(df["hour"]) == [0, 1, 2]
    assert (df["COP"] == 2.5).all()


# ─────────────────────────────────────────────────────────────────────────────
# 5. Fabric-only mode
# ─────────────────────────────────────────────────────────────────────────────
def test_fabric_only_drops_ventilation_and_hot_water(house, heat_pump, make_samples):
    hp = dataclasses.replace(heat_pump, hot_water_usage=150)
    result = simulate(house, hp, make_samples(0.0, 10), fabric_only=True)

    # (24 + 12 + 14.4) W/K x 20 K
    assert result.total_heat_energy == pytest.approx(10 * 1.008)
    assert result.peak_heat_load == pytest.approx(1.008)


def test_fabric_only_warm_hours_use_no_energy(house, heat_pump, make_samples):
    hp = dataclasses.replace(heat_pump, hot_water_usage=150)
    result = simulate(house, hp, make_samples(18.0, 10), fabric_only=True)
    assert result.total_electrical_energy == 0
    assert result.average_cop == 0


# ─────────────────────────────────────────────────────────────────────────────
# 6. Sizing
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "threshold, expected",
    [(0, 5.0), (1, 4.0), (2, 3.0), (4, 1.0), (10, 1.0), (-3, 5.0)],
)
def test_recommended_min_size_index(threshold, expected):
    assert recommended_min_size([5.0, 1.0, 3.0, 2.0, 4.0], threshold) == expected


def test_recommended_min_size_empty():
    assert recommended_min_size([], 24) == 0.0


def test_sizing_non_increasing_with_threshold(house, heat_pump):
    temps = [-8, -5, -2, 0, 1, 3, 4, 6, 8, 10, 12, 14, 16, 18]
    samples = [HourlySample(float(t), "20070101:0000") for t in temps]
    sizes = []
    for k in range(len(samples) + 2):
        hp = dataclasses.replace(heat_pump, hot_water_usage=100, exceedance_threshold=k)
        sizes.append(simulate(house, hp, samples).recommended_min_size)

    assert all(a >= b for a, b in zip(sizes, sizes[1:]))
    assert sizes[0] == pytest.approx(_loss(house, -8.0) + hot_water_kw(100))
    # temperatures at or above base only carry hot water
    assert sizes[-1] == pytest.approx(hot_water_kw(100))


def test_at_most_threshold_hours_exceed_recommended_size(house, heat_pump, make_samples):
    samples = [HourlySample(float(t), "20070101:0000") for t in range(-10, 15)]
    hp = dataclasses.replace(heat_pump, exceedance_threshold=5)
    result = simulate(house, hp, samples)
    loads = hourly_table(house, hp, samples)["total_kW"]
    assert (loads > result.recommended_min_size).sum() <= 5
