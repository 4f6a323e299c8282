# app/app_shiny.py
from shiny import App, ui, render, reactive, req
import pandas as pd
import logging
import sys
from pathlib import Path

# --- make project root importable ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hpsizing.data_loading import (
    DEFAULT_INPUTS,
    WeatherDataError,
    load_weather,
    parameters_from_dict,
    samples_from_frame,
    synthetic_weather,
)
from hpsizing.heating import daily_hot_water_kwh
from hpsizing.simulate import simulate

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

D = DEFAULT_INPUTS


# ---------------------------------------------------------------------
# UI
# ---------------------------------------------------------------------
app_ui = ui.page_sidebar(
    # 1) Sidebar MUST be first
    ui.sidebar(
        ui.h4("Building fabric"),
        ui.input_numeric("wallArea", "Wall area (m²)", D["wallArea"], min=1, max=1000),
        ui.input_numeric("wallU", "Wall U-value (W/m²K)", D["wallU"], min=0.1, max=2.0, step=0.01),
        ui.input_numeric("roofArea", "Roof area (m²)", D["roofArea"], min=1, max=1000),
        ui.input_numeric("roofU", "Roof U-value (W/m²K)", D["roofU"], min=0.1, max=2.0, step=0.01),
        ui.input_numeric("floorArea", "Floor area (m²)", D["floorArea"], min=1, max=1000),
        ui.input_numeric("floorU", "Floor U-value (W/m²K)", D["floorU"], min=0.1, max=2.0, step=0.01),
        ui.input_numeric("airChanges", "Air changes per hour", D["airChanges"], min=0, max=10, step=0.1),
        ui.input_numeric("indoorTemp", "Indoor temperature (°C)", D["indoorTemp"], min=15, max=30),

        ui.hr(),
        ui.h5("Heat pump"),
        ui.input_numeric("flowTemp", "Flow temperature (°C)", D["flowTemp"], min=30, max=80),
        ui.input_numeric("maxOutput", "Max output (kW)", D["maxOutput"], min=1, max=100),
        ui.input_numeric("baseTemp", "Base temperature (°C)", D["baseTemp"], min=-50, max=50, step=0.5),
        ui.input_numeric("hotWaterUsage", "Hot water (L/day)", D["hotWaterUsage"], min=0, max=500),
        ui.input_numeric(
            "exceedanceThreshold", "Allowed hours above capacity", D["exceedanceThreshold"],
            min=0, max=8760,
        ),
        ui.input_checkbox("fabric_only", "Fabric losses only (no ventilation / hot water)", False),

        ui.hr(),
        ui.h5("Weather"),
        ui.input_file("weather_upload", "PVGIS TMY file (.json or .csv)", accept=[".json", ".csv"]),
        ui.input_numeric("synthetic_avg", "Synthetic year: mean (°C)", 10.0),
        ui.input_numeric("synthetic_swing", "Synthetic year: swing (°C)", 5.0, min=0),

        ui.hr(),
        ui.input_action_button("run_btn", "Calculate", class_="btn-primary"),
    ),

    # 2) Global CSS injected into <head>
    ui.head_content(
        ui.tags.style(
            """
            body {
                font-size: 16px;
            }
            .kpi-table {
                font-size: 16px;
                border-collapse: collapse;
                width: 100%;
            }
            .kpi-table th, .kpi-table td {
                padding: 4px 8px;
            }
            /* Right-align the last column (values) */
            .kpi-table td:last-child {
                text-align: right;
            }
            """
        )
    ),

    # 3) Main page content
    ui.h2("Heat Pump Sizing Calculator"),
    ui.output_text("error_text"),
    ui.layout_columns(
        ui.card(
            ui.card_header("Annual results"),
            ui.output_ui("kpi_table"),
        ),
        ui.card(
            ui.card_header("Monthly electricity use"),
            ui.output_plot("monthly_plot"),
        ),
        width=1/2,
    ),
    ui.card(
        ui.card_header("Daily profile"),
        ui.input_slider("day_of_year", "Day of year", 1, 365, 15),
        ui.output_plot("daily_plot"),
    ),
    ui.download_button("download_hourly", "Download hourly data (CSV)"),
    ui.output_text("note_text"),
)


# ---------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------
_INPUT_KEYS = list(DEFAULT_INPUTS.keys())


def _weather_frame(upload, avg_c: float, swing_c: float) -> pd.DataFrame:
    if upload:
        f = upload[0]
        fmt = Path(f["name"]).suffix.lstrip(".")
        return load_weather(f["datapath"], fmt=fmt)
    return synthetic_weather(avg_temp_c=float(avg_c or 0.0), swing_c=float(swing_c or 0.0))


def _fmt(v):
    if isinstance(v, (int, float)):
        return f"{v:,.2f}"
    return str(v)


# ---------------------------------------------------------------------
# server
# ---------------------------------------------------------------------
def server(input, output, session):

    @reactive.calc
    @reactive.event(input.run_btn)
    def _run():
        data = {k: getattr(input, k)() for k in _INPUT_KEYS}
        try:
            building, heat_pump = parameters_from_dict(data)
            weather = _weather_frame(
                input.weather_upload(), input.synthetic_avg(), input.synthetic_swing()
            )
        except (ValueError, OSError) as e:
            # WeatherDataError is a ValueError
            logger.warning("Rejected calculation: %s", e)
            return None, str(e)

        result = simulate(
            building, heat_pump, samples_from_frame(weather), fabric_only=input.fabric_only()
        )
        return result, ""

    @output
    @render.text
    def error_text():
        _, err = _run()
        return err

    @output
    @render.ui
    def kpi_table():
        result, _ = _run()
        req(result)
        hot_water = 0.0 if input.fabric_only() else daily_hot_water_kwh(input.hotWaterUsage() or 0)
        df = pd.DataFrame(
            {
                "metric": [
                    "Annual heat demand (kWh)",
                    "Annual electricity (kWh)",
                    "Seasonal COP",
                    "Peak heat load (kW)",
                    "Hours above max output",
                    "Recommended minimum size (kW)",
                    "Hot water per day (kWh)",
                ],
                "value": [
                    result.total_heat_energy,
                    result.total_electrical_energy,
                    result.average_cop,
                    result.peak_heat_load,
                    f"{result.hours_exceeding_capacity:d}",
                    result.recommended_min_size,
                    hot_water,
                ],
            }
        )
        df["value"] = df["value"].apply(_fmt)

        html = df.to_html(
            index=False,
            classes="kpi-table table table-sm",
            border=0,
        )
        return ui.HTML(html)

    @output
    @render.plot
    def monthly_plot():
        import matplotlib.pyplot as plt

        result, _ = _run()
        req(result)
        m = result.monthly_frame()
        fig, ax = plt.subplots()
        ax.bar(m["month"], m["kWh"])
        ax.set_xlabel("Month")
        ax.set_ylabel("Electricity (kWh)")
        ax.set_title("Heat pump electricity by month")
        return fig

    @output
    @render.plot
    def daily_plot():
        import matplotlib.pyplot as plt

        result, _ = _run()
        req(result)
        h = result.hourly_frame()
        day = h[h["day_of_year"] == int(input.day_of_year())].sort_values("hour")
        fig, ax = plt.subplots()
        ax.bar(day["hour"], day["electrical_energy"], label="Electricity (kWh)")
        ax.set_xlabel("Hour")
        ax.set_ylabel("Electricity (kWh)")
        ax2 = ax.twinx()
        ax2.plot(day["hour"], day["temperature"], color="tab:red", label="Outdoor (°C)")
        ax2.set_ylabel("Outdoor temperature (°C)")
        ax.set_title(f"Day {int(input.day_of_year())}")
        return fig

    @output
    @render.download(filename="hourly_heat_pump.csv")
    def download_hourly():
        result, _ = _run()
        if result is None:
            empty = pd.DataFrame(columns=["day_of_year", "hour", "temperature", "electrical_energy"])
            return empty.to_csv(index=False).encode("utf-8")
        return result.hourly_frame().to_csv(index=False).encode("utf-8")

    @output
    @render.text
    def note_text():
        return (
            "Note: steady-state model. Heating runs only below the base temperature; "
            "hours above max output count space heating only, while the recommended "
            "size also covers hot water."
        )


app = App(app_ui, server)
