# ──────────────────────────────────────────────────────────────────────────────
# File: app/app_dash.py
# Minimal Dash shell (alternative to Shiny)
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
import logging
import sys
from pathlib import Path

import pandas as pd
from dash import Dash, dcc, html, Input, Output, callback
import plotly.express as px

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hpsizing.data_loading import (
    DEFAULT_INPUTS,
    load_weather,
    parameters_from_dict,
    samples_from_frame,
    synthetic_weather,
    weather_files,
)
from hpsizing.simulate import simulate

DATA = ROOT / "data"
WEATHER = DATA / "weather"
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _weather_options() -> dict:
    opts = {"__synthetic__": "Synthetic year (10 ± 5 °C)"}
    for p in weather_files(WEATHER):
        opts[p.name] = p.name
    return opts


app = Dash(__name__)
app.layout = html.Div([
    html.H3("Heat Pump Sizing (Dash)"),
    html.Div([
        html.Label("Weather"),
        dcc.Dropdown(id="weather", options=_weather_options(), value="__synthetic__"),
        html.Label("Flow temperature (°C)"),
        dcc.Slider(id="flow_temp", min=30, max=80, step=5, value=DEFAULT_INPUTS["flowTemp"]),
        html.Label("Allowed hours above capacity"),
        dcc.Slider(id="threshold", min=0, max=200, step=4, value=DEFAULT_INPUTS["exceedanceThreshold"]),
    ], style={"width": "40%"}),
    html.Button("Run simulation", id="run", n_clicks=0),
    dcc.Graph(id="monthly"),
    html.Div(id="summary"),
])


@callback(
    Output("monthly", "figure"),
    Output("summary", "children"),
    Input("run", "n_clicks"),
    Input("weather", "value"),
    Input("flow_temp", "value"),
    Input("threshold", "value"),
)
def run_sim(n_clicks, weather, flow_temp, threshold):
    empty = px.bar(pd.DataFrame({"month": [], "kWh": []}), x="month", y="kWh")
    if n_clicks == 0:
        return empty, ""

    try:
        if weather == "__synthetic__":
            df = synthetic_weather()
        else:
            df = load_weather(WEATHER / weather)
        building, hp = parameters_from_dict(
            {**DEFAULT_INPUTS, "flowTemp": flow_temp, "exceedanceThreshold": threshold}
        )
    except (ValueError, OSError) as e:
        # WeatherDataError is a ValueError
        logger.warning("Rejected calculation: %s", e)
        return empty, str(e)
    result = simulate(building, hp, samples_from_frame(df))

    fig = px.bar(result.monthly_frame(), x="month", y="kWh", title="Heat pump electricity by month (kWh)")
    summary = (
        f"Heat: {result.total_heat_energy:.0f} kWh — Electricity: {result.total_electrical_energy:.0f} kWh — "
        f"SCOP {result.average_cop:.2f} — Peak {result.peak_heat_load:.2f} kW — "
        f"Recommended size {result.recommended_min_size:.2f} kW"
    )
    return fig, summary


if __name__ == "__main__":
    app.run(debug=True)
