"""Proyeccion de lecturas a serie de grafico y vista de lista."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from glucose_tracker.model import Reading

SERIES_LABEL = "Glucose Level (mg/dL)"
X_AXIS_TITLE = "Time"
SUGGESTED_MIN = 50.0
SUGGESTED_MAX = 300.0


@dataclass(frozen=True)
class ChartSeries:
    """Single labeled line series with its value-axis range."""

    label: str
    labels: list[str]
    values: list[float]
    y_min: float
    y_max: float


def build_chart_series(
    readings: Sequence[Reading],
    y_min: float = SUGGESTED_MIN,
    y_max: float = SUGGESTED_MAX,
) -> ChartSeries:
    """Map readings to ``x = time label``, ``y = glucose``.

    The range is only a suggestion: it widens to fit out-of-range values.
    """
    values = [r.glucose for r in readings]
    low = min([y_min, *values])
    high = max([y_max, *values])
    return ChartSeries(
        label=SERIES_LABEL,
        labels=[r.time for r in readings],
        values=values,
        y_min=low,
        y_max=high,
    )


def scale_points(series: ChartSeries, width: float, height: float) -> list[float]:
    """Flattened ``[x0, y0, x1, y1, ...]`` canvas coordinates for the series."""
    count = len(series.values)
    if count == 0:
        return []
    span = series.y_max - series.y_min
    points: list[float] = []
    for i, value in enumerate(series.values):
        x = width / 2 if count == 1 else width * i / (count - 1)
        y = height * (value - series.y_min) / span if span else height / 2
        points.extend((x, y))
    return points


def readings_to_frame(readings: Sequence[Reading]) -> pd.DataFrame:
    """Readings as a DataFrame in append order (no sorting)."""
    rows = [{"time": r.time, "glucose_mg_dl": r.glucose} for r in readings]
    if not rows:
        return pd.DataFrame(columns=["time", "glucose_mg_dl"])
    return pd.DataFrame(rows)


def format_reading(reading: Reading) -> str:
    """Linea de la vista de lista."""
    return f"Time: {reading.time}, Glucose: {_format_glucose(reading.glucose)} mg/dL"


def _format_glucose(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    text = format(value, "f").rstrip("0").rstrip(".")
    return text if text else "0"


def reading_lines(readings: Sequence[Reading]) -> list[str]:
    """Lines for the recorded-data list, one per reading in append order."""
    frame = readings_to_frame(readings)
    return [
        format_reading(Reading(time=str(row.time), glucose=float(row.glucose_mg_dl)))
        for row in frame.itertuples(index=False)
    ]
