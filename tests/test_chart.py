from __future__ import annotations

import pytest

from glucose_tracker.chart import (
    SERIES_LABEL,
    build_chart_series,
    format_reading,
    reading_lines,
    readings_to_frame,
    scale_points,
)
from glucose_tracker.model import Reading


def test_build_chart_series_projects_in_append_order() -> None:
    readings = [Reading("12:00", 150.0), Reading("08:00", 95.0)]
    series = build_chart_series(readings)
    assert series.label == SERIES_LABEL
    assert series.labels == ["12:00", "08:00"]
    assert series.values == [150.0, 95.0]
    assert (series.y_min, series.y_max) == (50.0, 300.0)


def test_build_chart_series_widens_range_for_outliers() -> None:
    series = build_chart_series([Reading("a", 30.0), Reading("b", 420.0)])
    assert (series.y_min, series.y_max) == (30.0, 420.0)


def test_scale_points_maps_range_to_canvas() -> None:
    series = build_chart_series(
        [Reading("a", 50.0), Reading("b", 175.0), Reading("c", 300.0)]
    )
    assert scale_points(series, 200, 100) == pytest.approx(
        [0.0, 0.0, 100.0, 50.0, 200.0, 100.0]
    )


def test_scale_points_single_and_empty() -> None:
    assert scale_points(build_chart_series([]), 200, 100) == []
    single = build_chart_series([Reading("a", 300.0)])
    assert scale_points(single, 200, 100) == pytest.approx([100.0, 100.0])


def test_readings_to_frame_keeps_order() -> None:
    df = readings_to_frame([Reading("b", 120.0), Reading("a", 80.0)])
    assert list(df.columns) == ["time", "glucose_mg_dl"]
    assert df["time"].tolist() == ["b", "a"]
    assert readings_to_frame([]).empty


def test_format_reading_and_lines() -> None:
    assert format_reading(Reading("08:00", 110.0)) == (
        "Time: 08:00, Glucose: 110 mg/dL"
    )
    assert reading_lines([Reading("08:00", 110.0), Reading("09:00", 98.5)]) == [
        "Time: 08:00, Glucose: 110 mg/dL",
        "Time: 09:00, Glucose: 98.5 mg/dL",
    ]
    assert reading_lines([]) == []
