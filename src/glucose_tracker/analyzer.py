"""Analisis de tendencias sobre la secuencia de lecturas."""

from __future__ import annotations

from collections.abc import Sequence

from glucose_tracker.model import Reading, TrendCounts

HIGH_THRESHOLD = 180
LOW_THRESHOLD = 70
SPIKE_DELTA = 50
MIN_READINGS = 2

NOT_ENOUGH_DATA = "Add more data to analyze trends."
STABLE = "Glucose levels are stable. Keep monitoring."
HIGH_ADVICE = "Detected {count} high glucose readings. Adjust meals or timing."
LOW_ADVICE = "Detected {count} low glucose readings. Ensure enough carbs."
SPIKE_ADVICE = "Detected {count} glucose spikes. Monitor potential triggers."


def count_trends(readings: Sequence[Reading]) -> TrendCounts:
    """Count high, low and spike events over adjacent pairs.

    Only the second element of each pair is checked against the high/low
    thresholds, so the first reading never counts as high or low.
    """
    high = 0
    low = 0
    spikes = 0
    for prev, current in zip(readings, readings[1:]):
        if current.glucose > HIGH_THRESHOLD:
            high += 1
        if current.glucose < LOW_THRESHOLD:
            low += 1
        if abs(current.glucose - prev.glucose) > SPIKE_DELTA:
            spikes += 1
    return TrendCounts(high=high, low=low, spikes=spikes)


def analyze(readings: Sequence[Reading]) -> str:
    """Build the recommendation text for the whole sequence."""
    if len(readings) < MIN_READINGS:
        return NOT_ENOUGH_DATA

    counts = count_trends(readings)
    advice: list[str] = []
    if counts.high > 0:
        advice.append(HIGH_ADVICE.format(count=counts.high))
    if counts.low > 0:
        advice.append(LOW_ADVICE.format(count=counts.low))
    if counts.spikes > 0:
        advice.append(SPIKE_ADVICE.format(count=counts.spikes))
    if not advice:
        advice.append(STABLE)
    return " ".join(advice)


def format_counts(counts: TrendCounts) -> str:
    """Short summary of the counters for the status line."""
    return f"High: {counts.high}, Low: {counts.low}, Spikes: {counts.spikes}"
