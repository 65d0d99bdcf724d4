"""Alta de lecturas: validacion, persistencia y re-analisis."""

from __future__ import annotations

import math

from glucose_tracker.analyzer import analyze, count_trends
from glucose_tracker.model import InvalidInputError, Reading, TrendCounts
from glucose_tracker.storage import DEFAULT_STORAGE_KEY, SQLiteStore

INVALID_INPUT_MESSAGE = "Please enter a valid time and glucose level."


def validate_reading(time: str, glucose: str | float | None) -> Reading:
    """Validate raw input and build a reading.

    Args:
        time: Free-form time label.
        glucose: Glucose value as typed (text) or already numeric.

    Returns:
        The reading to append.

    Raises:
        InvalidInputError: If time or glucose is blank, glucose is not a
            finite number, or glucose is not positive.
    """
    label = time.strip() if time else ""
    if not label:
        raise InvalidInputError(INVALID_INPUT_MESSAGE)
    if glucose is None or (isinstance(glucose, str) and not glucose.strip()):
        raise InvalidInputError(INVALID_INPUT_MESSAGE)
    try:
        value = float(glucose)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(INVALID_INPUT_MESSAGE) from exc
    if math.isnan(value) or math.isinf(value) or value <= 0:
        raise InvalidInputError(INVALID_INPUT_MESSAGE)
    return Reading(time=label, glucose=value)


class ReadingTracker:
    """Append-only reading sequence backed by a SQLite key."""

    def __init__(self, store: SQLiteStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        """Load the saved sequence and compute the initial recommendation."""
        self._store = store
        self._key = key
        self._readings = store.load_readings(key)
        self._recommendation = analyze(self._readings)

    @property
    def readings(self) -> list[Reading]:
        return list(self._readings)

    @property
    def recommendation(self) -> str:
        return self._recommendation

    def trend_counts(self) -> TrendCounts:
        return count_trends(self._readings)

    def add_reading(self, time: str, glucose: str | float | None) -> Reading:
        """Validate, append, persist and re-analyze.

        Raises:
            InvalidInputError: If the input is rejected. Nothing is changed.
        """
        reading = validate_reading(time, glucose)
        updated = [*self._readings, reading]
        self._store.save_readings(updated, self._key)
        self._readings = updated
        self._recommendation = analyze(self._readings)
        return reading
