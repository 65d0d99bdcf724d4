"""Modelos tipados para lecturas de glucosa."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class InvalidInputError(ValueError):
    """Raised when a reading is rejected before being appended."""


@dataclass(frozen=True)
class Reading:
    """One glucose measurement with its free-form time label."""

    time: str
    glucose: float

    def to_record(self) -> dict[str, object]:
        """Serializable ``{time, glucose}`` record."""
        return {"time": self.time, "glucose": self.glucose}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Reading:
        """Build a reading from a stored record.

        Raises:
            KeyError: If ``time`` or ``glucose`` is missing.
            ValueError: If ``glucose`` is not numeric.
        """
        return cls(time=str(record["time"]), glucose=float(record["glucose"]))


@dataclass(frozen=True)
class TrendCounts:
    """Counters accumulated over adjacent reading pairs."""

    high: int = 0
    low: int = 0
    spikes: int = 0
