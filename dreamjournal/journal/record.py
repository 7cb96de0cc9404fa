"""
Dream records.

A record is one journal entry: when it was dreamed, how intense it was,
how often it recurs (0-10), what kind of dream it was and the free-text
account of the experience.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Stored when the experience text is left blank
EMPTY_EXPERIENCE = "N/A"

FREQUENCY_MIN = 0
FREQUENCY_MAX = 10


class Intensity(str, Enum):
    """How vivid the dream was. Declaration order is the option order."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Style(str, Enum):
    """Kind of dream. Declaration order is the option order."""

    LUCID = "Lucid"
    NIGHTMARE = "Nightmare"
    RECURRING = "Recurring"
    PROPHETIC = "Prophetic"
    NORMAL = "Normal"


INTENSITY_OPTIONS: tuple[Intensity, ...] = tuple(Intensity)
STYLE_OPTIONS: tuple[Style, ...] = tuple(Style)


@dataclass
class DreamRecord:
    """A single journal entry."""

    date: str
    intensity: Intensity
    frequency: int
    style: Style
    experience: str

    @classmethod
    def blank(cls, now: datetime | None = None) -> DreamRecord:
        """Create an empty record stamped with the current (UTC) time."""
        now = now or datetime.now(timezone.utc)
        return cls(
            date=now.strftime(DATE_FORMAT),
            intensity=Intensity.LOW,
            frequency=FREQUENCY_MIN,
            style=Style.LUCID,
            experience="",
        )

    def copy(self) -> DreamRecord:
        """Return an independent copy of this record."""
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON object."""
        return {
            "date": self.date,
            "intensity": self.intensity.value,
            "experience": self.experience,
            "frequency": self.frequency,
            "style": self.style.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> DreamRecord:
        """
        Build a record from a persisted JSON object.

        Raises:
            ValueError: If a field is missing, has the wrong type, names an
                unknown intensity/style or the frequency is out of range.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Record must be an object, got {type(data).__name__}")

        for field_name in ("date", "intensity", "experience", "frequency", "style"):
            if field_name not in data:
                raise ValueError(f"Missing required field '{field_name}'")

        date = data["date"]
        experience = data["experience"]
        if not isinstance(date, str) or not isinstance(experience, str):
            raise ValueError("Fields 'date' and 'experience' must be strings")

        frequency = data["frequency"]
        # bool is an int subclass
        if isinstance(frequency, bool) or not isinstance(frequency, int):
            raise ValueError(f"Frequency must be an integer, got {frequency!r}")
        if not FREQUENCY_MIN <= frequency <= FREQUENCY_MAX:
            raise ValueError(f"Frequency out of range: {frequency}")

        return cls(
            date=date,
            intensity=Intensity(data["intensity"]),
            frequency=frequency,
            style=Style(data["style"]),
            experience=experience,
        )
