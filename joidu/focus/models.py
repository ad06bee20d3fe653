"""
Tool: Focus Models
Purpose: Data structures for energy profiles and hyperfocus sessions

Usage:
    from joidu.focus.models import (
        EnergyLevel,
        TimeOfDay,
        UrgencyLevel,
        SessionOutcome,
        EnergyProfile,
        Recommendation,
        FocusSession,
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class EnergyLevel(str, Enum):
    """Inferred or user-declared energy."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimeOfDay(str, Enum):
    """Wall-clock bucket used to key energy patterns."""

    MORNING = "morning"  # 06:00-11:59
    AFTERNOON = "afternoon"  # 12:00-17:59
    EVENING = "evening"  # 18:00-23:59
    NIGHT = "night"  # 00:00-05:59


class UrgencyLevel(str, Enum):
    """
    Break-suggestion severity.

    Ordered mildest first; driven purely by elapsed focus time.
    """

    NONE = "none"
    GENTLE = "gentle"
    STRONG = "strong"
    URGENT = "urgent"
    EMERGENCY = "emergency"


def _parse_dt(value: Any) -> datetime | None:
    if value is None:
        return None
    dt = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    # Naive timestamps are local time; stored histories mix both
    return dt if dt.tzinfo else dt.astimezone()


@dataclass
class SessionOutcome:
    """One finished focus session, as remembered by the energy advisor."""

    duration_minutes: int
    completed: bool
    timestamp: datetime
    energy: EnergyLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration": self.duration_minutes,
            "completed": self.completed,
            "timestamp": self.timestamp.isoformat(),
            "energy": self.energy.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionOutcome:
        return cls(
            duration_minutes=int(data["duration"]),
            completed=bool(data["completed"]),
            timestamp=_parse_dt(data["timestamp"]),
            energy=EnergyLevel(data["energy"]),
        )


@dataclass
class EnergyProfile:
    """
    Energy state for one time-of-day bucket.

    `level` is None until the advisor has learned something; readers fall
    back to the bucket's default prior in that case.
    """

    bucket: TimeOfDay
    level: EnergyLevel | None = None
    history: list[SessionOutcome] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value if self.level else None,
            "history": [outcome.to_dict() for outcome in self.history],
        }


@dataclass(frozen=True)
class Recommendation:
    """Suggested session length with a human-readable reason."""

    duration: int
    reasoning: str
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration": self.duration,
            "reasoning": self.reasoning,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class BreakActivity:
    """Something to do during a break."""

    id: str
    label: str
    duration_minutes: int
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "duration": self.duration_minutes,
            "icon": self.icon,
        }


@dataclass
class BreakEvent:
    timestamp: datetime
    focus_time_before_break: int
    break_duration: int
    urgency_level: UrgencyLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "focusTimeBeforeBreak": self.focus_time_before_break,
            "breakDuration": self.break_duration,
            "urgencyLevel": self.urgency_level.value,
        }


@dataclass
class DismissalEvent:
    timestamp: datetime
    focus_time: int
    urgency_level: UrgencyLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "focusTime": self.focus_time,
            "urgencyLevel": self.urgency_level.value,
            "dismissed": True,
        }


@dataclass
class SessionRecord:
    timestamp: datetime
    duration: int
    breaks_suggested: int
    breaks_accepted: int
    final_urgency_level: UrgencyLevel
    completed_naturally: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "duration": self.duration,
            "breaksSuggested": self.breaks_suggested,
            "breaksAccepted": self.breaks_accepted,
            "completedNaturally": self.completed_naturally,
            "finalUrgencyLevel": self.final_urgency_level.value,
        }


@dataclass
class FocusSession:
    """
    Live state of the hyperfocus guard.

    An inactive guard has `start_time` None and everything else zeroed.
    """

    start_time: datetime | None = None
    elapsed_minutes: int = 0
    breaks_suggested: int = 0
    breaks_accepted: int = 0
    last_break_time: datetime | None = None
    warning_shown: bool = False
    urgency_level: UrgencyLevel = UrgencyLevel.NONE
    current_suggestion: str | None = None

    @property
    def is_active(self) -> bool:
        return self.start_time is not None
