"""
Tool: Energy Advisor
Purpose: Recommend a focus-session length that fits current energy

Energy is inferred per time-of-day bucket. Before there is any history the
advisor uses ADHD-informed priors (peak focus after waking, post-lunch dip,
evening fatigue). Every finished session is remembered, and once a bucket
has a few recent sessions its completion rate decides the energy level.
The user can always override manually.

Usage:
    # Recommendation for right now
    python -m joidu.focus.energy_advisor --action recommend

    # Remember a finished session
    python -m joidu.focus.energy_advisor --action record --duration 25
    python -m joidu.focus.energy_advisor --action record --duration 45 --failed

    # Manual override
    python -m joidu.focus.energy_advisor --action set-energy --level low

    # Inspect learned patterns
    python -m joidu.focus.energy_advisor --action profile --bucket morning
    python -m joidu.focus.energy_advisor --action preferences

Dependencies:
    - pyyaml (config)
    - structlog (logging)

Output:
    JSON result with success status and data
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from typing import Any

from joidu.focus import ENERGY_PATTERNS_KEY, ENERGY_PREFERENCES_KEY
from joidu.focus.clock import Clock, SystemClock, time_of_day
from joidu.focus.config_models import EnergyConfig, load_and_validate
from joidu.focus.models import (
    EnergyLevel,
    EnergyProfile,
    Recommendation,
    SessionOutcome,
    TimeOfDay,
)
from joidu.focus.store import PatternStore, SQLiteStore, bounded, load_dict
from joidu.logging_config import get_logger, setup_logging


logger = get_logger(__name__)


ENCOURAGEMENTS: dict[EnergyLevel, list[str]] = {
    EnergyLevel.HIGH: [
        "Your focus superpower is activated! 🚀",
        "Perfect timing - your brain is ready to dive deep!",
        "High energy detected! Time to tackle that big task.",
    ],
    EnergyLevel.MEDIUM: [
        "Steady energy is perfect for consistent progress. ⚡",
        "You've got good focus potential right now!",
        "Medium energy means reliable productivity ahead.",
    ],
    EnergyLevel.LOW: [
        "Low energy doesn't mean low value! Every bit counts. 💙",
        "Gentle focus sessions can be surprisingly effective.",
        "Your brain deserves compassion. Small steps are still steps.",
    ],
}

EVENING_REASONING = "Evening sessions work best when kept short and gentle."


def recommend(energy: EnergyLevel, bucket: TimeOfDay) -> Recommendation:
    """
    Pick a session length for an energy level at a time of day.

    Confidence is a fixed label per rule, not a computed statistic.
    """
    if energy == EnergyLevel.HIGH:
        if bucket == TimeOfDay.MORNING:
            duration = 45
            reasoning = "Your ADHD brain is at peak focus in the morning. Take advantage with a longer session!"
            confidence = 0.9
        else:
            duration = 30
            reasoning = "High energy detected! You can handle a solid focus session."
            confidence = 0.8
    elif energy == EnergyLevel.MEDIUM:
        duration = 25
        reasoning = "A classic Pomodoro session works well with medium energy levels."
        confidence = 0.7
    else:
        duration = 15
        reasoning = "Low energy? No problem. A short focused burst can still be productive."
        confidence = 0.8

    # Evening fatigue
    if bucket == TimeOfDay.EVENING and duration > 25:
        duration = min(duration, 20)
        reasoning = EVENING_REASONING
        confidence = 0.9

    return Recommendation(duration=duration, reasoning=reasoning, confidence=confidence)


def level_from_completion_rate(rate: float, high: float = 0.7, medium: float = 0.4) -> EnergyLevel:
    if rate > high:
        return EnergyLevel.HIGH
    if rate > medium:
        return EnergyLevel.MEDIUM
    return EnergyLevel.LOW


def _parse_outcomes(bucket: TimeOfDay, raw: Any) -> list[SessionOutcome]:
    outcomes = []
    for item in raw if isinstance(raw, list) else []:
        try:
            outcomes.append(SessionOutcome.from_dict(item))
        except (KeyError, TypeError, ValueError):
            logger.warning("energy_outcome_dropped", bucket=bucket.value, entry=item)
    return outcomes


def _parse_profile(bucket: TimeOfDay, raw: Any) -> EnergyProfile:
    """Decode one bucket of user-energy-patterns, tolerating older shapes."""
    profile = EnergyProfile(bucket=bucket)

    if isinstance(raw, str):
        # Bare level string
        try:
            profile.level = EnergyLevel(raw)
        except ValueError:
            logger.warning("energy_level_invalid", bucket=bucket.value, level=raw)
        return profile

    if not isinstance(raw, dict):
        return profile

    level = raw.get("level")
    if level is not None:
        try:
            profile.level = EnergyLevel(level)
        except ValueError:
            logger.warning("energy_level_invalid", bucket=bucket.value, level=level)

    if "history" in raw:
        profile.history = _parse_outcomes(bucket, raw["history"])
    else:
        # Split successful/failed lists, merged back into time order
        merged = _parse_outcomes(bucket, raw.get("successful")) + _parse_outcomes(
            bucket, raw.get("failed")
        )
        profile.history = sorted(merged, key=lambda o: o.timestamp)

    return profile


class EnergyAdvisor:
    """
    Energy inference and session-length recommendation.

    Args:
        store: Pattern store holding user-energy-patterns and energy-preferences
        clock: Time source
        rng: Random source for the cosmetic encouragement text
        config: Energy settings (defaults from args/focus.yaml)
    """

    def __init__(
        self,
        store: PatternStore,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        config: EnergyConfig | None = None,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        self.config = config or EnergyConfig()
        self._time_of_day: TimeOfDay | None = None
        self._current_energy = EnergyLevel.MEDIUM
        self.refresh()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def time_of_day(self) -> TimeOfDay:
        return self._time_of_day

    @property
    def current_energy(self) -> EnergyLevel:
        return self._current_energy

    def default_prior(self, bucket: TimeOfDay) -> EnergyLevel:
        try:
            return EnergyLevel(self.config.default_priors.get(bucket.value, "medium"))
        except ValueError:
            return EnergyLevel.MEDIUM

    def refresh(self) -> TimeOfDay:
        """
        Re-read the clock; re-detect energy when the bucket has changed.

        Meant to be driven by an hourly ticker.
        """
        bucket = time_of_day(self.clock.now().hour)
        if bucket != self._time_of_day:
            self._time_of_day = bucket
            self._current_energy = self.detect_energy(bucket)
            logger.debug(
                "energy_bucket_changed", bucket=bucket.value, energy=self._current_energy.value
            )
        return bucket

    def detect_energy(self, bucket: TimeOfDay) -> EnergyLevel:
        """Learned level for the bucket, or its default prior."""
        profile = self.profile(bucket)
        return profile.level or self.default_prior(bucket)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_patterns(self) -> dict[str, Any]:
        return load_dict(self.store, ENERGY_PATTERNS_KEY)

    def profile(self, bucket: TimeOfDay | None = None) -> EnergyProfile:
        bucket = bucket or self._time_of_day
        return _parse_profile(bucket, self._load_patterns().get(bucket.value))

    def _save_profile(self, profile: EnergyProfile) -> None:
        def _merge(current: Any | None) -> dict[str, Any]:
            patterns = current if isinstance(current, dict) else {}
            patterns[profile.bucket.value] = profile.to_dict()
            return patterns

        self.store.update(ENERGY_PATTERNS_KEY, _merge)

    def preferences(self) -> dict[str, str]:
        return load_dict(self.store, ENERGY_PREFERENCES_KEY)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def recommendation(self) -> Recommendation:
        return recommend(self._current_energy, self._time_of_day)

    def record_session(self, duration: int, completed: bool) -> EnergyProfile:
        """
        Remember a finished session and re-learn the bucket's energy.

        Args:
            duration: Session length in minutes
            completed: Whether the session ran to the end

        Returns:
            The updated profile for the current bucket
        """
        if duration < 0:
            raise ValueError("duration must not be negative")

        bucket = self._time_of_day
        profile = self.profile(bucket)
        profile.history.append(
            SessionOutcome(
                duration_minutes=int(duration),
                completed=bool(completed),
                timestamp=self.clock.now(),
                energy=self._current_energy,
            )
        )
        profile.history = bounded(profile.history, self.config.history_cap)

        recent = profile.history[-self.config.recent_window :]
        if len(recent) >= self.config.min_recent_sessions:
            rate = sum(1 for outcome in recent if outcome.completed) / len(recent)
            learned = level_from_completion_rate(
                rate,
                high=self.config.thresholds.high,
                medium=self.config.thresholds.medium,
            )
            if learned != self._current_energy:
                logger.info(
                    "energy_level_learned",
                    bucket=bucket.value,
                    previous=self._current_energy.value,
                    energy=learned.value,
                    completion_rate=round(rate, 2),
                )
            profile.level = learned
            self._current_energy = learned

        self._save_profile(profile)
        return profile

    # Name used by the focus screens
    record_successful_session = record_session

    def set_energy_level(self, level: EnergyLevel | str) -> EnergyLevel:
        """Manual override, remembered once per calendar day."""
        level = EnergyLevel(level)
        self._current_energy = level

        day = self.clock.now().date().isoformat()

        def _remember(current: Any | None) -> dict[str, Any]:
            prefs = current if isinstance(current, dict) else {}
            prefs[day] = level.value
            return prefs

        self.store.update(ENERGY_PREFERENCES_KEY, _remember)
        logger.info("energy_level_overridden", energy=level.value, day=day)
        return level

    def encouragement(self) -> str:
        return self.rng.choice(ENCOURAGEMENTS[self._current_energy])

    def snapshot(self) -> dict[str, Any]:
        return {
            "time_of_day": self._time_of_day.value,
            "current_energy": self._current_energy.value,
            "recommendation": self.recommendation().to_dict(),
            "encouragement": self.encouragement(),
        }


def main():
    parser = argparse.ArgumentParser(
        description="Energy Advisor - Energy-aware focus session lengths",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m joidu.focus.energy_advisor --action recommend
    python -m joidu.focus.energy_advisor --action record --duration 25
    python -m joidu.focus.energy_advisor --action set-energy --level high
    python -m joidu.focus.energy_advisor --action profile --bucket evening
        """,
    )

    parser.add_argument(
        "--action",
        required=True,
        choices=["recommend", "record", "set-energy", "profile", "preferences"],
        help="Action to perform",
    )
    parser.add_argument("--duration", type=int, help="Session length in minutes (record)")
    parser.add_argument(
        "--failed", action="store_true", help="Session was not completed (record)"
    )
    parser.add_argument("--level", choices=[e.value for e in EnergyLevel], help="Energy level")
    parser.add_argument("--bucket", choices=[t.value for t in TimeOfDay], help="Time of day")
    parser.add_argument("--db", help="Path to the focus database")

    args = parser.parse_args()
    setup_logging()

    config = load_and_validate()
    store = SQLiteStore(args.db or config.storage.db_path)
    advisor = EnergyAdvisor(store, config=config.energy)
    result = None

    if args.action == "recommend":
        result = {"success": True, **advisor.snapshot()}

    elif args.action == "record":
        if args.duration is None:
            print(json.dumps({"success": False, "error": "--duration required for record action"}))
            sys.exit(1)
        try:
            profile = advisor.record_session(args.duration, completed=not args.failed)
        except ValueError as e:
            print(json.dumps({"success": False, "error": str(e)}))
            sys.exit(1)
        result = {
            "success": True,
            "time_of_day": profile.bucket.value,
            "current_energy": advisor.current_energy.value,
            "sessions_remembered": len(profile.history),
        }

    elif args.action == "set-energy":
        if not args.level:
            print(json.dumps({"success": False, "error": "--level required for set-energy action"}))
            sys.exit(1)
        level = advisor.set_energy_level(args.level)
        result = {"success": True, "current_energy": level.value}

    elif args.action == "profile":
        bucket = TimeOfDay(args.bucket) if args.bucket else advisor.time_of_day
        profile = advisor.profile(bucket)
        result = {"success": True, "time_of_day": bucket.value, **profile.to_dict()}

    elif args.action == "preferences":
        result = {"success": True, "preferences": advisor.preferences()}

    if result:
        print(json.dumps(result, indent=2, default=str))
        if not result.get("success"):
            sys.exit(1)


if __name__ == "__main__":
    main()
