"""
Tool: Hyperfocus Guard
Purpose: Escalating break suggestions so hyperfocus doesn't turn into burnout

A session is a monotonic timer. Every tick re-reads the clock and maps the
elapsed minutes onto an urgency tier:

    >= 120  emergency   rest is not optional
    >=  90  urgent      strong break directive
    >=  45  strong      advice
    >=  25  gentle      light reminder
    else    none        nothing shown

Accepting a break clears the banner but leaves the session clock running, so
urgency comes straight back on the next tick. Callers that want a fresh
clock end the session and start a new one.

Usage:
    python -m joidu.focus.hyperfocus_guard --action urgency --elapsed 50
    python -m joidu.focus.hyperfocus_guard --action activities --elapsed 50
    python -m joidu.focus.hyperfocus_guard --action stats

Dependencies:
    - pyyaml (config)
    - structlog (logging)

Output:
    JSON result with success status and data
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from joidu.focus import BREAK_HISTORY_KEY, DISMISSAL_HISTORY_KEY, SESSION_HISTORY_KEY
from joidu.focus.clock import Clock, SystemClock, minutes_between
from joidu.focus.config_models import (
    HyperfocusConfig,
    HyperfocusThresholdsConfig,
    load_and_validate,
)
from joidu.focus.models import (
    BreakActivity,
    BreakEvent,
    DismissalEvent,
    FocusSession,
    SessionRecord,
    UrgencyLevel,
)
from joidu.focus.store import PatternStore, SQLiteStore, append_bounded, load_list
from joidu.logging_config import get_logger, setup_logging


logger = get_logger(__name__)


SUGGESTIONS: dict[UrgencyLevel, str] = {
    UrgencyLevel.EMERGENCY: (
        "⚠️ EMERGENCY BREAK NEEDED\n\n"
        "You've been focusing for over 2 hours. Your ADHD brain needs rest NOW to prevent "
        "burnout. This isn't optional - your wellbeing matters more than any task."
    ),
    UrgencyLevel.URGENT: (
        "🚨 URGENT: Take a Break!\n\n"
        "You've been hyperfocusing for 90+ minutes. Your brain is running on empty. "
        "A 15-minute break will actually make you more productive."
    ),
    UrgencyLevel.STRONG: (
        "💡 Strong Suggestion: Break Time\n\n"
        "You've been focusing for 45+ minutes - that's amazing! Your ADHD brain would "
        "benefit from a 10-minute recharge break."
    ),
    UrgencyLevel.GENTLE: (
        "💙 Gentle Reminder\n\n"
        "You've been focused for 25 minutes - great job! Consider a short 5-minute break "
        "to help your brain reset."
    ),
}

URGENCY_COLORS: dict[UrgencyLevel, str] = {
    UrgencyLevel.NONE: "#2847ef",
    UrgencyLevel.GENTLE: "#a8e2bb",
    UrgencyLevel.STRONG: "#f7e98e",
    UrgencyLevel.URGENT: "#f4b7ae",
    UrgencyLevel.EMERGENCY: "#ff6b6b",
}

SHORT_BREAKS = (
    BreakActivity("water", "Drink Water", 2, "💧"),
    BreakActivity("stretch", "Quick Stretch", 3, "🤸"),
    BreakActivity("breathe", "Deep Breaths", 5, "🫁"),
)

MEDIUM_BREAKS = (
    BreakActivity("walk", "Short Walk", 10, "🚶"),
    BreakActivity("snack", "Healthy Snack", 5, "🍎"),
    BreakActivity("nature", "Look Outside", 5, "🌱"),
)

LONG_BREAKS = (
    BreakActivity("meal", "Eat Something", 15, "🥗"),
    BreakActivity("nap", "Power Nap", 20, "😴"),
    BreakActivity("fresh-air", "Go Outside", 15, "🌤️"),
)

ENCOURAGEMENT_GREAT = "You're doing great at taking care of your ADHD brain! 🌟"
ENCOURAGEMENT_REMINDER = "Remember: breaks aren't weakness, they're brain maintenance! 💙"
ENCOURAGEMENT_CONCERN = "Your brain is precious. Please consider taking that break. 💭"


def urgency_for(
    elapsed_minutes: int, thresholds: HyperfocusThresholdsConfig | None = None
) -> UrgencyLevel:
    """Highest tier whose threshold has been reached."""
    t = thresholds or HyperfocusThresholdsConfig()
    if elapsed_minutes >= t.emergency:
        return UrgencyLevel.EMERGENCY
    if elapsed_minutes >= t.urgent:
        return UrgencyLevel.URGENT
    if elapsed_minutes >= t.strong:
        return UrgencyLevel.STRONG
    if elapsed_minutes >= t.gentle:
        return UrgencyLevel.GENTLE
    return UrgencyLevel.NONE


def break_activities(elapsed_minutes: int) -> list[BreakActivity]:
    """Break ideas sized to how long the user has been focusing."""
    if elapsed_minutes < 30:
        return list(SHORT_BREAKS)
    if elapsed_minutes < 60:
        return list(MEDIUM_BREAKS)
    return list(LONG_BREAKS)


def encouragement_for(breaks_suggested: int, breaks_accepted: int) -> str:
    # Nothing suggested yet counts as a perfect record
    rate = breaks_accepted / breaks_suggested if breaks_suggested > 0 else 1.0
    if rate > 0.7:
        return ENCOURAGEMENT_GREAT
    if rate > 0.4:
        return ENCOURAGEMENT_REMINDER
    return ENCOURAGEMENT_CONCERN


class HyperfocusGuard:
    """
    One focus session at a time, escalating break suggestions as it runs.

    Args:
        store: Pattern store for break/dismissal/session logs
        clock: Time source
        config: Hyperfocus settings (defaults from args/focus.yaml)
    """

    def __init__(
        self,
        store: PatternStore,
        clock: Clock | None = None,
        config: HyperfocusConfig | None = None,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.config = config or HyperfocusConfig()
        self.session = FocusSession()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.session.is_active

    @property
    def elapsed_minutes(self) -> int:
        return self.session.elapsed_minutes

    @property
    def urgency_level(self) -> UrgencyLevel:
        return self.session.urgency_level

    @property
    def current_suggestion(self) -> str | None:
        return self.session.current_suggestion

    @property
    def breaks_suggested(self) -> int:
        return self.session.breaks_suggested

    @property
    def breaks_accepted(self) -> int:
        return self.session.breaks_accepted

    @property
    def acceptance_rate(self) -> float:
        if self.session.breaks_suggested == 0:
            return 0.0
        return self.session.breaks_accepted / self.session.breaks_suggested

    def urgency_color(self) -> str:
        return URGENCY_COLORS[self.session.urgency_level]

    def break_activities(self) -> list[BreakActivity]:
        return break_activities(self.session.elapsed_minutes)

    def encouragement_message(self) -> str:
        return encouragement_for(self.session.breaks_suggested, self.session.breaks_accepted)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_session(self) -> FocusSession:
        self.session = FocusSession(start_time=self.clock.now())
        logger.info("hyperfocus_session_started", start_time=self.session.start_time.isoformat())
        return self.session

    def tick(self) -> UrgencyLevel:
        """
        Re-evaluate elapsed time and urgency.

        Every tick with a non-none tier counts as another suggestion, even if
        the tier hasn't changed since the previous tick.
        """
        session = self.session
        if not session.is_active:
            return UrgencyLevel.NONE

        session.elapsed_minutes = minutes_between(session.start_time, self.clock.now())
        previous = session.urgency_level
        level = urgency_for(session.elapsed_minutes, self.config.thresholds)

        session.urgency_level = level
        session.current_suggestion = SUGGESTIONS.get(level)

        if level != UrgencyLevel.NONE:
            session.breaks_suggested += 1

        if level != previous:
            logger.info(
                "hyperfocus_urgency_changed",
                previous=previous.value,
                urgency=level.value,
                elapsed_minutes=session.elapsed_minutes,
            )
        return level

    def refresh_elapsed(self) -> int:
        """Bring elapsed minutes up to date without touching urgency or counters."""
        session = self.session
        if session.is_active:
            session.elapsed_minutes = minutes_between(session.start_time, self.clock.now())
        return session.elapsed_minutes

    def accept_break(self, duration_minutes: int | None = None) -> BreakEvent | None:
        """
        Record an accepted break and clear the banner.

        The session clock keeps running.
        """
        session = self.session
        if not session.is_active:
            logger.debug("hyperfocus_accept_break_ignored", reason="no_active_session")
            return None

        if duration_minutes is None:
            duration_minutes = self.config.default_break_minutes

        now = self.clock.now()
        event = BreakEvent(
            timestamp=now,
            focus_time_before_break=session.elapsed_minutes,
            break_duration=duration_minutes,
            urgency_level=session.urgency_level,
        )
        append_bounded(
            self.store, BREAK_HISTORY_KEY, event.to_dict(), self.config.break_history_cap
        )

        session.breaks_accepted += 1
        session.last_break_time = now
        session.warning_shown = False
        session.current_suggestion = None
        session.urgency_level = UrgencyLevel.NONE

        logger.info(
            "hyperfocus_break_accepted",
            focus_minutes=event.focus_time_before_break,
            break_minutes=duration_minutes,
            urgency=event.urgency_level.value,
        )
        return event

    def dismiss_suggestion(self) -> DismissalEvent | None:
        """Hide the current suggestion; urgency stays where it is."""
        session = self.session
        if not session.is_active:
            logger.debug("hyperfocus_dismiss_ignored", reason="no_active_session")
            return None

        event = DismissalEvent(
            timestamp=self.clock.now(),
            focus_time=session.elapsed_minutes,
            urgency_level=session.urgency_level,
        )
        append_bounded(
            self.store, DISMISSAL_HISTORY_KEY, event.to_dict(), self.config.dismissal_history_cap
        )

        session.current_suggestion = None
        session.warning_shown = True

        logger.info(
            "hyperfocus_suggestion_dismissed",
            focus_minutes=event.focus_time,
            urgency=event.urgency_level.value,
        )
        return event

    def end_session(self) -> SessionRecord | None:
        session = self.session
        record = None

        if session.is_active:
            record = SessionRecord(
                timestamp=self.clock.now(),
                duration=session.elapsed_minutes,
                breaks_suggested=session.breaks_suggested,
                breaks_accepted=session.breaks_accepted,
                final_urgency_level=session.urgency_level,
            )
            append_bounded(
                self.store,
                SESSION_HISTORY_KEY,
                record.to_dict(),
                self.config.session_history_cap,
            )
            logger.info(
                "hyperfocus_session_ended",
                duration=record.duration,
                breaks_suggested=record.breaks_suggested,
                breaks_accepted=record.breaks_accepted,
                final_urgency=record.final_urgency_level.value,
            )

        self.session = FocusSession()
        return record

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        return {
            "is_active": self.is_active,
            "elapsed_minutes": self.elapsed_minutes,
            "urgency_level": self.urgency_level.value,
            "current_suggestion": self.current_suggestion,
            "break_activities": [a.to_dict() for a in self.break_activities()],
            "encouragement_message": self.encouragement_message(),
            "breaks_suggested": self.breaks_suggested,
            "breaks_accepted": self.breaks_accepted,
            "acceptance_rate": round(self.acceptance_rate, 3),
            "urgency_color": self.urgency_color(),
        }

    def break_stats(self) -> dict[str, Any]:
        """Descriptive numbers over the persisted logs. Display only."""
        breaks = load_list(self.store, BREAK_HISTORY_KEY)
        dismissals = load_list(self.store, DISMISSAL_HISTORY_KEY)
        sessions = load_list(self.store, SESSION_HISTORY_KEY)

        responses = len(breaks) + len(dismissals)
        durations = [
            s["duration"] for s in sessions if isinstance(s, dict) and "duration" in s
        ]

        return {
            "breaks_taken": len(breaks),
            "suggestions_dismissed": len(dismissals),
            "sessions_recorded": len(sessions),
            "break_take_rate": round(len(breaks) / responses, 3) if responses else None,
            "longest_session_minutes": max(durations) if durations else None,
        }


def main():
    parser = argparse.ArgumentParser(
        description="Hyperfocus Guard - Escalating break suggestions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m joidu.focus.hyperfocus_guard --action urgency --elapsed 95
    python -m joidu.focus.hyperfocus_guard --action activities --elapsed 40
    python -m joidu.focus.hyperfocus_guard --action stats
        """,
    )

    parser.add_argument(
        "--action",
        required=True,
        choices=["urgency", "activities", "stats"],
        help="Action to perform",
    )
    parser.add_argument("--elapsed", type=int, default=0, help="Minutes of focus so far")
    parser.add_argument("--db", help="Path to the focus database")

    args = parser.parse_args()
    setup_logging()
    config = load_and_validate()
    result = None

    if args.action == "urgency":
        level = urgency_for(args.elapsed, config.hyperfocus.thresholds)
        result = {
            "success": True,
            "elapsed_minutes": args.elapsed,
            "urgency_level": level.value,
            "suggestion": SUGGESTIONS.get(level),
            "color": URGENCY_COLORS[level],
        }

    elif args.action == "activities":
        result = {
            "success": True,
            "elapsed_minutes": args.elapsed,
            "activities": [a.to_dict() for a in break_activities(args.elapsed)],
        }

    elif args.action == "stats":
        store = SQLiteStore(args.db or config.storage.db_path)
        guard = HyperfocusGuard(store, config=config.hyperfocus)
        result = {"success": True, **guard.break_stats()}

    if result:
        print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
