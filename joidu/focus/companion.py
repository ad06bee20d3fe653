"""
Tool: Focus Companion
Purpose: Run one focus session with energy advice and hyperfocus protection

Owns an EnergyAdvisor, a HyperfocusGuard and the two tickers that drive
them. The tickers exist only between begin() and finish(); use the
companion as an async context manager to make sure they are released.

Usage:
    companion = FocusCompanion.from_config()
    async with companion:
        companion.begin()
        ...
        view = companion.view()
        ...
        result = await companion.finish(completed=True)
"""

from __future__ import annotations

import random
from typing import Any

from joidu.focus.clock import Clock, SystemClock
from joidu.focus.config_models import FocusConfig, load_and_validate
from joidu.focus.energy_advisor import EnergyAdvisor
from joidu.focus.hyperfocus_guard import HyperfocusGuard
from joidu.focus.store import PatternStore, SQLiteStore
from joidu.focus.ticker import Ticker
from joidu.logging_config import get_logger


logger = get_logger(__name__)


class FocusCompanion:
    """Session orchestration for the focus screens."""

    def __init__(
        self,
        store: PatternStore,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        config: FocusConfig | None = None,
    ):
        self.config = config or FocusConfig()
        clock = clock or SystemClock()
        self.advisor = EnergyAdvisor(store, clock=clock, rng=rng, config=self.config.energy)
        self.guard = HyperfocusGuard(store, clock=clock, config=self.config.hyperfocus)
        self.guard_ticker = Ticker(
            self.config.hyperfocus.tick_interval_seconds, self.guard.tick, name="hyperfocus"
        )
        self.energy_ticker = Ticker(
            self.config.energy.refresh_interval_seconds, self.advisor.refresh, name="energy"
        )

    @classmethod
    def from_config(cls, config: FocusConfig | None = None) -> FocusCompanion:
        config = config or load_and_validate()
        return cls(SQLiteStore(config.storage.db_path), config=config)

    def begin(self) -> dict[str, Any]:
        """Start a session and its tickers. Needs a running event loop."""
        self.advisor.refresh()
        self.guard.start_session()
        self.guard_ticker.start()
        self.energy_ticker.start()
        return self.view()

    async def finish(self, completed: bool = True) -> dict[str, Any]:
        """Stop ticking, close the session and teach the advisor how it went."""
        await self.close()
        minutes = self.guard.refresh_elapsed()
        record = self.guard.end_session()
        if record is not None:
            self.advisor.record_session(minutes, completed)
        logger.info("focus_session_finished", minutes=minutes, completed=completed)
        return {
            "session": record.to_dict() if record else None,
            "energy": self.advisor.snapshot(),
        }

    async def close(self) -> None:
        await self.guard_ticker.stop()
        await self.energy_ticker.stop()

    def view(self) -> dict[str, Any]:
        """Everything the focus screen renders, in one dict."""
        return {
            "energy": self.advisor.snapshot(),
            "hyperfocus": self.guard.snapshot(),
        }

    async def __aenter__(self) -> FocusCompanion:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
