"""Tests for the --action command lines of the focus tools."""

import json
import sys
from unittest.mock import patch

import pytest

from joidu.focus import energy_advisor, hyperfocus_guard


def run_cli(main, argv, capsys):
    with (
        patch.object(sys, "argv", ["prog", *argv]),
        patch(f"{main.__module__}.setup_logging"),
    ):
        main()
    return json.loads(capsys.readouterr().out)


class TestEnergyAdvisorCli:
    def test_recommend(self, temp_db, capsys):
        result = run_cli(energy_advisor.main, ["--action", "recommend", "--db", str(temp_db)], capsys)
        assert result["success"] is True
        assert result["recommendation"]["duration"] in {15, 20, 25, 30, 45}

    def test_record_then_profile(self, temp_db, capsys):
        run_cli(
            energy_advisor.main,
            ["--action", "record", "--duration", "25", "--failed", "--db", str(temp_db)],
            capsys,
        )
        result = run_cli(energy_advisor.main, ["--action", "profile", "--db", str(temp_db)], capsys)
        assert len(result["history"]) == 1
        assert result["history"][0]["completed"] is False

    def test_record_requires_duration(self, temp_db, capsys):
        with pytest.raises(SystemExit):
            run_cli(energy_advisor.main, ["--action", "record", "--db", str(temp_db)], capsys)

    def test_set_energy(self, temp_db, capsys):
        result = run_cli(
            energy_advisor.main,
            ["--action", "set-energy", "--level", "low", "--db", str(temp_db)],
            capsys,
        )
        assert result["current_energy"] == "low"
        prefs = run_cli(energy_advisor.main, ["--action", "preferences", "--db", str(temp_db)], capsys)
        assert list(prefs["preferences"].values()) == ["low"]


class TestHyperfocusGuardCli:
    def test_urgency(self, capsys):
        result = run_cli(hyperfocus_guard.main, ["--action", "urgency", "--elapsed", "95"], capsys)
        assert result["urgency_level"] == "urgent"
        assert result["color"] == "#f4b7ae"

    def test_activities(self, capsys):
        result = run_cli(hyperfocus_guard.main, ["--action", "activities", "--elapsed", "10"], capsys)
        assert [a["id"] for a in result["activities"]] == ["water", "stretch", "breathe"]

    def test_stats_on_empty_db(self, temp_db, capsys):
        result = run_cli(hyperfocus_guard.main, ["--action", "stats", "--db", str(temp_db)], capsys)
        assert result["breaks_taken"] == 0
