"""
Tests for the check-in comparison report.
"""
from datetime import timedelta

import pytest

from checkin_tracker.comparison import build_check_in_comparison, prepare_chart_data
from checkin_tracker.goal_progress import OnTrackStatus
from checkin_tracker.metric_change import Trend


@pytest.fixture
def history(make_check_in):
    """Three weekly check-ins losing 5 lbs a week, newest last."""
    return [
        make_check_in(days_ago=14, weight=200, body_fat_percentage=24.0, mood=3),
        make_check_in(days_ago=7, weight=195, body_fat_percentage=23.0, mood=3),
        make_check_in(
            days_ago=0,
            weight=190,
            body_fat_percentage=22.0,
            mood=4,
            waist=34.0,
            adherence_percentage=90,
        ),
    ]


# ============================================================================
# Comparison Report
# ============================================================================

class TestCheckInComparison:
    """Tests for assembling the comparison of a check-in."""

    def test_metric_changes(self, make_client, history, today, now):
        client = make_client(goal_weight=180)
        report = build_check_in_comparison(history[2], history[1], client, history, today=today, now=now)

        changes = report.comparison.changes
        assert changes["weight"].change == -5
        assert changes["weight"].trend == Trend.DOWN
        assert changes["mood"].trend == Trend.UP
        assert changes["body_fat_percentage"].change == -1
        assert report.comparison.time_between_check_ins == 7

    def test_metric_without_previous_value_has_no_delta(self, make_client, history, today, now):
        report = build_check_in_comparison(
            history[2], history[1], make_client(), history, today=today, now=now
        )
        waist = report.comparison.changes["waist"]
        assert waist.current == 34.0
        assert waist.change is None
        assert "sleep" not in report.comparison.changes

    def test_weight_goal_progress(self, make_client, history, today, now):
        """Starting weight from the client record, rate from recent check-ins."""
        client = make_client(starting_weight=200, goal_weight=180)
        report = build_check_in_comparison(history[2], history[1], client, history, today=today, now=now)

        weight = report.goal_progress.weight
        assert weight.percent_complete == 50
        assert weight.remaining == 10
        assert weight.avg_change_per_period == -5
        assert weight.on_track == OnTrackStatus.ON_TRACK
        assert weight.weeks_to_goal == 2
        assert weight.unit == "lbs"

    def test_starting_weight_falls_back_to_first_check_in(self, make_client, make_check_in, history, today, now):
        first = make_check_in(days_ago=60, weight=210)
        client = make_client(goal_weight=180)
        report = build_check_in_comparison(
            history[2], history[1], client, history, first_check_in=first, today=today, now=now
        )
        assert report.goal_progress.weight.starting_value == 210

    def test_goal_blocks_omitted_without_goals(self, make_client, history, today, now):
        """No goal means no block, not a zero-progress block."""
        report = build_check_in_comparison(
            history[2], history[1], make_client(), history, today=today, now=now
        )
        assert report.goal_progress.weight is None
        assert report.goal_progress.body_fat is None
        assert report.goal_progress.deadline is None
        assert report.goal_progress.to_dict() == {}

    def test_weight_block_omitted_without_current_weight(self, make_client, make_check_in, history, today, now):
        current = make_check_in(days_ago=0, mood=4)
        report = build_check_in_comparison(
            current, history[1], make_client(goal_weight=180), history, today=today, now=now
        )
        assert report.goal_progress.weight is None

    def test_body_fat_goal_and_deadline(self, make_client, history, today, now):
        client = make_client(goal_body_fat_percentage=18.0, goal_deadline=today + timedelta(days=30))
        report = build_check_in_comparison(history[2], history[1], client, history, today=today, now=now)

        body_fat = report.goal_progress.body_fat
        assert body_fat.starting_value == 24.0
        assert body_fat.percent_complete == pytest.approx(33.3)
        assert body_fat.avg_change_per_period == pytest.approx(-0.67)
        assert body_fat.weeks_to_goal is None
        assert report.goal_progress.deadline.days_remaining == 30

    def test_mixed_units_are_normalized(self, make_client, make_check_in, today, now):
        """A kg check-in compared with a lbs check-in is converted first."""
        previous = make_check_in(days_ago=7, weight=90.0, weight_unit="kg")
        current = make_check_in(days_ago=0, weight=196.0, weight_unit="lbs")
        report = build_check_in_comparison(
            current, previous, make_client(unit_preference="imperial"), [previous, current],
            today=today, now=now,
        )
        weight = report.comparison.changes["weight"]
        assert weight.previous == pytest.approx(198.45)
        assert weight.change == pytest.approx(-2.45)

    def test_metric_display_units(self, make_client, make_check_in, today, now):
        """Metric clients see kg and cm even for imperial check-ins."""
        previous = make_check_in(days_ago=7, weight=198.45, waist=35.0)
        current = make_check_in(days_ago=0, weight=194.04, waist=34.0)
        report = build_check_in_comparison(
            current, previous, make_client(unit_preference="metric"), [previous, current],
            today=today, now=now,
        )
        assert report.comparison.changes["weight"].current == pytest.approx(88.0)
        assert report.comparison.changes["waist"].current == pytest.approx(86.36)

    def test_history_limited_to_newest_check_ins(self, make_client, make_check_in, today, now):
        history = [make_check_in(days_ago=7 * i, weight=200 - i) for i in range(15, 0, -1)]
        report = build_check_in_comparison(
            history[-1], history[-2], make_client(), history, today=today, now=now
        )
        assert len(report.chart_data["weight"]) == 10


# ============================================================================
# Chart Data
# ============================================================================

class TestChartData:
    """Tests for chart series preparation."""

    def test_series_are_chronological(self, history):
        chart = prepare_chart_data(list(reversed(history)), "imperial")
        assert [p.value for p in chart["weight"]] == [200, 195, 190]
        assert chart["weight"][0].label == "200.0 lbs"
        assert chart["weight"][-1].date == "Mar 10"

    def test_missing_values_are_skipped(self, history):
        chart = prepare_chart_data(history, "imperial")
        assert len(chart["adherence"]) == 1
        assert chart["adherence"][0].label == "90%"
        assert chart["energy"] == []
        assert chart["mood"][-1].label == "4/5"

    def test_metric_weights(self, make_check_in):
        chart = prepare_chart_data([make_check_in(weight=88.0, weight_unit="kg")], "metric")
        assert chart["weight"][0].label == "88.0 kg"
