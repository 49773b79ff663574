# Copyright (c) Syntropy Systems
"""Tests for success scoring and ROI."""

from datetime import timedelta

import pytest

from campaignlab.scoring import (
    PRIMARY_SCORE_CEILING,
    SuccessStatus,
    apply_metric_update,
    compute_roi,
    compute_success,
    is_goal_met,
    is_successful,
    match_goal_metric,
    primary_goal_score,
    secondary_goals_score,
    success_status,
)


def _criteria(**overrides):
    criteria = {
        "primaryGoal": "meetings",
        "timeFrame": 20,
        "targetMetrics": {"meetingsBooked": 10},
        "successThreshold": 80,
    }
    criteria.update(overrides)
    return criteria


class TestComputeSuccess:
    """Tests for the weighted success score."""

    def test_end_to_end_meetings(self, make_experiment, now):
        """Test 8 of 10 meetings at the halfway point."""
        result = compute_success(make_experiment(), now)

        assert result.breakdown.primary_goal == pytest.approx(80.0)
        assert result.breakdown.secondary_goals == 100.0
        # 80% attained with 50% of the time used is ahead of pace
        assert result.breakdown.efficiency == 100.0
        assert result.score == 90
        assert result.status is SuccessStatus.EXCELLENT
        assert result.experiment_id == "exp-001"
        assert result.calculated_at == now

    def test_behind_pace(self, make_experiment, now):
        """Test 2 of 10 meetings halfway through scores efficiency by pace."""
        experiment = make_experiment(metrics={"meetingsBooked": 2})
        result = compute_success(experiment, now)

        assert result.breakdown.primary_goal == pytest.approx(20.0)
        assert result.breakdown.efficiency == pytest.approx(40.0)
        assert result.score == 48
        assert result.status is SuccessStatus.FAIR

    def test_target_exceeded(self, make_experiment, now):
        """Test overperformance shows in the breakdown but not the blend."""
        experiment = make_experiment(metrics={"meetingsBooked": 15})
        result = compute_success(experiment, now)

        assert result.breakdown.primary_goal == pytest.approx(150.0)
        # Target reached with half the time frame left
        assert result.breakdown.efficiency == pytest.approx(50.0)
        assert result.score == 90

    def test_primary_clamped_to_ceiling(self, make_experiment):
        """Test attainment above the ceiling is clamped."""
        experiment = make_experiment(metrics={"meetingsBooked": 40})
        assert primary_goal_score(experiment) == PRIMARY_SCORE_CEILING

    def test_target_reached_after_time_frame(self, make_experiment, now):
        """Test reaching the target late leaves no efficiency credit."""
        experiment = make_experiment(
            startedAt=now - timedelta(days=30),
            metrics={"meetingsBooked": 10},
        )
        result = compute_success(experiment, now)

        assert result.breakdown.efficiency == 0.0
        assert result.score == 80

    def test_missing_target(self, make_experiment, now):
        """Test a missing primary target scores 0 for the primary goal."""
        experiment = make_experiment(successCriteria=_criteria(targetMetrics={}))
        result = compute_success(experiment, now)

        assert result.breakdown.primary_goal == 0.0
        assert result.breakdown.efficiency == 0.0
        assert result.score == 30
        assert result.status is SuccessStatus.POOR
        assert not result.threshold_met

    def test_zero_target(self, make_experiment, now):
        """Test a zero target is treated like a missing one."""
        experiment = make_experiment(
            successCriteria=_criteria(targetMetrics={"meetingsBooked": 0})
        )
        assert compute_success(experiment, now).breakdown.primary_goal == 0.0

    def test_missing_metric_counts_as_zero(self, make_experiment, now):
        """Test a target with no recorded value scores 0."""
        experiment = make_experiment(metrics={})
        assert compute_success(experiment, now).breakdown.primary_goal == 0.0

    def test_unknown_primary_goal(self, make_experiment, now):
        """Test an unrecognized goal falls back to a primary score of 0."""
        experiment = make_experiment(successCriteria=_criteria(primaryGoal="pipeline"))
        result = compute_success(experiment, now)

        assert result.breakdown.primary_goal == 0.0
        assert result.score == 30

    @pytest.mark.parametrize(
        ("goal", "targets", "metrics"),
        [
            ("leads", {"leadsGenerated": 50}, {"leadsGenerated": 25}),
            ("revenue", {"revenueGenerated": 100000}, {"revenueGenerated": 50000}),
            ("engagement", {"responseRate": 20}, {"responseRate": 10}),
            ("awareness", {"impressions": 10000}, {"impressions": 5000}),
        ],
    )
    def test_goal_metric_mapping(self, make_experiment, goal, targets, metrics):
        """Test each primary goal reads its own metric."""
        experiment = make_experiment(
            successCriteria=_criteria(primaryGoal=goal, targetMetrics=targets),
            metrics=metrics,
        )
        assert primary_goal_score(experiment) == pytest.approx(50.0)

    def test_falls_back_to_created_at(self, make_experiment, now):
        """Test elapsed time counts from creation when never started."""
        experiment = make_experiment(startedAt=None, metrics={"meetingsBooked": 2})
        result = compute_success(experiment, now)

        # 20% attained with 12 of 20 days used
        assert result.breakdown.efficiency == pytest.approx(100 * 0.2 / 0.6)
        assert result.score == 47

    def test_started_today(self, make_experiment, now):
        """Test no elapsed time does not divide by zero."""
        experiment = make_experiment(startedAt=now, metrics={"meetingsBooked": 1})
        assert compute_success(experiment, now).breakdown.efficiency == 100.0

    def test_started_today_with_nothing_recorded(self, make_experiment, now):
        """Test zero attainment on day zero scores zero efficiency."""
        experiment = make_experiment(startedAt=now, metrics={})
        assert compute_success(experiment, now).breakdown.efficiency == 0.0

    def test_threshold_met(self, make_experiment, now):
        """Test threshold is compared against raw attainment."""
        assert compute_success(make_experiment(), now).threshold_met
        experiment = make_experiment(successCriteria=_criteria(successThreshold=90))
        assert not compute_success(experiment, now).threshold_met

    def test_idempotent(self, make_experiment, now):
        """Test scoring the same snapshot twice gives the same result."""
        experiment = make_experiment(
            successCriteria=_criteria(secondaryGoals=["Improve response rate"]),
            metrics={"meetingsBooked": 4, "responseRate": 12},
        )
        before = experiment.model_dump()

        first = compute_success(experiment, now)
        second = compute_success(experiment, now)

        assert first == second
        assert experiment.model_dump() == before

    def test_score_stays_in_range(self, make_experiment, now):
        """Test the score never leaves 0-100."""
        for meetings in (0, 3, 10, 100):
            result = compute_success(
                make_experiment(metrics={"meetingsBooked": meetings}), now
            )
            assert 0 <= result.score <= 100


class TestSecondaryGoals:
    """Tests for secondary goal evaluation."""

    def test_no_secondary_goals(self, make_experiment):
        """Test no declared goals counts as fully satisfied."""
        assert secondary_goals_score(make_experiment()) == 100.0

    def test_empty_secondary_goals(self, make_experiment):
        """Test an empty list behaves like no goals."""
        experiment = make_experiment(successCriteria=_criteria(secondaryGoals=[]))
        assert secondary_goals_score(experiment) == 100.0

    def test_fraction_met(self, make_experiment):
        """Test the score is the share of goals met."""
        experiment = make_experiment(
            successCriteria=_criteria(
                targetMetrics={
                    "meetingsBooked": 10,
                    "responseRate": 10,
                    "costPerLead": 100,
                },
                secondaryGoals=[
                    "Improve response rate",
                    "Lower cost per lead",
                    "Build brand affinity",
                ],
            ),
            metrics={
                "meetingsBooked": 8,
                "responseRate": 12,
                "cost": 4000,
                "leadsGenerated": 50,
            },
        )
        assert secondary_goals_score(experiment) == pytest.approx(200 / 3)

    def test_exact_metric_name(self, make_experiment):
        """Test a goal naming a metric matches it directly."""
        experiment = make_experiment(metrics={"meetingsBooked": 3, "openRate": 40})
        assert match_goal_metric("meetings booked", experiment) == "meetingsBooked"
        assert match_goal_metric("Open rate", experiment) == "openRate"

    def test_keyword_order(self, make_experiment):
        """Test cost keywords win over lead keywords."""
        experiment = make_experiment()
        assert match_goal_metric("Cost per lead under $100", experiment) == "costPerLead"
        assert match_goal_metric("More qualified leads", experiment) == "leadsGenerated"
        assert match_goal_metric("Prioritize enterprise", experiment) is None

    def test_higher_is_better_without_target(self, make_experiment):
        """Test a positive metric meets a goal with no target."""
        experiment = make_experiment(metrics={"impressions": 500})
        assert is_goal_met("Increase reach", experiment)

    def test_lower_is_better_against_target(self, make_experiment):
        """Test cost goals compare at or below the target."""
        experiment = make_experiment(
            successCriteria=_criteria(targetMetrics={"costPerLead": 50}),
            metrics={"cost": 4000, "leadsGenerated": 50},
        )
        assert not is_goal_met("Reduce cost per lead", experiment)

    def test_lower_is_better_without_target(self, make_experiment):
        """Test cost goals without a target are not met."""
        experiment = make_experiment(metrics={"costPerLead": 10})
        assert not is_goal_met("Reduce cost per lead", experiment)

    def test_missing_metric(self, make_experiment):
        """Test goals whose metric was never recorded are not met."""
        experiment = make_experiment(metrics={})
        assert not is_goal_met("Improve ROI", experiment)


class TestSuccessStatus:
    """Tests for status tier thresholds."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (100, SuccessStatus.EXCELLENT),
            (85, SuccessStatus.EXCELLENT),
            (84, SuccessStatus.GOOD),
            (65, SuccessStatus.GOOD),
            (64, SuccessStatus.FAIR),
            (40, SuccessStatus.FAIR),
            (39, SuccessStatus.POOR),
            (0, SuccessStatus.POOR),
        ],
    )
    def test_tiers(self, score, expected):
        """Test lower bounds are inclusive."""
        assert success_status(score) is expected

    def test_is_successful(self, make_experiment, now):
        """Test good and excellent count as successful."""
        assert is_successful(compute_success(make_experiment(), now))
        behind = make_experiment(metrics={"meetingsBooked": 2})
        assert not is_successful(compute_success(behind, now))


class TestROI:
    """Tests for ROI and metric auto-sync."""

    def test_no_cost(self):
        """Test zero spend gives zero ROI."""
        assert compute_roi(10, 0) == 0

    def test_no_meetings(self):
        """Test zero meetings gives zero ROI."""
        assert compute_roi(0, 5000) == 0

    def test_one_meeting_value_per_meeting(self):
        """Test 5 meetings against one meeting's value of spend."""
        assert compute_roi(5, 7200) == 5

    def test_unclamped(self):
        """Test ROI can grow arbitrarily large."""
        assert compute_roi(100, 1) == 720000

    def test_negative_meetings(self):
        """Test a negative meeting correction gives a negative ROI."""
        assert compute_roi(-2, 7200) == -2

    def test_negative_cost(self):
        """Test a non-positive cost counts as no spend."""
        assert compute_roi(5, -100) == 0

    def test_custom_value_per_meeting(self):
        """Test the per-meeting value can be overridden."""
        assert compute_roi(2, 1000, value_per_meeting=1000) == 2

    def test_update_recomputes_roi(self):
        """Test changing cost refreshes roi."""
        metrics = {"meetingsBooked": 8.0, "cost": 4000.0, "roi": 0.0}
        merged = apply_metric_update(metrics, {"cost": 7200.0})

        assert merged["roi"] == pytest.approx(8.0)
        assert merged["cost"] == 7200.0
        assert metrics["roi"] == 0.0

    def test_update_meetings_without_cost(self):
        """Test a meetings edit with no spend recorded gives zero roi."""
        merged = apply_metric_update({}, {"meetingsBooked": 3.0})
        assert merged["roi"] == 0.0

    def test_unrelated_update_keeps_roi(self):
        """Test edits to other metrics leave roi alone."""
        metrics = {"meetingsBooked": 8.0, "cost": 4000.0, "roi": 99.0}
        merged = apply_metric_update(metrics, {"clicks": 120.0})
        assert merged["roi"] == 99.0
