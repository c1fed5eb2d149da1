"""
Unit tests for weighted milestone completion.
"""

from project_health.models.milestone import Milestone
from project_health.services.completion_calculator import round_half_up, weighted_completion


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_half_rounds_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(62.5) == 63

    def test_below_half_rounds_down(self):
        assert round_half_up(83.333) == 83


class TestWeightedCompletion:
    """Tests for weighted_completion."""

    def test_empty_is_zero(self):
        assert weighted_completion([]) == 0

    def test_heavy_finished_milestone_dominates(self):
        milestones = [Milestone(completion=100, weight=5), Milestone(completion=0, weight=1)]
        assert weighted_completion(milestones) == 83

    def test_equal_weights_is_plain_mean(self):
        milestones = [Milestone(completion=20, weight=2), Milestone(completion=60, weight=2)]
        assert weighted_completion(milestones) == 40

    def test_missing_weight_defaults_to_three(self):
        milestones = [Milestone(completion=50), Milestone(completion=100, weight=1)]
        # (50*3 + 100*1) / 4 = 62.5
        assert weighted_completion(milestones) == 63

    def test_invalid_values_are_normalized(self):
        milestones = [
            Milestone(completion=150, weight=7),
            Milestone(completion=-10, weight=0),
        ]
        # Both weights fall back to 3; completions clamp to 100 and 0
        assert weighted_completion(milestones) == 50

    def test_result_stays_in_bounds(self):
        for completion in (0, 1, 33.3, 66.6, 99.5, 100):
            result = weighted_completion([Milestone(completion=completion, weight=4)])
            assert 0 <= result <= 100
