"""
Tests for the fusion weight schedule.
"""

import pytest

from bloom_identity.services.signals.weights import DEFAULT_WEIGHT_SCHEDULE, WeightSchedule


class TestFeedbackWeight:
    def test_zero_events(self):
        assert DEFAULT_WEIGHT_SCHEDULE.feedback_weight(0) == 0

    def test_grows_per_event(self):
        assert DEFAULT_WEIGHT_SCHEDULE.feedback_weight(5) == pytest.approx(0.1)

    @pytest.mark.parametrize("event_count", [15, 16, 100])
    def test_caps_at_fifteen_events(self, event_count):
        assert DEFAULT_WEIGHT_SCHEDULE.feedback_weight(event_count) == pytest.approx(0.3)

    def test_non_decreasing(self):
        weights = [DEFAULT_WEIGHT_SCHEDULE.feedback_weight(n) for n in range(50)]
        assert weights == sorted(weights)


class TestCompute:
    def test_no_feedback_with_static_profile(self):
        weights = DEFAULT_WEIGHT_SCHEDULE.compute(0, has_static_profile=True)

        assert weights.conversation == pytest.approx(0.7)
        assert weights.static == pytest.approx(0.3)
        assert weights.feedback == 0

    def test_no_static_profile(self):
        weights = DEFAULT_WEIGHT_SCHEDULE.compute(0, has_static_profile=False)

        assert weights.conversation == pytest.approx(1.0)
        assert weights.static == 0
        assert weights.feedback == 0

    def test_saturated_feedback(self):
        weights = DEFAULT_WEIGHT_SCHEDULE.compute(15, has_static_profile=True)

        assert weights.feedback == pytest.approx(0.3)
        assert weights.static == pytest.approx(0.201)
        assert weights.conversation == pytest.approx(0.499)

    def test_ten_events(self):
        weights = DEFAULT_WEIGHT_SCHEDULE.compute(10, has_static_profile=True)

        assert weights.feedback == pytest.approx(0.2)
        assert weights.static == pytest.approx(0.234)
        assert weights.conversation == pytest.approx(0.566)

    @pytest.mark.parametrize("event_count", [0, 1, 7, 15, 40])
    @pytest.mark.parametrize("has_static_profile", [True, False])
    def test_weights_sum_to_one(self, event_count, has_static_profile):
        weights = DEFAULT_WEIGHT_SCHEDULE.compute(event_count, has_static_profile)
        assert weights.conversation + weights.static + weights.feedback == pytest.approx(1.0)

    def test_static_floor_binds_with_custom_schedule(self):
        schedule = WeightSchedule(feedback_cap=0.5, static_decay=1.0)
        weights = schedule.compute(25, has_static_profile=True)

        assert weights.static == pytest.approx(0.2)
        assert weights.conversation == pytest.approx(0.3)
