"""Unit tests for daily goal scoring."""

import pytest

from fitjourney.domain.service import daily_goal_percentage
from fitjourney.domain.value import MetricProgress


def test_no_metrics_is_zero():
    assert daily_goal_percentage([]) == 0


@pytest.mark.parametrize(
    "values,expected",
    [
        # 50% + 50% + 50% + 50%
        ([(5000, 10000), (250, 500), (30, 60), (4, 8)], 50),
        # Over-achievement is capped at 100 per metric
        ([(20000, 10000), (0, 500), (60, 60), (8, 8)], 75),
        ([(10000, 10000), (500, 500), (60, 60), (8, 8)], 100),
        ([(1, 3)], 33),
    ],
)
def test_mean_of_capped_percentages(values, expected):
    """The overall score is the rounded mean of capped metric percentages."""
    metrics = [MetricProgress(value=v, goal=g) for v, g in values]

    assert daily_goal_percentage(metrics) == expected
