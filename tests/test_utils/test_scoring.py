"""
Unit tests for score normalization and the satisfaction bands.
"""

import pytest

from sentilyser.utils.scoring import normalize, normalize_score, satisfaction_band


@pytest.mark.parametrize("raw, expected", [(-1.0, 0.0), (0.0, 50.0), (1.0, 100.0), (0.3, 65.0), (-0.6, 20.0)])
def test_normalize_score(raw, expected):
    """Test the linear [-1, 1] -> [0, 100] mapping."""
    assert normalize_score(raw) == pytest.approx(expected)


def test_normalize_only_changes_scores(analysis_result):
    """Test trend and average scores are rescaled and everything else is carried over."""
    normalized = normalize(analysis_result)

    assert [p.score for p in normalized.sentiment_trend] == pytest.approx([90.0, 20.0, 50.0])
    assert [p.date for p in normalized.sentiment_trend] == [p.date for p in analysis_result.sentiment_trend]
    assert [p.label for p in normalized.sentiment_trend] == ["Positive", "Negative", "Neutral"]
    assert normalized.overall_stats.average_score == pytest.approx(65.0)
    assert normalized.overall_stats.positive == 50
    assert normalized.keywords == analysis_result.keywords
    assert normalized.actionable_items == analysis_result.actionable_items
    assert normalized.summary == analysis_result.summary


def test_normalize_leaves_source_untouched(analysis_result):
    """Test the provider snapshot keeps its raw scores."""
    normalize(analysis_result)

    assert analysis_result.overall_stats.average_score == 0.3
    assert analysis_result.sentiment_trend[0].score == 0.8


@pytest.mark.parametrize("index, band", [
    (90.0, "excellent"),
    (75.1, "excellent"),
    (75.0, "steady"),
    (40.0, "steady"),
    (39.9, "critical"),
    (0.0, "critical"),
])
def test_satisfaction_band(index, band):
    """Test band thresholds: above 75 excellent, below 40 critical."""
    assert satisfaction_band(index) == band


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
