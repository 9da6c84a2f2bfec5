"""
Unit tests for the dashboard chart builders.
"""

import pytest

from sentilyser.dashboard.charts import action_title_html, build_trend_chart, impact_badge_html, keyword_cloud_html
from sentilyser.dashboard.theme import IMPACT_THEME, SENTIMENT_THEME, keyword_tier
from sentilyser.models.analysis import Keyword
from sentilyser.utils.scoring import normalize


def test_trend_chart_uses_normalized_scores(analysis_result):
    """Test the trend chart plots 0-100 scores on a fixed 0-100 axis."""
    fig = build_trend_chart(normalize(analysis_result).sentiment_trend)

    trace = fig.data[0]
    assert list(trace.x) == ["2024-10-01", "2024-10-10", "2024-10-22"]
    assert list(trace.y) == pytest.approx([90.0, 20.0, 50.0])
    assert trace.fill == "tozeroy"
    assert tuple(fig.layout.yaxis.range) == (0, 100)


def test_keyword_cloud_sorted_by_weight():
    """Test pills are ordered heaviest first."""
    keywords = [
        Keyword("price", 3, "neutral"),
        Keyword("quality", 9, "positive"),
        Keyword("shipping", 6, "negative"),
    ]

    html = keyword_cloud_html(keywords)

    assert html.index("quality") < html.index("shipping") < html.index("price")
    assert "kw-large" in html and "kw-medium" in html and "kw-small" in html
    assert SENTIMENT_THEME.text_colours["negative"] in html


def test_keyword_cloud_escapes_text():
    """Test keyword text is HTML-escaped."""
    html = keyword_cloud_html([Keyword("<b>bold</b>", 4, "neutral")])

    assert "<b>bold</b>" not in html
    assert "&lt;b&gt;bold&lt;/b&gt;" in html


@pytest.mark.parametrize("value, tier", [(10, "large"), (8.5, "large"), (8, "medium"), (6, "medium"), (5, "small"), (1, "small")])
def test_keyword_tiers(value, tier):
    """Test size tiers: above 8 large, above 5 medium, otherwise small."""
    assert keyword_tier(value).name == tier


def test_impact_badge_colours():
    assert IMPACT_THEME.badge_colours["High"] in impact_badge_html("High")
    assert IMPACT_THEME.badge_colours["Low"] in impact_badge_html("Low")


def test_action_title_escapes_text():
    """Test provider-supplied action titles are HTML-escaped before rendering."""
    heading = action_title_html("<img src=x onerror=alert(1)>", "High")

    assert "<img" not in heading
    assert "&lt;img src=x onerror=alert(1)&gt;" in heading
    assert IMPACT_THEME.badge_colours["High"] in heading


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
