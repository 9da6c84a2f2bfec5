"""
Unit tests for the analysis and chat data models.
"""

import pytest

from sentilyser.models.analysis import ActionableItem, AnalysisResult, Keyword
from sentilyser.models.chat import ChatMessage


def test_from_dict_parses_wire_format(analysis_payload):
    """Test camelCase provider JSON maps onto the dataclasses."""
    result = AnalysisResult.from_dict(analysis_payload)

    assert result.summary.startswith("Customers love")
    assert [p.date for p in result.sentiment_trend] == ["2024-10-01", "2024-10-10", "2024-10-22"]
    assert result.sentiment_trend[1].score == -0.6
    assert result.keywords[0].sentiment == "positive"
    assert result.actionable_items[0].impact == "High"
    assert result.overall_stats.average_score == 0.3
    assert result.overall_stats.share_total == 100


def test_to_dict_uses_wire_keys(analysis_result):
    """Test serialization restores the provider's camelCase keys."""
    data = analysis_result.to_dict()

    assert set(data) == {"summary", "sentimentTrend", "keywords", "actionableItems", "overallStats"}
    assert data["overallStats"]["averageScore"] == 0.3
    assert AnalysisResult.from_dict(data) == analysis_result


def test_missing_field_raises_key_error(analysis_payload):
    """Test a payload without overallStats is rejected."""
    del analysis_payload["overallStats"]

    with pytest.raises(KeyError):
        AnalysisResult.from_dict(analysis_payload)


def test_non_object_payload_raises_type_error():
    """Test a JSON array is not accepted as an analysis."""
    with pytest.raises(TypeError):
        AnalysisResult.from_dict([])


def test_keyword_sentiment_validation():
    """Test keyword sentiment must be positive, neutral or negative."""
    assert Keyword.from_dict({"text": "fast", "value": 4, "sentiment": "Positive"}).sentiment == "positive"

    with pytest.raises(ValueError):
        Keyword(text="slow", value=2, sentiment="angry")


def test_actionable_item_impact_validation():
    """Test impact is normalized to title case and restricted to High/Medium/Low."""
    item = ActionableItem.from_dict({"title": "t", "description": "d", "impact": "HIGH"})
    assert item.impact == "High"

    with pytest.raises(ValueError):
        ActionableItem(title="t", description="d", impact="Critical")


def test_result_is_immutable(analysis_result):
    """Test snapshot fields cannot be reassigned."""
    with pytest.raises(AttributeError):
        analysis_result.summary = "changed"


def test_chat_message_role_validation():
    """Test chat roles are restricted to user and model."""
    message = ChatMessage(role="user", text="hi")
    assert message.is_thinking is False
    assert message.to_content() == {"role": "user", "parts": ["hi"]}

    with pytest.raises(ValueError):
        ChatMessage(role="assistant", text="hi")


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
