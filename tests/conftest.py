"""
Shared fixtures: a provider payload shaped like the analysis response schema.
"""

import copy

import pytest

from sentilyser.models.analysis import AnalysisResult

ANALYSIS_PAYLOAD = {
    "summary": 'Customers love the build quality, but "shipping" delays and app crashes hurt trust.',
    "sentimentTrend": [
        {"date": "2024-10-01", "score": 0.8, "label": "Positive"},
        {"date": "2024-10-10", "score": -0.6, "label": "Negative"},
        {"date": "2024-10-22", "score": 0.0, "label": "Neutral"}
    ],
    "keywords": [
        {"text": "quality", "value": 9, "sentiment": "positive"},
        {"text": "shipping", "value": 6, "sentiment": "negative"},
        {"text": "price", "value": 3, "sentiment": "neutral"}
    ],
    "actionableItems": [
        {"title": "Fix app crashes", "description": "Stabilize the latest mobile release.", "impact": "High"},
        {"title": "Speed up shipping", "description": "Renegotiate courier SLAs.", "impact": "Medium"},
        {"title": "Refresh docs", "description": "Update the outdated documentation.", "impact": "Low"}
    ],
    "overallStats": {"positive": 50, "neutral": 30, "negative": 20, "averageScore": 0.3}
}


@pytest.fixture
def analysis_payload():
    """Fresh copy of the provider payload (safe to mutate)."""
    return copy.deepcopy(ANALYSIS_PAYLOAD)


@pytest.fixture
def analysis_result(analysis_payload):
    return AnalysisResult.from_dict(analysis_payload)
