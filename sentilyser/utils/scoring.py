"""
Score normalization.

Maps provider sentiment scores from [-1, 1] to the 0-100 display scale.
"""

from typing import Union

from sentilyser.models.analysis import AnalysisResult, NormalizedAnalysisResult, OverallStats, SentimentPoint


def normalize_score(value: Union[int, float]) -> float:
    """Map a score from [-1, 1] to [0, 100]: f(x) = (x + 1) * 50."""
    return (float(value) + 1.0) * 50.0


def normalize(result: AnalysisResult) -> NormalizedAnalysisResult:
    """
    Build the 0-100 display view of an analysis result.

    Only sentiment_trend[].score and overall_stats.average_score change;
    every other field is carried over. The source result is left untouched.
    """
    stats = result.overall_stats
    return NormalizedAnalysisResult(
        summary=result.summary,
        sentiment_trend=[
            SentimentPoint(date=p.date, score=normalize_score(p.score), label=p.label)
            for p in result.sentiment_trend
        ],
        keywords=list(result.keywords),
        actionable_items=list(result.actionable_items),
        overall_stats=OverallStats(
            positive=stats.positive,
            neutral=stats.neutral,
            negative=stats.negative,
            average_score=normalize_score(stats.average_score)
        )
    )


def satisfaction_band(index: float) -> str:
    """
    Qualitative band for a 0-100 Satisfaction Index.

    Above 75 is excellent, below 40 requires immediate attention.
    """
    if index > 75:
        return "excellent"
    if index < 40:
        return "critical"
    return "steady"
