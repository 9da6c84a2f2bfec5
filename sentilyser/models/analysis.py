"""
Analysis result data model.

Represents the structured sentiment report returned by the analysis service.
Wire format (provider JSON) uses camelCase keys; Python attributes use snake_case.
"""

from dataclasses import dataclass, field
from typing import List

KEYWORD_SENTIMENTS = ("positive", "neutral", "negative")
IMPACT_LEVELS = ("High", "Medium", "Low")


@dataclass(frozen=True)
class SentimentPoint:
    """One point of the chronological sentiment trend."""
    date: str  # As returned by the provider, usually YYYY-MM-DD
    score: float  # -1 to 1 (0 to 100 once normalized)
    label: str

    @classmethod
    def from_dict(cls, data: dict) -> "SentimentPoint":
        return cls(
            date=str(data["date"]),
            score=float(data["score"]),
            label=str(data["label"])
        )

    def to_dict(self) -> dict:
        return {"date": self.date, "score": self.score, "label": self.label}


@dataclass(frozen=True)
class Keyword:
    """
    A sentiment driver word for the keyword cloud.
    """
    text: str
    value: float  # Relative weight, >= 0
    sentiment: str  # "positive", "neutral" or "negative"

    def __post_init__(self):
        if self.sentiment not in KEYWORD_SENTIMENTS:
            raise ValueError(
                f"Invalid sentiment: {self.sentiment}. Must be 'positive', 'neutral', or 'negative'"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "Keyword":
        return cls(
            text=str(data["text"]),
            value=float(data["value"]),
            sentiment=str(data["sentiment"]).lower()
        )

    def to_dict(self) -> dict:
        return {"text": self.text, "value": self.value, "sentiment": self.sentiment}


@dataclass(frozen=True)
class ActionableItem:
    """
    A prioritized recommendation derived from the aggregate feedback.
    """
    title: str
    description: str
    impact: str  # "High", "Medium" or "Low"

    def __post_init__(self):
        if self.impact not in IMPACT_LEVELS:
            raise ValueError(f"Invalid impact: {self.impact}. Must be 'High', 'Medium', or 'Low'")

    @classmethod
    def from_dict(cls, data: dict) -> "ActionableItem":
        return cls(
            title=str(data["title"]),
            description=str(data["description"]),
            impact=str(data["impact"]).capitalize()
        )

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "impact": self.impact}


@dataclass(frozen=True)
class OverallStats:
    """
    Sentiment share percentages plus the average score.
    Shares are expected to sum to exactly 100.
    """
    positive: float
    neutral: float
    negative: float
    average_score: float  # -1 to 1 (0 to 100 once normalized)

    @property
    def share_total(self) -> float:
        return self.positive + self.neutral + self.negative

    @classmethod
    def from_dict(cls, data: dict) -> "OverallStats":
        return cls(
            positive=float(data["positive"]),
            neutral=float(data["neutral"]),
            negative=float(data["negative"]),
            average_score=float(data["averageScore"])
        )

    def to_dict(self) -> dict:
        return {
            "positive": self.positive,
            "neutral": self.neutral,
            "negative": self.negative,
            "averageScore": self.average_score
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Immutable snapshot produced by one analysis request.

    sentiment_trend is chronological; actionable_items is ordered most urgent first;
    keywords carry no ordering guarantee.
    """
    summary: str
    sentiment_trend: List[SentimentPoint] = field(default_factory=list)
    keywords: List[Keyword] = field(default_factory=list)
    actionable_items: List[ActionableItem] = field(default_factory=list)
    overall_stats: OverallStats = field(default_factory=lambda: OverallStats(0, 0, 0, 0))

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        """
        Create result from provider JSON dict.

        Raises:
            KeyError: If a required field is missing
            ValueError / TypeError: If a field has the wrong shape or an invalid enum value
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

        return cls(
            summary=str(data["summary"]),
            sentiment_trend=[SentimentPoint.from_dict(p) for p in data["sentimentTrend"]],
            keywords=[Keyword.from_dict(k) for k in data["keywords"]],
            actionable_items=[ActionableItem.from_dict(a) for a in data["actionableItems"]],
            overall_stats=OverallStats.from_dict(data["overallStats"])
        )

    def to_dict(self) -> dict:
        """Convert to the provider's JSON shape."""
        return {
            "summary": self.summary,
            "sentimentTrend": [p.to_dict() for p in self.sentiment_trend],
            "keywords": [k.to_dict() for k in self.keywords],
            "actionableItems": [a.to_dict() for a in self.actionable_items],
            "overallStats": self.overall_stats.to_dict()
        }


@dataclass(frozen=True)
class NormalizedAnalysisResult(AnalysisResult):
    """
    Read-only display view of an AnalysisResult.
    Every score (trend points and average) is on the 0-100 scale.
    """
    pass
