"""
Local conformance pass over provider output.

The prompt asks the model to keep scores in [-1, 1], shares summing to 100
and exactly three urgency-ordered action items. This pass repairs responses
that break those rules instead of rendering them as-is.
"""

import logging
import math
from dataclasses import replace
from typing import List

from sentilyser.models.analysis import IMPACT_LEVELS, ActionableItem, AnalysisResult, OverallStats

logger = logging.getLogger(__name__)

SHARE_TOTAL = 100
SHARE_TOLERANCE = 1e-6


def clamp_score(value: float) -> float:
    """Bound a sentiment score to [-1, 1]."""
    return max(-1.0, min(1.0, float(value)))


def rebalance_shares(positive: float, neutral: float, negative: float) -> List[float]:
    """
    Rescale share percentages so they sum to exactly 100.

    Shares already summing to 100 are returned unchanged. Otherwise they are
    scaled proportionally and rounded to whole percents by largest remainder.
    All-zero shares cannot be rescaled and are returned unchanged.
    """
    shares = [max(0.0, float(positive)), max(0.0, float(neutral)), max(0.0, float(negative))]
    total = sum(shares)

    if abs(total - SHARE_TOTAL) <= SHARE_TOLERANCE or total == 0:
        return shares

    scaled = [s * SHARE_TOTAL / total for s in shares]
    floors = [math.floor(s) for s in scaled]
    shortfall = SHARE_TOTAL - sum(floors)

    # Hand the missing points to the largest fractional parts; ties go to the earlier share
    order = sorted(range(len(scaled)), key=lambda i: (-(scaled[i] - floors[i]), i))
    for i in order[:shortfall]:
        floors[i] += 1

    return [float(f) for f in floors]


def prioritize_items(items: List[ActionableItem], item_count: int = 3) -> List[ActionableItem]:
    """Stable-sort items High > Medium > Low and keep at most item_count."""
    rank = {impact: i for i, impact in enumerate(IMPACT_LEVELS)}
    ordered = sorted(items, key=lambda item: rank[item.impact])
    return ordered[:item_count]


def conform(result: AnalysisResult, item_count: int = 3) -> AnalysisResult:
    """
    Return a repaired copy of result. A conformant result is returned unchanged.

    Args:
        result: Parsed provider output
        item_count: Expected number of actionable items
    """
    trend = result.sentiment_trend
    if any(clamp_score(p.score) != p.score for p in trend):
        logger.warning("Provider returned trend scores outside [-1, 1]; clamping")
        trend = [replace(p, score=clamp_score(p.score)) for p in trend]

    keywords = result.keywords
    if any(k.value < 0 for k in keywords):
        logger.warning("Provider returned negative keyword weights; clamping to 0")
        keywords = [replace(k, value=max(0.0, k.value)) for k in keywords]

    stats = result.overall_stats
    average = clamp_score(stats.average_score)
    if average != stats.average_score:
        logger.warning(f"Provider returned average score {stats.average_score} outside [-1, 1]; clamping")

    positive, neutral, negative = rebalance_shares(stats.positive, stats.neutral, stats.negative)
    if stats.share_total == 0:
        logger.warning("Provider returned all-zero sentiment shares; leaving as-is")
    elif [positive, neutral, negative] != [stats.positive, stats.neutral, stats.negative]:
        logger.warning(f"Provider shares summed to {stats.share_total}; rescaled to {SHARE_TOTAL}")

    new_stats = OverallStats(
        positive=positive,
        neutral=neutral,
        negative=negative,
        average_score=average
    )

    items = prioritize_items(result.actionable_items, item_count)
    if len(result.actionable_items) > item_count:
        logger.warning(
            f"Provider returned {len(result.actionable_items)} actionable items; keeping top {item_count}"
        )
    elif len(items) < item_count:
        logger.warning(f"Provider returned only {len(items)} actionable items (expected {item_count})")
    if items != list(result.actionable_items)[:len(items)]:
        logger.warning("Actionable items were not ordered by impact; reordered")

    return replace(
        result,
        sentiment_trend=list(trend),
        keywords=list(keywords),
        actionable_items=items,
        overall_stats=new_stats
    )
