"""
Theme - Configuration for Report Visuals
=========================================

Colours and size tiers shared by the Streamlit dashboard and the PDF renderer,
grouped into frozen dataclasses so they cannot be modified at runtime.

Usage:
    from sentilyser.dashboard.theme import SENTIMENT_THEME, IMPACT_THEME, CHART_THEME, keyword_tier
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class SentimentTheme:
    """
    Keyword colours per sentiment.

    Attributes:
        text_colours (Dict[str, str]): Foreground colour per sentiment.
        background_colours (Dict[str, str]): Pill background colour per sentiment.
    """
    text_colours: Dict[str, str] = field(default_factory=lambda: {
        'positive': '#059669',  # emerald
        'neutral': '#475569',  # slate
        'negative': '#e11d48',  # rose
    })
    background_colours: Dict[str, str] = field(default_factory=lambda: {
        'positive': '#ecfdf5',
        'neutral': '#f8fafc',
        'negative': '#fff1f2',
    })


@dataclass(frozen=True)
class ImpactTheme:
    """
    Badge colours per actionable item impact.
    """
    badge_colours: Dict[str, str] = field(default_factory=lambda: {
        'High': '#f43f5e',  # rose
        'Medium': '#f59e0b',  # amber
        'Low': '#10b981',  # emerald
    })


@dataclass(frozen=True)
class ChartTheme:
    """
    Trend chart styling.
    """
    line_colour: str = '#6366f1'  # indigo
    fill_colour: str = 'rgba(99, 102, 241, 0.1)'
    grid_colour: str = '#e2e8f0'
    tick_colour: str = '#64748b'
    background_colour: str = '#f8fafc'
    height: int = 300


@dataclass(frozen=True)
class KeywordTier:
    name: str
    font_size: int  # px in the dashboard, pt in the PDF render
    font_weight: str


KEYWORD_TIERS = {
    'large': KeywordTier('large', 24, 'bold'),
    'medium': KeywordTier('medium', 20, 'semibold'),
    'small': KeywordTier('small', 14, 'medium'),
}


def keyword_tier(value: float) -> KeywordTier:
    """Size tier for a keyword weight: above 8 is large, above 5 medium, else small."""
    if value > 8:
        return KEYWORD_TIERS['large']
    if value > 5:
        return KEYWORD_TIERS['medium']
    return KEYWORD_TIERS['small']


SENTIMENT_THEME = SentimentTheme()
IMPACT_THEME = ImpactTheme()
CHART_THEME = ChartTheme()
