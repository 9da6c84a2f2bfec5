"""
Charts Module
=============

Chart builders used by the dashboard:

1. build_trend_chart(trend)
   - Purpose: Satisfaction trend on the 0-100 scale as a filled area line.
   - Output: Plotly Figure, rendered with st.plotly_chart.

2. keyword_cloud_html(keywords)
   - Purpose: Keyword pills, heaviest first, sized by weight and coloured by sentiment.
   - Output: HTML string, rendered with st.markdown(unsafe_allow_html=True).

3. impact_badge_html(impact)
   - Purpose: Coloured High / Medium / Low badge for an action area.

4. action_title_html(title, impact)
   - Purpose: Escaped action-area title with its badge.
"""

import html
from typing import List

import plotly.graph_objects as go

from sentilyser.dashboard.theme import CHART_THEME, IMPACT_THEME, SENTIMENT_THEME, keyword_tier
from sentilyser.models.analysis import Keyword, SentimentPoint


def apply_chart_style(fig, height=None):
    """
    Applies the dashboard styling to a Plotly figure:
    white background, dashed horizontal grid, fixed 0-100 y axis.
    """
    fig.update_layout(
        height=height or CHART_THEME.height,
        paper_bgcolor="white",
        plot_bgcolor="white",
        template="plotly_white",
        hovermode="x unified",
        showlegend=False,
        margin=dict(l=40, r=20, t=20, b=40),
        xaxis=dict(showgrid=False, tickfont=dict(color=CHART_THEME.tick_colour, size=12)),
        yaxis=dict(
            range=[0, 100],
            gridcolor=CHART_THEME.grid_colour,
            griddash="dash",
            tickfont=dict(color=CHART_THEME.tick_colour, size=12)
        )
    )
    return fig


def build_trend_chart(trend: List[SentimentPoint], height=None) -> go.Figure:
    """Area chart of normalized trend scores in chronological order."""
    fig = go.Figure(
        go.Scatter(
            x=[p.date for p in trend],
            y=[p.score for p in trend],
            customdata=[p.label for p in trend],
            mode="lines+markers",
            name="Satisfaction",
            line=dict(color=CHART_THEME.line_colour, width=3, shape="spline"),
            fill="tozeroy",
            fillcolor=CHART_THEME.fill_colour,
            hovertemplate="<b>%{y:.1f}%</b> Satisfaction<br>%{customdata}<extra></extra>"
        )
    )
    return apply_chart_style(fig, height=height)


def keyword_cloud_html(keywords: List[Keyword]) -> str:
    """Keyword pills sorted by weight, largest first."""
    font_weights = {"bold": 700, "semibold": 600, "medium": 500}
    pills = []
    for kw in sorted(keywords, key=lambda k: k.value, reverse=True):
        tier = keyword_tier(kw.value)
        style = (
            f"display:inline-block;margin:4px;padding:6px 12px;border-radius:9999px;"
            f"font-size:{tier.font_size}px;font-weight:{font_weights[tier.font_weight]};"
            f"color:{SENTIMENT_THEME.text_colours[kw.sentiment]};"
            f"background:{SENTIMENT_THEME.background_colours[kw.sentiment]};"
        )
        pills.append(f'<span class="kw kw-{tier.name}" style="{style}">{html.escape(kw.text)}</span>')

    return f'<div style="text-align:center;padding:16px;">{"".join(pills)}</div>'


def impact_badge_html(impact: str) -> str:
    colour = IMPACT_THEME.badge_colours.get(impact, "#64748b")
    return (
        f'<span style="background:{colour};color:white;font-size:10px;font-weight:700;'
        f'padding:2px 8px;border-radius:9999px;text-transform:uppercase;">{html.escape(impact)}</span>'
    )


def action_title_html(title: str, impact: str) -> str:
    """Bold action-area title followed by its impact badge."""
    return f"<strong>{html.escape(title)}</strong> {impact_badge_html(impact)}"
