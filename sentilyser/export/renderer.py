"""
Report rasterizer.

Draws the normalized report (stat cards, trend chart, keyword cloud,
executive summary and action areas) into a single PNG image with matplotlib.
"""

import io
import logging
import textwrap
from datetime import date
from typing import List, Optional

from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch
from PIL import Image

from sentilyser.dashboard.theme import CHART_THEME, IMPACT_THEME, SENTIMENT_THEME, keyword_tier
from sentilyser.models.analysis import Keyword, NormalizedAnalysisResult, SentimentPoint
from sentilyser.report.view_model import build_stat_cards
from sentilyser.utils.scoring import satisfaction_band

logger = logging.getLogger(__name__)

PAGE_WIDTH_IN = 8.27  # A4 width
TEXT_WRAP_CHARS = 100
TEXT_LINE_HEIGHT_IN = 0.19
FIXED_SECTIONS_HEIGHT_IN = 6.6  # header + cards + trend + keywords


def _wrap(text: str, width: int = TEXT_WRAP_CHARS) -> List[str]:
    return textwrap.wrap(text, width=width) or [""]


def _summary_lines(normalized: NormalizedAnalysisResult) -> List[tuple]:
    """(text, style) lines of the summary / action areas block."""
    lines = [("AI Executive Summary", "heading")]
    lines += [(line, "italic") for line in _wrap(f'"{normalized.summary}"')]
    lines.append(("", "body"))
    lines.append((f"Top {len(normalized.actionable_items)} Action Areas", "heading"))
    for item in normalized.actionable_items:
        lines.append((f"[{item.impact.upper()}] {item.title}", f"impact:{item.impact}"))
        lines += [(line, "body") for line in _wrap(item.description, TEXT_WRAP_CHARS - 4)]
    return lines


def _draw_card(ax, label: str, value: str) -> None:
    ax.set_axis_off()
    ax.add_patch(_card_patch(ax))
    ax.text(0.5, 0.68, label.upper(), ha="center", va="center", fontsize=7, color=CHART_THEME.tick_colour,
            transform=ax.transAxes)
    ax.text(0.5, 0.32, value, ha="center", va="center", fontsize=15, fontweight="bold", color="#0f172a",
            transform=ax.transAxes)


def _card_patch(ax):
    return FancyBboxPatch((0.02, 0.04), 0.96, 0.92, boxstyle="round,pad=0.0,rounding_size=0.08",
                          transform=ax.transAxes, facecolor="white", edgecolor=CHART_THEME.grid_colour)


def _draw_trend(ax, trend: List[SentimentPoint]) -> None:
    ax.set_title("Satisfaction Trend (0-100)", loc="left", fontsize=11, fontweight="bold", color="#1e293b")
    ax.set_facecolor("white")
    ax.set_ylim(0, 100)
    ax.grid(axis="y", color=CHART_THEME.grid_colour, linestyle="--")
    for side in ("top", "right", "left", "bottom"):
        ax.spines[side].set_visible(False)
    ax.tick_params(colors=CHART_THEME.tick_colour, labelsize=7)

    if not trend:
        ax.text(0.5, 0.5, "No trend data", ha="center", va="center", transform=ax.transAxes,
                color=CHART_THEME.tick_colour)
        return

    positions = list(range(len(trend)))
    scores = [p.score for p in trend]
    ax.plot(positions, scores, color=CHART_THEME.line_colour, linewidth=2.5, marker="o", markersize=3)
    ax.fill_between(positions, scores, 0, color=CHART_THEME.line_colour, alpha=0.08)
    ax.set_xticks(positions)
    ax.set_xticklabels([p.date for p in trend], rotation=30, ha="right")


def _draw_keywords(ax, keywords: List[Keyword], width_in: float) -> None:
    """Flow layout of keyword pills, heaviest first."""
    ax.set_axis_off()
    ax.set_title("Key Sentiment Driver Words", loc="left", fontsize=11, fontweight="bold", color="#1e293b")

    if not keywords:
        ax.text(0.5, 0.5, "No keywords", ha="center", va="center", transform=ax.transAxes,
                color=CHART_THEME.tick_colour)
        return

    x_in, row = 0.1, 0
    row_height = 0.2
    for kw in sorted(keywords, key=lambda k: k.value, reverse=True):
        tier = keyword_tier(kw.value)
        font_pt = tier.font_size * 0.55
        word_width_in = len(kw.text) * font_pt * 0.6 / 72 + 0.2
        if x_in + word_width_in > width_in and x_in > 0.1:
            x_in, row = 0.1, row + 1
        y = 0.85 - row * row_height
        if y < 0:
            break
        ax.text(
            x_in / width_in, y, kw.text,
            transform=ax.transAxes, va="center", fontsize=font_pt,
            fontweight="bold" if tier.name == "large" else "normal",
            color=SENTIMENT_THEME.text_colours[kw.sentiment],
            bbox=dict(boxstyle="round,pad=0.3", facecolor=SENTIMENT_THEME.background_colours[kw.sentiment],
                      edgecolor="none")
        )
        x_in += word_width_in + 0.1


def _draw_summary(ax, lines: List[tuple]) -> None:
    ax.set_axis_off()
    ax.set_ylim(0, len(lines))
    ax.set_xlim(0, 1)
    for i, (text, style) in enumerate(lines):
        y = len(lines) - i - 0.5
        if style == "heading":
            ax.text(0, y, text, fontsize=11, fontweight="bold", color="#312e81", va="center")
        elif style == "italic":
            ax.text(0, y, text, fontsize=8.5, fontstyle="italic", color="#334155", va="center")
        elif style.startswith("impact:"):
            impact = style.split(":", 1)[1]
            ax.text(0, y, text, fontsize=9, fontweight="bold", va="center",
                    color=IMPACT_THEME.badge_colours.get(impact, "#0f172a"))
        else:
            ax.text(0.02, y, text, fontsize=8.5, color="#334155", va="center")


def render_report_image(
    normalized: NormalizedAnalysisResult,
    dpi: int = 150,
    generated_on: Optional[date] = None
) -> Image.Image:
    """
    Rasterize the report container.

    Args:
        normalized: Report on the 0-100 scale
        dpi: Output resolution
        generated_on: Date shown in the header (defaults to today)

    Returns:
        RGB image, A4-width proportions, as tall as the content needs
    """
    generated_on = generated_on or date.today()
    lines = _summary_lines(normalized)
    text_height_in = max(1.0, len(lines) * TEXT_LINE_HEIGHT_IN)

    fig = Figure(figsize=(PAGE_WIDTH_IN, FIXED_SECTIONS_HEIGHT_IN + text_height_in),
                 facecolor=CHART_THEME.background_colour)
    grid = fig.add_gridspec(
        4, 4,
        height_ratios=[0.9, 3.0, 1.8, text_height_in],
        hspace=0.55, wspace=0.15,
        left=0.06, right=0.96, top=0.93, bottom=0.02
    )

    band = satisfaction_band(normalized.overall_stats.average_score)
    fig.suptitle(
        f"Executive Dashboard  |  generated {generated_on.isoformat()}  |  satisfaction {band}",
        x=0.06, ha="left", fontsize=13, fontweight="bold", color="#1e293b"
    )

    for col, card in enumerate(build_stat_cards(normalized)):
        _draw_card(fig.add_subplot(grid[0, col]), card.label, card.value)

    _draw_trend(fig.add_subplot(grid[1, :]), normalized.sentiment_trend)
    _draw_keywords(fig.add_subplot(grid[2, :]), normalized.keywords, PAGE_WIDTH_IN * 0.9)
    _draw_summary(fig.add_subplot(grid[3, :]), lines)

    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=dpi, facecolor=fig.get_facecolor())
    buffer.seek(0)

    image = Image.open(buffer)
    image.load()
    image = image.convert("RGB")

    logger.info(f"Rendered report image {image.width}x{image.height}px at {dpi} dpi")
    return image
