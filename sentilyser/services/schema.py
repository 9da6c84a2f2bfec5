"""
Response schema and prompts for the analysis contract.

The schema is declared on the Gemini generation config so the provider
constrains its output to the AnalysisResult shape.
"""

from datetime import date
from typing import Optional

from sentilyser.models.analysis import IMPACT_LEVELS, KEYWORD_SENTIMENTS


def _enum(values) -> dict:
    return {"type": "STRING", "format": "enum", "enum": list(values)}


RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "sentimentTrend": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "date": {"type": "STRING"},
                    "score": {"type": "NUMBER"},
                    "label": {"type": "STRING"}
                },
                "required": ["date", "score", "label"]
            }
        },
        "keywords": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "text": {"type": "STRING"},
                    "value": {"type": "NUMBER"},
                    "sentiment": _enum(KEYWORD_SENTIMENTS)
                },
                "required": ["text", "value", "sentiment"]
            }
        },
        "actionableItems": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "impact": _enum(IMPACT_LEVELS)
                },
                "required": ["title", "description", "impact"]
            }
        },
        "overallStats": {
            "type": "OBJECT",
            "properties": {
                "positive": {"type": "NUMBER"},
                "neutral": {"type": "NUMBER"},
                "negative": {"type": "NUMBER"},
                "averageScore": {"type": "NUMBER"}
            },
            "required": ["positive", "neutral", "negative", "averageScore"]
        }
    },
    "required": ["summary", "sentimentTrend", "keywords", "actionableItems", "overallStats"]
}


ANALYSIS_PROMPT_TEMPLATE = """Analyze the following customer reviews and provide a detailed sentiment report in JSON format.
Today's date is {today}.
The reviews may or may not have dates. If they don't have dates, assign a logical chronological sequence of dates counting backwards from today.

CRITICAL RULES:
1. Overall stats (positive, neutral, negative) MUST sum exactly to 100.
2. Score for every trend point MUST be between -1.0 and 1.0.
3. Average score MUST be the mean of all sentiment scores (-1.0 to 1.0).
4. Provide EXACTLY {item_count} actionable items, sorted by urgency (most urgent first).
5. Each actionable item's impact MUST be one of: High, Medium, Low.

Reviews:
{reviews}
"""


CHAT_SYSTEM_INSTRUCTION = (
    "You are a Customer Sentiment Analyst expert. Analyze trends, suggest complex business "
    "strategies, and answer questions based on customer feedback data. "
    "Be professional, data-driven, and insightful."
)


def build_analysis_prompt(raw_text: str, today: Optional[date] = None, item_count: int = 3) -> str:
    """
    Construct the analysis prompt for a batch of raw reviews.

    Args:
        raw_text: Reviews, one per line, optionally prefixed with a date
        today: Anchor date for synthesized dates (defaults to the current date)
        item_count: Number of actionable items to request
    """
    today = today or date.today()
    return ANALYSIS_PROMPT_TEMPLATE.format(
        today=today.isoformat(),
        item_count=item_count,
        reviews=raw_text.strip()
    )
