"""
Review Analysis Service.

Sends a batch of raw review text to Gemini with a strict response schema
and parses the returned JSON into an AnalysisResult.
"""

import json
import logging
from datetime import date
from typing import Optional

import google.generativeai as genai

from sentilyser.exceptions import ConfigurationError, ProviderError
from sentilyser.models.analysis import AnalysisResult
from sentilyser.services.conformance import conform
from sentilyser.services.schema import RESPONSE_SCHEMA, build_analysis_prompt

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "API Key is not configured. Please set the GEMINI_API_KEY environment variable."
)


class ReviewAnalysisService:
    """
    Turns raw review text into a structured sentiment report.

    Correctness of the result shape is pushed into the provider contract
    (response schema + prompt rules). One call per analysis: no retries, no caching.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.0-flash",
        temperature: float = 0.0,
        conform_output: bool = True,
        item_count: int = 3
    ):
        """
        Initialize analysis service.

        Args:
            api_key: Gemini API key (may be empty; checked on every call)
            model_name: Gemini model to use
            temperature: LLM temperature
            conform_output: Repair scores, shares and action items that break the contract
            item_count: Number of actionable items requested from the model
        """
        self.api_key = api_key
        self.model_name = model_name
        self.temperature = temperature
        self.conform_output = conform_output
        self.item_count = item_count

        logger.info(f"Initialized ReviewAnalysisService with model={model_name}, temp={temperature}")

    def analyze(self, raw_text: str, today: Optional[date] = None) -> AnalysisResult:
        """
        Analyze a batch of reviews.

        Args:
            raw_text: Reviews to analyze
            today: Anchor date for undated reviews (defaults to the current date)

        Returns:
            Parsed AnalysisResult

        Raises:
            ValueError: If raw_text is empty or whitespace-only
            ConfigurationError: If no API key is configured
            ProviderError: If the call fails or the response does not match the schema
        """
        if not raw_text or not raw_text.strip():
            raise ValueError("Cannot analyze empty review text")

        model = self._build_model()
        prompt = build_analysis_prompt(raw_text, today=today, item_count=self.item_count)

        logger.info(f"Requesting analysis for {len(raw_text.strip().splitlines())} review lines")

        try:
            response = model.generate_content(prompt)
            response_text = response.text
        except Exception as e:
            logger.error(f"Gemini analysis request failed: {e}")
            raise ProviderError(
                "Failed to analyze data. Please check your API key and try again.",
                operation="analyze",
                original_error=e
            ) from e

        result = self._parse_llm_response(response_text)

        if self.conform_output:
            result = conform(result, item_count=self.item_count)

        logger.info(
            f"Analysis complete: {len(result.sentiment_trend)} trend points, "
            f"{len(result.keywords)} keywords, {len(result.actionable_items)} actionable items"
        )
        return result

    def _build_model(self):
        """Configure Gemini and build a schema-constrained model."""
        if not self.api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={
                "temperature": self.temperature,
                "response_mime_type": "application/json",
                "response_schema": RESPONSE_SCHEMA
            }
        )

    def _parse_llm_response(self, response_text: str) -> AnalysisResult:
        """
        Parse LLM JSON response into an AnalysisResult.

        Raises:
            ProviderError: If the response is not valid JSON or does not match the schema
        """
        try:
            data = json.loads(response_text or "")
            return AnalysisResult.from_dict(data)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM JSON response: {e}")
            raise ProviderError(
                "The analysis service returned an unreadable response. Please try again.",
                operation="analyze",
                original_error=e
            ) from e
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"LLM response does not match the analysis schema: {e}")
            raise ProviderError(
                "The analysis service returned an incomplete report. Please try again.",
                operation="analyze",
                original_error=e
            ) from e
