"""
Insight Chat Service.

Streams follow-up answers from Gemini, with the current normalized analysis
serialized into every user turn as context.
"""

import json
import logging
from typing import Iterator, List

import google.generativeai as genai

from sentilyser.exceptions import ConfigurationError, ProviderError
from sentilyser.models.analysis import NormalizedAnalysisResult
from sentilyser.models.chat import ChatMessage
from sentilyser.services.schema import CHAT_SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API Key is not configured."


def build_context_message(analysis: NormalizedAnalysisResult, user_text: str) -> str:
    """Prepend the serialized analysis to the user's question."""
    context = json.dumps(analysis.to_dict(), ensure_ascii=False)
    return f"Context of the current analysis: {context}. User asks: {user_text}"


class InsightChatService:
    """
    Streams chat replies from the Customer Sentiment Analyst persona.

    Stateless: the caller owns the conversation history and passes it on every turn.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.0-flash",
        temperature: float = 0.7
    ):
        """
        Initialize chat service.

        Args:
            api_key: Gemini API key (may be empty; checked on every call)
            model_name: Gemini model to use
            temperature: LLM temperature
        """
        self.api_key = api_key
        self.model_name = model_name
        self.temperature = temperature

        logger.info(f"Initialized InsightChatService with model={model_name}, temp={temperature}")

    def stream(self, history: List[ChatMessage], contextualized_message: str) -> Iterator[str]:
        """
        Stream reply fragments for one user turn.

        Args:
            history: Prior conversation, oldest first
            contextualized_message: User text with the analysis context prepended

        Yields:
            Text fragments in arrival order

        Raises:
            ConfigurationError: If no API key is configured
            ProviderError: If the request fails or the stream breaks mid-way
        """
        if not self.api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={"temperature": self.temperature},
            system_instruction=CHAT_SYSTEM_INSTRUCTION
        )

        contents = [m.to_content() for m in history]
        contents.append({"role": "user", "parts": [contextualized_message]})

        fragment_count = 0
        try:
            response = model.generate_content(contents, stream=True)
            for chunk in response:
                text = _chunk_text(chunk)
                if text:
                    fragment_count += 1
                    yield text
        except Exception as e:
            logger.error(f"Gemini chat stream failed after {fragment_count} fragments: {e}")
            raise ProviderError(
                "Sorry, I encountered an error. Please try again.",
                operation="chat",
                original_error=e
            ) from e

        logger.debug(f"Chat stream complete: {fragment_count} fragments")


def _chunk_text(chunk) -> str:
    """Text of a streamed chunk; chunks without text parts (e.g. the final one) give ''."""
    try:
        return chunk.text or ""
    except ValueError:
        return ""
