"""
Chat session over the current report.

Owns the message list for one open report and merges streamed reply
fragments into it through an explicit accumulator.
"""

import logging
from typing import Iterator, List, Optional

from sentilyser.exceptions import SentilyserError
from sentilyser.models.analysis import NormalizedAnalysisResult
from sentilyser.models.chat import ChatMessage
from sentilyser.services.chat import InsightChatService, build_context_message

logger = logging.getLogger(__name__)

GREETING = "Hello! I am your AI Insight Assistant. Ask me anything about your customer sentiment report."


class StreamAccumulator:
    """
    Running text of the reply currently being streamed.
    Owned by a single send() call.
    """

    def __init__(self):
        self.text = ""
        self.fragment_count = 0

    def add(self, fragment: str) -> ChatMessage:
        """Append a fragment and return a snapshot of the reply so far."""
        self.text += fragment
        self.fragment_count += 1
        return self.snapshot()

    def snapshot(self) -> ChatMessage:
        return ChatMessage(role="model", text=self.text, is_thinking=False)


class ChatSession:
    """
    Conversation with the insight assistant about one analysis.

    `messages` is replaced (never mutated) on every change, so each list
    yielded by send() stays a valid snapshot.
    """

    def __init__(self, service: InsightChatService, analysis: NormalizedAnalysisResult):
        """
        Args:
            service: Streaming chat service
            analysis: Normalized report used as context on every turn
        """
        self.service = service
        self.analysis = analysis
        self.messages: List[ChatMessage] = [ChatMessage(role="model", text=GREETING)]
        self.is_streaming = False
        self.last_error: Optional[SentilyserError] = None

    def send(self, user_text: str) -> Iterator[List[ChatMessage]]:
        """
        Send one user turn and stream the reply.

        Yields the full message list after the thinking placeholder is added
        and again after every fragment. Blank input, or a send while another
        stream is active, yields nothing. Checks run when iteration starts.
        """
        if not user_text or not user_text.strip():
            return
        if self.is_streaming:
            logger.warning("Chat stream already in flight, ignoring new message")
            return

        self.is_streaming = True
        try:
            history = self._history()
            self.messages = self.messages + [
                ChatMessage(role="user", text=user_text),
                ChatMessage(role="model", text="", is_thinking=True)
            ]
            yield self.messages

            accumulator = StreamAccumulator()
            contextualized = build_context_message(self.analysis, user_text)
            try:
                for fragment in self.service.stream(history, contextualized):
                    self._replace_last(accumulator.add(fragment))
                    yield self.messages
            except SentilyserError as e:
                logger.error(f"Chat turn failed: {e}")
                self._fail(e)
                yield self.messages
                return

            if accumulator.fragment_count == 0:
                # Provider closed the stream without text
                self._replace_last(accumulator.snapshot())
                yield self.messages

            self.last_error = None
            logger.info(f"Chat reply complete: {len(accumulator.text)} chars in {accumulator.fragment_count} fragments")
        finally:
            self.is_streaming = False

    def reset(self) -> None:
        """Clear the conversation back to the greeting."""
        self.messages = [ChatMessage(role="model", text=GREETING)]
        self.last_error = None

    def _history(self) -> List[ChatMessage]:
        """Conversation sent upstream: no placeholders, no empty replies, no leading local greeting."""
        history = [m for m in self.messages if not m.is_thinking and m.text]
        while history and history[0].role == "model":
            history.pop(0)
        return history

    def _replace_last(self, message: ChatMessage) -> None:
        self.messages = self.messages[:-1] + [message]

    def _fail(self, error: SentilyserError) -> None:
        self.last_error = error
        reply = ChatMessage(role="model", text=error.message)
        if self.messages and self.messages[-1].is_thinking:
            self._replace_last(reply)
        else:
            self.messages = self.messages + [reply]
