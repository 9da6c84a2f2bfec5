"""
Report View Model.

Holds the current analysis, its loading / error state and the derived
0-100 view consumed by the dashboard, the exports and the chat session.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from sentilyser.exceptions import SentilyserError
from sentilyser.models.analysis import AnalysisResult, NormalizedAnalysisResult
from sentilyser.report.chat_session import ChatSession
from sentilyser.services.analysis import ReviewAnalysisService
from sentilyser.services.chat import InsightChatService
from sentilyser.utils.scoring import normalize, satisfaction_band

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed to analyze data. Please check your API key and try again."


class ReportState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class StatCard:
    """A headline metric as displayed on the dashboard."""
    key: str
    label: str
    value: str


def format_share(value: float) -> str:
    """Share percentage as displayed: 50 -> '50%', 33.3 -> '33.3%'."""
    return f"{float(value):g}%"


def format_index(value: float) -> str:
    """Satisfaction Index as displayed, one decimal: 65 -> '65.0%'."""
    return f"{float(value):.1f}%"


def build_stat_cards(normalized: NormalizedAnalysisResult) -> List[StatCard]:
    """Satisfaction Index plus the three sentiment shares."""
    stats = normalized.overall_stats
    return [
        StatCard("satisfaction", "Satisfaction Index", format_index(stats.average_score)),
        StatCard("positive", "Positive Share", format_share(stats.positive)),
        StatCard("neutral", "Neutral Share", format_share(stats.neutral)),
        StatCard("negative", "Negative Share", format_share(stats.negative)),
    ]


class ReportViewModel:
    """
    State machine for one dashboard session.

    IDLE -> LOADING -> READY | FAILED; READY/FAILED -> IDLE on reset.
    Only one analysis may be in flight; READY always carries a normalized result.
    """

    def __init__(
        self,
        analysis_service: ReviewAnalysisService,
        chat_service: Optional[InsightChatService] = None
    ):
        """
        Args:
            analysis_service: Service that produces AnalysisResult snapshots
            chat_service: Optional streaming service; a chat session opens with each report
        """
        self.analysis_service = analysis_service
        self.chat_service = chat_service
        self.state = ReportState.IDLE
        self.error: Optional[str] = None
        self.chat: Optional[ChatSession] = None
        self._result: Optional[AnalysisResult] = None
        self._normalized: Optional[NormalizedAnalysisResult] = None

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    @property
    def normalized(self) -> Optional[NormalizedAnalysisResult]:
        return self._normalized

    @property
    def is_loading(self) -> bool:
        return self.state is ReportState.LOADING

    def analyze(self, raw_text: str) -> bool:
        """
        Run one analysis request.

        Args:
            raw_text: Reviews pasted by the user

        Returns:
            True if a request was issued, False if it was ignored
            (blank input, or another analysis already in flight)
        """
        if not raw_text or not raw_text.strip():
            logger.debug("Ignoring analyze request with empty text")
            return False
        if self.is_loading:
            logger.warning("Analysis already in flight, ignoring new request")
            return False

        self.state = ReportState.LOADING
        self.error = None
        outcome = ReportState.FAILED
        try:
            result = self.analysis_service.analyze(raw_text)
            self._set_result(result)
            outcome = ReportState.READY
        except SentilyserError as e:
            logger.error(f"Analysis failed: {e.to_dict()}")
            self._fail(e.message)
        except Exception as e:
            logger.error(f"Analysis failed unexpectedly: {e}", exc_info=True)
            self._fail(GENERIC_ERROR_MESSAGE)
        finally:
            self.state = outcome

        return True

    def reset(self) -> None:
        """Discard the report, its error and its conversation."""
        self._set_result(None)
        self.error = None
        self.state = ReportState.IDLE
        logger.info("Report reset")

    def stat_cards(self) -> List[StatCard]:
        if self._normalized is None:
            return []
        return build_stat_cards(self._normalized)

    def satisfaction_band(self) -> Optional[str]:
        if self._normalized is None:
            return None
        return satisfaction_band(self._normalized.overall_stats.average_score)

    def _set_result(self, result: Optional[AnalysisResult]) -> None:
        """Replace the result wholesale and recompute everything derived from it."""
        self._result = result
        self._normalized = normalize(result) if result is not None else None

        if self._normalized is not None and self.chat_service is not None:
            self.chat = ChatSession(self.chat_service, self._normalized)
        else:
            self.chat = None

    def _fail(self, message: str) -> None:
        self._set_result(None)
        self.error = message
