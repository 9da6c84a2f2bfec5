"""
Unit tests for the Report View Model.

Note: The analysis service is a MagicMock; no Gemini calls are made.
"""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from sentilyser.exceptions import ConfigurationError, ProviderError
from sentilyser.report.chat_session import ChatSession
from sentilyser.report.view_model import (
    GENERIC_ERROR_MESSAGE,
    ReportState,
    ReportViewModel,
    format_index,
    format_share,
)


def _view_model(result=None, error=None, chat_service=None):
    service = MagicMock()
    if error is not None:
        service.analyze.side_effect = error
    else:
        service.analyze.return_value = result
    return ReportViewModel(service, chat_service=chat_service), service


def test_initial_state_is_idle():
    """Test a new view model has no report and no error."""
    vm, _ = _view_model()

    assert vm.state is ReportState.IDLE
    assert vm.result is None
    assert vm.normalized is None
    assert vm.stat_cards() == []
    assert vm.satisfaction_band() is None


def test_successful_analysis(analysis_result):
    """Test a successful analysis is normalized and summarized as stat cards."""
    vm, service = _view_model(result=analysis_result)

    assert vm.analyze("2024-10-01: Great product!") is True

    service.analyze.assert_called_once_with("2024-10-01: Great product!")
    assert vm.state is ReportState.READY
    assert vm.error is None
    assert vm.normalized.overall_stats.average_score == pytest.approx(65.0)
    assert [(c.key, c.value) for c in vm.stat_cards()] == [
        ("satisfaction", "65.0%"),
        ("positive", "50%"),
        ("neutral", "30%"),
        ("negative", "20%"),
    ]
    assert vm.satisfaction_band() == "steady"


def test_source_result_left_unmodified(analysis_result):
    """Test normalization never rewrites the provider snapshot."""
    vm, _ = _view_model(result=analysis_result)

    vm.analyze("reviews")

    assert vm.result is analysis_result
    assert vm.result.overall_stats.average_score == 0.3
    assert vm.normalized.sentiment_trend[1].score == pytest.approx(20.0)


def test_known_failure_shows_error_message():
    """Test a SentilyserError message is surfaced as-is."""
    vm, _ = _view_model(error=ConfigurationError("API Key is not configured."))

    vm.analyze("reviews")

    assert vm.state is ReportState.FAILED
    assert vm.error == "API Key is not configured."
    assert vm.result is None


def test_unexpected_failure_shows_generic_message():
    """Test an unexpected exception becomes the generic analysis error."""
    vm, _ = _view_model(error=RuntimeError("boom"))

    vm.analyze("reviews")

    assert vm.state is ReportState.FAILED
    assert vm.error == GENERIC_ERROR_MESSAGE


def test_failure_clears_previous_report(analysis_result):
    """Test a failed re-analysis does not leave the old report displayed."""
    vm, service = _view_model(result=analysis_result)
    vm.analyze("reviews")

    service.analyze.side_effect = ProviderError("Failed to analyze data.", operation="analyze")
    vm.analyze("more reviews")

    assert vm.state is ReportState.FAILED
    assert vm.normalized is None


def test_blank_text_is_ignored():
    """Test whitespace-only input issues no request."""
    vm, service = _view_model()

    assert vm.analyze("  \n ") is False
    service.analyze.assert_not_called()
    assert vm.state is ReportState.IDLE


def test_single_flight(analysis_result):
    """Test a request issued while another is loading is ignored."""
    vm, service = _view_model()
    nested = []

    def reentrant(raw_text):
        assert vm.is_loading
        nested.append(vm.analyze("second"))
        return analysis_result

    service.analyze.side_effect = reentrant

    assert vm.analyze("first") is True
    assert nested == [False]
    assert service.analyze.call_count == 1
    assert vm.state is ReportState.READY


def test_new_result_replaces_old(analysis_result):
    """Test a second analysis replaces the report wholesale."""
    vm, service = _view_model(result=analysis_result)
    vm.analyze("reviews")

    second = replace(analysis_result, summary="Different summary")
    service.analyze.return_value = second
    vm.analyze("other reviews")

    assert vm.result is second
    assert vm.normalized.summary == "Different summary"


def test_chat_session_opens_with_report(analysis_result):
    """Test a chat session bound to the normalized report is created on success."""
    vm, _ = _view_model(result=analysis_result, chat_service=MagicMock())

    vm.analyze("reviews")

    assert isinstance(vm.chat, ChatSession)
    assert vm.chat.analysis is vm.normalized


def test_reset(analysis_result):
    """Test reset returns to IDLE and drops the report and chat."""
    vm, _ = _view_model(result=analysis_result, chat_service=MagicMock())
    vm.analyze("reviews")

    vm.reset()

    assert vm.state is ReportState.IDLE
    assert vm.result is None
    assert vm.chat is None


def test_formatters():
    assert format_share(50) == "50%"
    assert format_share(33.3) == "33.3%"
    assert format_index(65) == "65.0%"
    assert format_index(100) == "100.0%"


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
