"""
Sentilyser Streamlit dashboard.

Run with:
    streamlit run sentilyser/dashboard/app.py
or:
    python main.py dashboard
"""

import logging
from typing import List

import streamlit as st

import config.settings as settings
from sentilyser.dashboard.charts import action_title_html, build_trend_chart, keyword_cloud_html
from sentilyser.exceptions import ExportError
from sentilyser.export.csv_export import build_csv_bytes
from sentilyser.export.files import report_filename
from sentilyser.export.pdf_export import build_report_pdf
from sentilyser.models.chat import ChatMessage
from sentilyser.report.chat_session import ChatSession
from sentilyser.report.view_model import ReportState, ReportViewModel
from sentilyser.sample_data import SAMPLE_REVIEWS
from sentilyser.services.analysis import ReviewAnalysisService
from sentilyser.services.chat import InsightChatService

logger = logging.getLogger(__name__)

BAND_ICONS = {"excellent": "🟢", "steady": "🟡", "critical": "🔴"}


def get_view_model() -> ReportViewModel:
    """One view model per browser session."""
    if "view_model" not in st.session_state:
        st.session_state.view_model = ReportViewModel(
            analysis_service=ReviewAnalysisService(
                api_key=settings.GEMINI_API_KEY,
                model_name=settings.ANALYSIS_MODEL,
                temperature=settings.ANALYSIS_TEMPERATURE,
                conform_output=settings.CONFORM_PROVIDER_OUTPUT,
                item_count=settings.ACTIONABLE_ITEM_COUNT
            ),
            chat_service=InsightChatService(
                api_key=settings.GEMINI_API_KEY,
                model_name=settings.CHAT_MODEL,
                temperature=settings.CHAT_TEMPERATURE
            )
        )
    return st.session_state.view_model


def use_sample_data():
    st.session_state.raw_text = SAMPLE_REVIEWS


def render_input(view_model: ReportViewModel):
    st.markdown("## Turn Feedback into Intelligence")
    st.write("Paste your customer reviews below to generate a deep-dive sentiment report.")

    raw_text = st.text_area(
        "Customer Reviews (Text Batch)",
        key="raw_text",
        height=260,
        placeholder="E.g. 2024-11-01: Great product!..."
    )

    col1, col2 = st.columns([3, 1])
    with col1:
        generate = st.button(
            "✨ Generate Report",
            type="primary",
            use_container_width=True,
            disabled=view_model.is_loading or not (raw_text or "").strip()
        )
    with col2:
        st.button("Try Sample Data", on_click=use_sample_data, use_container_width=True)

    if generate:
        with st.spinner("Analyzing..."):
            view_model.analyze(raw_text)
        st.rerun()

    if view_model.state is ReportState.FAILED and view_model.error:
        st.error(view_model.error, icon="⚠️")


def render_exports(view_model: ReportViewModel):
    normalized = view_model.normalized
    col1, col2, col3 = st.columns(3)

    with col1:
        try:
            pdf_bytes = _report_pdf(view_model)
        except ExportError as e:
            pdf_bytes = None
            st.error("Failed to export PDF. Please try again.")
            logger.error(f"PDF export failed: {e.to_dict()}")
        if pdf_bytes is not None:
            st.download_button("📄 Download PDF", pdf_bytes, file_name=report_filename("pdf"),
                               mime="application/pdf", use_container_width=True)
    with col2:
        try:
            st.download_button("CSV", build_csv_bytes(normalized), file_name=report_filename("csv"),
                               mime="text/csv", use_container_width=True)
        except ExportError as e:
            st.error("Failed to export CSV. Please try again.")
            logger.error(f"CSV export failed: {e.to_dict()}")
    with col3:
        st.button("↺ Reset", on_click=view_model.reset, use_container_width=True)


def _report_pdf(view_model: ReportViewModel) -> bytes:
    """Render the PDF once per report; reruns reuse the cached bytes."""
    cache_key = id(view_model.normalized)
    if st.session_state.get("pdf_key") != cache_key:
        st.session_state.pdf_bytes = build_report_pdf(view_model.normalized)
        st.session_state.pdf_key = cache_key
    return st.session_state.pdf_bytes


def render_report(view_model: ReportViewModel):
    normalized = view_model.normalized

    st.markdown("## Executive Dashboard")
    render_exports(view_model)

    band = view_model.satisfaction_band()
    for col, card in zip(st.columns(4), view_model.stat_cards()):
        with col:
            label = f"{BAND_ICONS[band]} {card.label}" if card.key == "satisfaction" else card.label
            st.metric(label, card.value)

    left, right = st.columns([2, 1])
    with left:
        st.markdown("### 📈 Satisfaction Trend (0-100)")
        st.plotly_chart(build_trend_chart(normalized.sentiment_trend), use_container_width=True)

        st.markdown("### ☁️ Key Sentiment Driver Words")
        st.markdown(keyword_cloud_html(normalized.keywords), unsafe_allow_html=True)

        with st.expander("📖 Metric Definitions"):
            st.markdown(
                "**Satisfaction Index**: a score from 0-100 summarizing overall customer sentiment. "
                "Scores above 75 are excellent, while below 40 require immediate attention.\n\n"
                "**Sentiment Share**: the percentage of reviews categorized as Positive, Neutral, "
                "or Negative. These three metrics always sum to 100%."
            )

    with right:
        st.markdown("### 🤖 AI Executive Summary")
        st.markdown(f"> *{normalized.summary}*")
        st.markdown(f"**Top {len(normalized.actionable_items)} Action Areas**")
        for item in normalized.actionable_items:
            st.markdown(action_title_html(item.title, item.impact), unsafe_allow_html=True)
            st.caption(item.description)

    if view_model.chat is not None:
        render_chat(view_model.chat)


def _draw_messages(placeholder, messages: List[ChatMessage]):
    with placeholder.container():
        for message in messages:
            with st.chat_message("user" if message.role == "user" else "assistant"):
                if message.is_thinking:
                    st.caption("🧠 Deep Analysis...")
                st.markdown(message.text or ("Thinking deeply..." if message.is_thinking else ""))


def render_chat(chat: ChatSession):
    st.markdown("---")
    st.markdown("### 💬 Insight Assistant")

    placeholder = st.empty()
    prompt = st.chat_input("Ask for deeper insights...", disabled=chat.is_streaming)

    if prompt:
        for snapshot in chat.send(prompt):
            _draw_messages(placeholder, snapshot)
    else:
        _draw_messages(placeholder, chat.messages)


def main():
    st.set_page_config(page_title="SentilyserPro", page_icon="📈", layout="wide")
    st.markdown("# Sentilyser**Pro**")

    view_model = get_view_model()

    if view_model.state is ReportState.READY:
        render_report(view_model)
    else:
        render_input(view_model)


if __name__ == "__main__":
    main()
