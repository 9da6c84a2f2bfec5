"""
Sentilyser - Customer Sentiment Intelligence

CLI entry point for analyzing review batches, exporting reports,
chatting with the insight assistant and launching the dashboard.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import config.settings as settings
from sentilyser.exceptions import SentilyserError
from sentilyser.export.csv_export import export_csv
from sentilyser.export.pdf_export import export_pdf
from sentilyser.report.view_model import ReportState, ReportViewModel
from sentilyser.sample_data import SAMPLE_REVIEWS
from sentilyser.services.analysis import ReviewAnalysisService
from sentilyser.services.chat import InsightChatService

DASHBOARD_SCRIPT = Path(__file__).parent / "sentilyser" / "dashboard" / "app.py"


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_view_model() -> ReportViewModel:
    """Wire services from settings into a fresh view model."""
    return ReportViewModel(
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


def read_reviews(args) -> str:
    if args.sample:
        return SAMPLE_REVIEWS
    with open(args.input, 'r', encoding='utf-8') as f:
        return f.read()


def print_report(view_model: ReportViewModel):
    normalized = view_model.normalized
    print("=" * 60)
    print("Executive Dashboard")
    print("=" * 60)
    for card in view_model.stat_cards():
        print(f"{card.label:<20} {card.value}")
    print(f"{'Satisfaction band':<20} {view_model.satisfaction_band()}")
    print()
    print("Satisfaction Trend (0-100):")
    for point in normalized.sentiment_trend:
        print(f"  {point.date}  {point.score:5.1f}  {point.label}")
    print()
    print("AI Executive Summary:")
    print(f"  \"{normalized.summary}\"")
    print()
    print(f"Top {len(normalized.actionable_items)} Action Areas:")
    for idx, item in enumerate(normalized.actionable_items, start=1):
        print(f"  {idx}. [{item.impact}] {item.title}: {item.description}")
    print("=" * 60)


def run_analysis(args, logger) -> ReportViewModel:
    """Analyze the input; exits with code 1 on failure."""
    view_model = build_view_model()
    raw_text = read_reviews(args)

    if not raw_text.strip():
        logger.error("Review input is empty")
        print("\n❌ Review input is empty")
        sys.exit(1)

    logger.info("Running sentiment analysis...")
    view_model.analyze(raw_text)

    if view_model.state is not ReportState.READY:
        print(f"\n❌ Analysis failed: {view_model.error}")
        sys.exit(1)

    return view_model


def cmd_analyze(args, logger):
    view_model = run_analysis(args, logger)
    print_report(view_model)

    try:
        if args.csv:
            path = export_csv(view_model.normalized, args.output_dir)
            print(f"CSV report: {path}")
        if args.pdf:
            path = export_pdf(view_model.normalized, args.output_dir)
            print(f"PDF report: {path}")
    except SentilyserError as e:
        logger.error(f"Export failed: {e.to_dict()}")
        print(f"\n❌ {e.message}")
        sys.exit(1)


def cmd_chat(args, logger):
    view_model = run_analysis(args, logger)
    print_report(view_model)

    chat = view_model.chat
    print(f"\n🤖 {chat.messages[0].text}")
    print("(empty line or Ctrl-D to quit)\n")

    while True:
        try:
            question = input("you> ")
        except EOFError:
            break
        if not question.strip():
            break

        printed = ""
        for snapshot in chat.send(question):
            reply = snapshot[-1]
            if reply.is_thinking:
                print("🧠 ", end="", flush=True)
                continue
            if reply.text.startswith(printed):
                print(reply.text[len(printed):], end="", flush=True)
            else:
                # A new message (e.g. an error reply) follows a partial answer
                print("\n" + reply.text, end="", flush=True)
            printed = reply.text
        print("\n")


def cmd_dashboard(args, logger):
    from streamlit.web import cli as stcli

    logger.info(f"Launching dashboard from {DASHBOARD_SCRIPT}")
    sys.argv = ["streamlit", "run", str(DASHBOARD_SCRIPT)]
    sys.exit(stcli.main())


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sentilyser - LLM-powered customer sentiment reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze the bundled sample reviews and export both reports
  python main.py analyze --sample --csv --pdf

  # Analyze a text file of reviews (one per line, optional YYYY-MM-DD: prefix)
  python main.py analyze --input reviews.txt --csv --output-dir reports

  # Ask follow-up questions about an analysis
  python main.py chat --input reviews.txt

  # Launch the browser dashboard
  python main.py dashboard

Note: Set GEMINI_API_KEY environment variable before running.
        """
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("analyze", "Analyze reviews and print the report"),
                            ("chat", "Analyze reviews, then chat about the report")):
        sub = subparsers.add_parser(name, help=help_text)
        source = sub.add_mutually_exclusive_group(required=True)
        source.add_argument("--input", help="Text file with one review per line")
        source.add_argument("--sample", action="store_true", help="Use the bundled sample reviews")
        if name == "analyze":
            sub.add_argument("--csv", action="store_true", help="Export the report as CSV")
            sub.add_argument("--pdf", action="store_true", help="Export the report as PDF")
            sub.add_argument(
                "--output-dir",
                default=str(settings.OUTPUT_ROOT),
                help=f"Export directory (default: {settings.OUTPUT_ROOT})"
            )

    subparsers.add_parser("dashboard", help="Launch the Streamlit dashboard")

    args = parser.parse_args()

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if args.command != "dashboard" and getattr(args, "input", None) and not os.path.exists(args.input):
        parser.error(f"Input file not found: {args.input}")

    commands = {
        "analyze": cmd_analyze,
        "chat": cmd_chat,
        "dashboard": cmd_dashboard,
    }

    try:
        commands[args.command](args, logger)
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\n⚠️  Interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Sentilyser failed: {e}", exc_info=True)
        print(f"\n❌ Sentilyser failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
