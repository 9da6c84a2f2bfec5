"""
Configuration settings for Sentilyser.

Centralized configuration for the analysis and chat services, exports and logging.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_ROOT = PROJECT_ROOT / "output"

# API Configuration
# First non-empty variable wins
GEMINI_API_KEY = (
    os.getenv("GEMINI_API_KEY")
    or os.getenv("GOOGLE_API_KEY")
    or os.getenv("API_KEY")
    or ""
)

# LLM Models
ANALYSIS_MODEL = os.getenv("SENTILYSER_ANALYSIS_MODEL", "gemini-2.0-flash")
CHAT_MODEL = os.getenv("SENTILYSER_CHAT_MODEL", "gemini-2.0-flash")

# Temperature settings
ANALYSIS_TEMPERATURE = 0.0
CHAT_TEMPERATURE = 0.7

# Analysis
CONFORM_PROVIDER_OUTPUT = True  # Clamp scores, rebalance shares, cap action items
ACTIONABLE_ITEM_COUNT = 3

# Exports
REPORT_FILENAME_PREFIX = "sentiment-report"
PDF_MARGIN_MM = 10
RENDER_DPI = 150

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "sentilyser.log"
