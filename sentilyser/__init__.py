"""
Sentilyser - LLM-powered customer sentiment dashboard.
"""

__version__ = "1.0.0"
