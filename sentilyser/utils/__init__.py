"""
Utility modules for Sentilyser.

Cross-cutting concerns:
- Scoring: Normalize sentiment scores to the 0-100 display scale
"""
