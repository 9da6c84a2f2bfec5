"""
Data models for Sentilyser.

- Analysis result (and its normalized display view)
- Chat message
"""
