"""
LLM-backed services for Sentilyser.

- Schema contract and prompts
- Review Analysis Service (+ conformance pass)
- Insight Chat Service (streaming)
"""
