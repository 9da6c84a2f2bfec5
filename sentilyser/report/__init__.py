"""
Report state for Sentilyser.

- Report View Model (analysis state machine + normalized view)
- Chat Session (message list + stream accumulator)
"""
