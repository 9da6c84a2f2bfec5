"""
Presentation layer for Sentilyser.

- Theme: colours and keyword size tiers
- Charts: Plotly trend chart, keyword cloud and badge HTML
- App: Streamlit dashboard (imported only by `streamlit run`)
"""
